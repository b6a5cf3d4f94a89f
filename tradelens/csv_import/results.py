"""
Result types produced by the CSV import pipeline.
"""

from collections import abc
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import pandas as pd

from ..logging.error_codes import ErrorCode
from .fields import FIELD_KEYS

RawRow = Dict[str, Any]


@dataclass(frozen=True)
class ImportIssue:
    """
    One per-field anomaly found while processing a row.

    Issues stay structured until they are shown to a user; str() renders the
    row-indexed audit line.
    """
    row_index: int
    field: str
    reason: str
    error_code: Optional[ErrorCode] = None

    @property
    def row_number(self) -> int:
        """1-based row number as shown to users."""
        return self.row_index + 1

    def __str__(self) -> str:
        return f"Row {self.row_number}: {self.reason}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'row': self.row_number,
            'field': self.field,
            'reason': self.reason,
            'error_code': self.error_code.code if self.error_code else None,
        }


@dataclass
class CSVProcessResult:
    """Outcome of reading a CSV source: headers and rows, or an error."""
    headers: Optional[List[str]] = None
    data: Optional[List[RawRow]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True when the source was read without a fatal error."""
        return self.error is None

    @property
    def row_count(self) -> int:
        return len(self.data) if self.data else 0


class ProcessedRow(abc.Mapping):
    """
    Normalized trade record keyed by canonical field.

    Read-only once built. `flagged` lists the field keys that failed
    coercion or needed a fallback (rendered as `_warnings` by to_dict()).
    """

    __slots__ = ('_values', '_flagged')

    def __init__(self, values: Mapping[str, Any], flagged: Tuple[str, ...] = ()):
        self._values = MappingProxyType(dict(values))
        self._flagged = tuple(flagged)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ProcessedRow({dict(self._values)!r}, flagged={self._flagged!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ProcessedRow):
            return dict(self._values) == dict(other._values) and self._flagged == other._flagged
        if isinstance(other, abc.Mapping):
            return dict(self._values) == dict(other)
        return NotImplemented

    __hash__ = None

    @property
    def flagged(self) -> Tuple[str, ...]:
        return self._flagged

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with a `_warnings` list, ready for persistence."""
        data = dict(self._values)
        data['_warnings'] = list(self._flagged)
        return data


@dataclass
class ProcessedDataResult:
    """
    Terminal artifact of the pipeline.

    Holds exactly one ProcessedRow per input row plus the structured issues
    found along the way.
    """
    data: List[ProcessedRow] = field(default_factory=list)
    issues: List[ImportIssue] = field(default_factory=list)

    @property
    def warnings(self) -> List[str]:
        """Human-readable audit trail, one line per anomaly."""
        return [str(issue) for issue in self.issues]

    @property
    def row_count(self) -> int:
        return len(self.data)

    def issues_for_row(self, row_index: int) -> List[ImportIssue]:
        return [issue for issue in self.issues if issue.row_index == row_index]

    def to_records(self) -> List[Dict[str, Any]]:
        return [row.to_dict() for row in self.data]

    def to_dataframe(self) -> pd.DataFrame:
        """
        Processed rows as a DataFrame.

        Canonical fields come first in schema order; fields absent from a row
        are NaN/None. The `_warnings` column keeps the flagged field keys.
        """
        records = self.to_records()
        present = {key for record in records for key in record}
        columns = [key for key in FIELD_KEYS if key in present] + ['_warnings']
        return pd.DataFrame.from_records(records, columns=columns)
