"""
Formatted CSV export of processed trades.

Writes the fixed TradeLens column layout so the file can be re-imported or
bulk-loaded without a mapping step.
"""

from datetime import date
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

import pandas as pd

from ..logging import get_logger, log_exception, ErrorCode
from ..utils import ensure_dir
from .fields import EXPORT_COLUMNS
from .numbers import is_blank

logger = get_logger('export')


def _cell(value: Any) -> Any:
    return '' if is_blank(value) else value


def build_export_frame(rows: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """
    Project rows onto EXPORT_COLUMNS.

    Missing or blank cells become empty strings; other values are kept as-is
    (zero stays zero).
    """
    records = [
        {column: _cell(row.get(column)) for column in EXPORT_COLUMNS}
        for row in rows
    ]
    return pd.DataFrame.from_records(records, columns=list(EXPORT_COLUMNS))


def export_formatted_csv(
    rows: Iterable[Mapping[str, Any]],
    path: Optional[Union[str, Path]] = None,
) -> str:
    """
    Serialize rows to CSV text with the fixed export column order.

    Args:
        rows: Processed rows (ProcessedRow or plain dicts)
        path: Optional file to write the CSV to

    Returns:
        The CSV text (header line included)

    Raises:
        OSError: If the file cannot be written
    """
    frame = build_export_frame(rows)
    csv_text = frame.to_csv(index=False, lineterminator='\n')

    if path is not None:
        path = Path(path)
        try:
            ensure_dir(path.parent)
            path.write_text(csv_text, encoding='utf-8')
        except OSError as e:
            log_exception(logger, f"Failed to write export to {path}", exc=e,
                          error_code=ErrorCode.IO_WRITE_ERROR)
            raise
        logger.info(f"Exported {len(frame)} rows to {path}")

    return csv_text


def default_export_filename(day: Optional[date] = None) -> str:
    """File name used for downloads, e.g. tradelens_formatted_2024-01-15.csv."""
    day = day or date.today()
    return f"tradelens_formatted_{day.isoformat()}.csv"
