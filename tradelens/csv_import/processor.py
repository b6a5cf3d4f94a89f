"""
Row coercion: raw CSV rows -> normalized trade records.

Each mapped cell is coerced by the function registered for its field's
FieldKind. Anomalies never stop processing; they are collected as
ImportIssues and every input row yields exactly one ProcessedRow.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from ..config.import_config import ImportConfig
from ..logging import get_logger, log_with_context, ErrorCode
from .fields import DEFAULT_ACTION, FIELDS_BY_KEY, VALID_ACTIONS, FieldKind
from .market_type import detect_market_type
from .multiplier import DEFAULT_MULTIPLIER, calculate_contract_multiplier
from .numbers import is_blank, parse_high_precision_number
from .results import ImportIssue, ProcessedDataResult, ProcessedRow, RawRow
from .timestamps import format_timestamp

logger = get_logger('import')

# Fields whose presence triggers contract multiplier derivation
_MULTIPLIER_INPUTS = ('profit', 'entry_price', 'exit_price', 'quantity', 'action')


@dataclass
class _RowState:
    """Mutable working state while one row is being coerced."""
    index: int
    values: Dict[str, Any] = field(default_factory=dict)
    flagged: List[str] = field(default_factory=list)
    issues: List[ImportIssue] = field(default_factory=list)

    def flag(self, field_key: str) -> None:
        if field_key not in self.flagged:
            self.flagged.append(field_key)

    def report(self, field_key: str, reason: str, error_code: ErrorCode) -> None:
        self.flag(field_key)
        self.issues.append(ImportIssue(self.index, field_key, reason, error_code))


Coercer = Callable[[_RowState, str, Any, ImportConfig], Any]


def _coerce_timestamp(state: _RowState, key: str, raw: Any, config: ImportConfig) -> Optional[str]:
    value = format_timestamp(raw, day_first=config.day_first)
    if value is None and not is_blank(raw):
        state.report(key, f'Could not parse {key} value "{raw}"', ErrorCode.UNPARSEABLE_TIMESTAMP)
    return value


def _coerce_action(state: _RowState, key: str, raw: Any, config: ImportConfig) -> str:
    value = '' if is_blank(raw) else str(raw).strip().lower()
    if value not in VALID_ACTIONS:
        state.report(
            key, f'Invalid action "{value}", defaulting to "{DEFAULT_ACTION}"', ErrorCode.INVALID_ACTION
        )
        return DEFAULT_ACTION
    return value


def _coerce_number(state: _RowState, key: str, raw: Any, config: ImportConfig) -> Optional[float]:
    value = parse_high_precision_number(raw)
    if value is None:
        if is_blank(raw):
            state.flag(key)
        else:
            state.report(key, f'Could not parse {key} value "{raw}"', ErrorCode.UNPARSEABLE_NUMBER)
    return value


def _coerce_instrument(state: _RowState, key: str, raw: Any, config: ImportConfig) -> Optional[str]:
    if is_blank(raw):
        state.report(key, 'Missing instrument', ErrorCode.MISSING_INSTRUMENT)
        return None
    return str(raw).strip()


def _coerce_text(state: _RowState, key: str, raw: Any, config: ImportConfig) -> Optional[str]:
    if is_blank(raw):
        return None
    return str(raw).strip()


COERCERS: Mapping[FieldKind, Coercer] = {
    FieldKind.TIMESTAMP: _coerce_timestamp,
    FieldKind.ACTION: _coerce_action,
    FieldKind.NUMBER: _coerce_number,
    FieldKind.INSTRUMENT: _coerce_instrument,
    FieldKind.TEXT: _coerce_text,
}

_missing_coercers = set(FieldKind) - set(COERCERS)
if _missing_coercers:
    raise RuntimeError(f"No coercer registered for field kinds: {sorted(map(str, _missing_coercers))}")


def _derive_fields(state: _RowState, config: ImportConfig) -> None:
    """Fill market type and contract multiplier, then force fees positive."""
    values = state.values

    if not values.get('market_type') and values.get('instrument'):
        values['market_type'] = detect_market_type(values['instrument'])

    if all(values.get(key) is not None for key in _MULTIPLIER_INPUTS):
        result = calculate_contract_multiplier(
            values['profit'],
            values.get('commission'),
            values.get('fees'),
            values['entry_price'],
            values['exit_price'],
            values['quantity'],
            values['action'],
            max_multiplier=config.max_contract_multiplier,
            precision=config.multiplier_precision,
        )
        values['contract_multiplier'] = result.multiplier
        if result.warning:
            state.report('contract_multiplier', result.warning, ErrorCode.MULTIPLIER_FALLBACK)
    elif not values.get('contract_multiplier') or values['contract_multiplier'] < 0:
        values['contract_multiplier'] = DEFAULT_MULTIPLIER

    for key in ('commission', 'fees'):
        amount = values.get(key)
        if amount is not None and amount < 0:
            values[key] = abs(amount)


def _process_row(
    row: RawRow,
    mapping: Mapping[str, str],
    row_index: int,
    config: Optional[ImportConfig] = None,
) -> _RowState:
    """
    Coerce a single raw row.

    Pure with respect to its inputs: the result depends only on the row,
    the mapping and the config.
    """
    config = config or ImportConfig()
    state = _RowState(index=row_index)

    for field_key, column in mapping.items():
        if not column or column not in row:
            continue
        coercer = COERCERS[FIELDS_BY_KEY[field_key].kind]
        state.values[field_key] = coercer(state, field_key, row[column], config)

    _derive_fields(state, config)
    return state


def process_csv_data(
    data: Sequence[RawRow],
    mappings: Mapping[str, str],
    config: Optional[ImportConfig] = None,
) -> ProcessedDataResult:
    """
    Convert raw CSV rows into normalized trade records.

    Rows are processed in input order. Nothing is raised for bad cells:
    invalid actions default to buy, unparseable numbers become None, a
    missing instrument is flagged, and implausible multipliers fall back to 1.
    All of it is recorded in the returned issues.

    Args:
        data: Raw rows (header -> cell), typically from read_csv_data()
        mappings: Canonical field key -> source header
        config: Import settings (defaults when None)

    Returns:
        ProcessedDataResult with exactly len(data) rows

    Raises:
        ValueError: If the mapping names a field outside the schema
    """
    unknown = [key for key in mappings if key not in FIELDS_BY_KEY]
    if unknown:
        raise ValueError(f"Unknown trade field(s) in mapping: {', '.join(sorted(unknown))}")

    config = config or ImportConfig()
    result = ProcessedDataResult()

    for index, row in enumerate(data):
        state = _process_row(row, mappings, index, config)
        result.data.append(ProcessedRow(state.values, tuple(state.flagged)))
        for issue in state.issues:
            log_with_context(logger, 'WARNING', str(issue), error_code=issue.error_code,
                             row=issue.row_number, field=issue.field)
        result.issues.extend(state.issues)

    logger.info(
        f"Processed {result.row_count} rows with {len(result.issues)} warning(s)"
    )
    return result
