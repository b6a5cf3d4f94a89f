"""
Row-level checks for normalized trades before they are persisted.

The import pipeline never rejects a row; these checks are what a caller
runs afterwards to decide whether a record is complete enough to store.
"""

from datetime import date, datetime
from typing import Any, Mapping, Optional, Union

from ..csv_import.fields import REQUIRED_FIELD_KEYS
from ..csv_import.market_type import VALID_MARKET_TYPES, is_valid_market_type
from ..csv_import.numbers import is_blank, parse_high_precision_number
from ..csv_import.results import ProcessedDataResult
from ..csv_import.timestamps import format_timestamp
from ..logging import get_logger
from .core import ValidationResult, ValidationSeverity

logger = get_logger('validation')

# Persistence-side vocabulary: long/short are accepted as synonyms
VALID_ACTIONS = ('long', 'short', 'buy', 'sell')

_ACTION_ALIASES = {
    'b': 'buy',
    'bought': 'buy',
    's': 'sell',
    'sold': 'sell',
}

TRADE_STATUS_OPEN = 'open'
TRADE_STATUS_PARTIALLY_CLOSED = 'partially_closed'
TRADE_STATUS_CLOSED = 'closed'


def normalize_action(action: Optional[str]) -> Optional[str]:
    """
    Normalize an action to one of VALID_ACTIONS.

    Exact matches (long/short included) come back lowercased; the short
    forms b/bought/s/sold map to buy/sell.

    Example:
        >>> normalize_action(" Short ")
        'short'
        >>> normalize_action("sold")
        'sell'
    """
    if is_blank(action):
        return None

    normalized = str(action).strip().lower()
    if normalized in VALID_ACTIONS:
        return normalized
    return _ACTION_ALIASES.get(normalized)


def is_valid_action(action: Optional[str]) -> bool:
    return normalize_action(action) is not None


def sanitize_numeric(value: Any) -> Optional[float]:
    """Number or None; commas are stripped and nothing is rounded."""
    return parse_high_precision_number(value)


def calculate_trade_status(
    exit_price: Optional[float],
    exit_time: Optional[str],
    quantity: float,
    exit_quantity: Optional[float] = None,
) -> str:
    """
    Derive a trade's lifecycle status from its exit data.

    A trade without both an exit price and an exit time is open; an exit
    quantity strictly between zero and the position size marks it partially
    closed.
    """
    if not exit_price or not exit_time:
        return TRADE_STATUS_OPEN
    if exit_quantity is not None and 0 < exit_quantity < quantity:
        return TRADE_STATUS_PARTIALLY_CLOSED
    return TRADE_STATUS_CLOSED


def extract_trade_date(entry_time: Union[str, date, datetime, None]) -> Optional[str]:
    """
    Calendar date (YYYY-MM-DD) of a trade's entry.

    Strings go through the same timestamp normalization as the importer.
    """
    if entry_time is None:
        return None
    if isinstance(entry_time, (date, datetime)):
        return entry_time.strftime('%Y-%m-%d')

    canonical = format_timestamp(entry_time)
    if canonical is None:
        logger.debug(f"Cannot extract trade date from '{entry_time}'")
        return None
    return canonical[:10]


def validate_trade_data(trade: Mapping[str, Any]) -> ValidationResult:
    """
    Check that a trade record carries everything needed to persist it.

    Args:
        trade: ProcessedRow or plain dict keyed by canonical field keys

    Returns:
        ValidationResult; failed checks are ERROR severity, plus a WARNING
        when the record has neither exit price nor exit time (open trade)
    """
    result = ValidationResult()

    instrument = trade.get('instrument')
    result.add_check(
        'instrument',
        not is_blank(instrument),
        'instrument is required',
    )

    action = trade.get('action')
    if is_blank(action):
        result.add_check('action', False, 'action is required')
    else:
        result.add_check(
            'action',
            is_valid_action(action),
            f"action must be one of: {', '.join(VALID_ACTIONS)}",
            value=action,
        )

    result.add_check(
        'entry_time',
        not is_blank(trade.get('entry_time')),
        'entry_time is required',
    )

    for key in ('entry_price', 'quantity'):
        value = sanitize_numeric(trade.get(key))
        result.add_check(
            key,
            bool(value),
            f'{key} is required and must be a valid number',
            value=trade.get(key),
        )

    market_type = trade.get('market_type')
    if not is_blank(market_type):
        result.add_check(
            'market_type',
            is_valid_market_type(market_type),
            f"market_type must be one of: {', '.join(VALID_MARKET_TYPES)}",
            value=market_type,
        )

    status = calculate_trade_status(
        trade.get('exit_price'), trade.get('exit_time'), sanitize_numeric(trade.get('quantity')) or 0.0
    )
    result.add_metadata('status', status)
    if status == TRADE_STATUS_OPEN:
        result.add_check(
            'exit', False, 'No exit price or exit time; trade will be stored as open',
            severity=ValidationSeverity.WARNING,
        )

    return result


def validate_processed_result(processed: ProcessedDataResult) -> ValidationResult:
    """
    Validate every row of an import.

    Row messages are prefixed with the 1-based row number. Import issues
    already collected by the processor are carried over as warnings.
    """
    result = ValidationResult()
    invalid_rows = []

    for index, row in enumerate(processed.data):
        row_result = validate_trade_data(row)
        if not row_result.passed:
            invalid_rows.append(index + 1)
        result.merge(row_result, prefix=f"Row {index + 1}: ")

    for issue in processed.issues:
        result.add_warning(str(issue))

    result.add_metadata('row_count', processed.row_count)
    result.add_metadata('invalid_rows', invalid_rows)
    result.add_metadata('required_fields', list(REQUIRED_FIELD_KEYS))

    logger.info(
        f"Validated {processed.row_count} rows: {len(invalid_rows)} invalid, "
        f"{len(result.warnings)} warning(s)"
    )
    return result
