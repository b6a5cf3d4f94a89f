"""
Validation of normalized trades.

Example:
    >>> from tradelens.validation import validate_trade_data
    >>> validate_trade_data({'instrument': 'AAPL'}).passed
    False
"""

from .core import (
    ValidationSeverity,
    TradeCheck,
    ValidationResult,
)
from .trade_validator import (
    VALID_ACTIONS,
    TRADE_STATUS_OPEN,
    TRADE_STATUS_PARTIALLY_CLOSED,
    TRADE_STATUS_CLOSED,
    normalize_action,
    is_valid_action,
    sanitize_numeric,
    calculate_trade_status,
    extract_trade_date,
    validate_trade_data,
    validate_processed_result,
)

__all__ = [
    'ValidationSeverity',
    'TradeCheck',
    'ValidationResult',
    'VALID_ACTIONS',
    'TRADE_STATUS_OPEN',
    'TRADE_STATUS_PARTIALLY_CLOSED',
    'TRADE_STATUS_CLOSED',
    'normalize_action',
    'is_valid_action',
    'sanitize_numeric',
    'calculate_trade_status',
    'extract_trade_date',
    'validate_trade_data',
    'validate_processed_result',
]
