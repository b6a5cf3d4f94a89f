"""
Market type detection from instrument symbols.

Symbols are upper-cased and tested against ordered pattern families; the
first family with a matching pattern wins. Symbols nothing matches get an
empty string and are left for the user to classify.
"""

import re
from typing import Optional, Pattern, Tuple

from ..logging import get_logger

logger = get_logger('import')

# Persistence values accepted by the trades store
VALID_MARKET_TYPES: Tuple[str, ...] = (
    'stocks', 'forex', 'crypto', 'futures', 'options', 'commodities',
)

_MARKET_TYPE_ALIASES = {
    'stock': 'stocks',
    'equity': 'stocks',
    'equities': 'stocks',
    'fx': 'forex',
    'foreign exchange': 'forex',
    'cryptocurrency': 'crypto',
    'cryptocurrencies': 'crypto',
    'bitcoin': 'crypto',
    'future': 'futures',
    'option': 'options',
    'commodity': 'commodities',
    'indices': 'stocks',
    'index': 'stocks',
}


def _compile(*patterns: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p) for p in patterns)


# Commodities run first so metal/energy pairs such as XAUUSD are not
# claimed by the six-letter currency-pair or USD-suffix patterns.
MARKET_TYPE_PATTERNS: Tuple[Tuple[str, Tuple[Pattern[str], ...]], ...] = (
    ('Commodities', _compile(
        r'XAU', r'XAG', r'GOLD', r'SILVER', r'OIL', r'CRUDE', r'NATGAS', r'WTI', r'BRENT',
    )),
    ('Forex', _compile(r'^[A-Z]{3}[A-Z]{3}$', r'^[A-Z]{6}$')),
    ('Crypto', _compile(
        r'BTC', r'ETH', r'SOL', r'XRP', r'ADA', r'DOT', r'LINK', r'UNI',
        r'USD$', r'USDT$', r'BUSD$',
    )),
    ('Indices', _compile(r'US100', r'SPX500', r'DAX40', r'FTSE100', r'NAS100', r'SPX', r'NDX')),
    ('Futures', _compile(r'=F', r'ES', r'NQ')),
    ('Options', _compile(r'CALL', r'PUT', r'\d{6}[CP]\d+')),
    ('Stock', _compile(r'^[A-Z]{1,5}$')),
)


def detect_market_type(instrument: Optional[str]) -> str:
    """
    Classify an instrument symbol.

    Args:
        instrument: Raw symbol, any case

    Returns:
        One of MARKET_TYPES, or '' when the symbol is not recognized

    Example:
        >>> detect_market_type("eurusd")
        'Forex'
    """
    if not instrument:
        return ''

    symbol = str(instrument).strip().upper()
    for market_type, patterns in MARKET_TYPE_PATTERNS:
        if any(pattern.search(symbol) for pattern in patterns):
            return market_type

    logger.debug(f"No market type detected for instrument '{symbol}'")
    return ''


def normalize_market_type(market_type: Optional[str]) -> Optional[str]:
    """
    Map a display name or common variant to its persistence value.

    Returns:
        One of VALID_MARKET_TYPES, or None when the value is unknown
    """
    if not market_type:
        return None

    normalized = str(market_type).strip().lower()
    if normalized in VALID_MARKET_TYPES:
        return normalized
    return _MARKET_TYPE_ALIASES.get(normalized)


def is_valid_market_type(market_type: Optional[str]) -> bool:
    return normalize_market_type(market_type) is not None
