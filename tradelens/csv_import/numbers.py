"""
High-precision numeric parsing for broker CSV cells.

Values are parsed at full float precision; nothing is rounded here.
"""

import math
import re
from typing import Any, Optional

import numpy as np

# Leading numeric prefix, read the way a lenient float parser reads it:
# "12.5 USD" -> 12.5, "1e3" -> 1000.0, ".5" -> 0.5
_LEADING_NUMBER = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def is_blank(value: Any) -> bool:
    """True for None, NaN and empty/whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value.strip() == ''


def parse_high_precision_number(value: Any) -> Optional[float]:
    """
    Parse a cell into a float without rounding.

    Thousands-separator commas are stripped, then the leading numeric
    prefix is read. Blank, non-numeric and non-finite values yield None.

    Example:
        >>> parse_high_precision_number("1,234.56789012")
        1234.56789012
    """
    if is_blank(value) or isinstance(value, bool):
        return None

    if isinstance(value, (int, float, np.integer, np.floating)):
        number = float(value)
        return number if math.isfinite(number) else None

    text = str(value).replace(',', '').strip()
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return None

    number = float(match.group(0))
    return number if math.isfinite(number) else None

