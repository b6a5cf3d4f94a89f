"""
Timestamp normalization for broker CSV exports.

Converts the many date/time spellings found in broker exports into the
canonical `YYYY-MM-DD HH:MM:SS` form. The wall-clock reading in the file is
kept as-is: nothing is converted to or from UTC.

Recognized formats, tried in order (first match wins):
    1. 2024-01-15 13:45:30            canonical, returned unchanged
    2. 2024-01-15T13:45:30.000Z       ISO 8601, truncated to seconds
    3. 15/01/2024 13:45:30            slash date, day first
    4. 01-15-2024 13:45:30            dash date, month first
    5. 15-01-2024 13:45:30            dash date, day first
    6. 2024-01-15 13:45               seconds appended
    7. <date> 01:45:30 PM             12-hour clock
    8. anything pandas can parse      wall-clock fields of the parsed value

Numeric dates are ambiguous between day-first and month-first. The first
interpretation listed for a format wins whenever it names a real calendar
date; the swapped reading is only used when the first one is impossible
(for example a month of 15). Formats 4 and 5 share one pattern, so the
`day_first` flag decides which of them is tried first.
"""

import re
import warnings
from datetime import datetime
from typing import Any, Optional, Sequence, Tuple

import pandas as pd

from .numbers import is_blank

CANONICAL_FORMAT = '%Y-%m-%d %H:%M:%S'

_CANONICAL = re.compile(r'^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$')
_ISO_T = re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}')
_SLASH_DATE_TIME = re.compile(r'^(\d{1,2})/(\d{1,2})/(\d{4})\s+(\d{1,2}):(\d{2}):(\d{2})$')
_DASH_DATE_TIME = re.compile(r'^(\d{1,2})-(\d{1,2})-(\d{4})\s+(\d{1,2}):(\d{2}):(\d{2})$')
_WITHOUT_SECONDS = re.compile(r'^\d{4}-\d{2}-\d{2} \d{2}:\d{2}$')
_TWELVE_HOUR = re.compile(r'^(.+)\s+(\d{1,2}):(\d{2}):(\d{2})\s+(AM|PM)$', re.IGNORECASE)
_DIGIT = re.compile(r'\d')

DAY_FIRST = 'day_first'
MONTH_FIRST = 'month_first'


def _assemble(year: int, month: int, day: int, hour: int, minute: int, second: int) -> Optional[str]:
    """Canonical string for the given fields, or None if they name no real instant."""
    try:
        return datetime(year, month, day, hour, minute, second).strftime(CANONICAL_FORMAT)
    except ValueError:
        return None


def _reassemble(groups: Tuple[str, ...], orders: Sequence[str]) -> Optional[str]:
    """
    Rebuild a `NN?NN?YYYY H:MM:SS` match using the first valid day/month order.
    """
    first, second, year, hour, minute, sec = (int(g) for g in groups)
    for order in orders:
        day, month = (first, second) if order == DAY_FIRST else (second, first)
        result = _assemble(year, month, day, hour, minute, sec)
        if result is not None:
            return result
    return None


def _to_24_hour(hour: int, period: str) -> int:
    period = period.upper()
    if period == 'PM' and hour != 12:
        return hour + 12
    if period == 'AM' and hour == 12:
        return 0
    return hour


def _parse_generic(text: str) -> Optional[str]:
    """
    Last-resort parse through pandas.

    Uses the parsed value's own calendar fields; an explicit offset in the
    text is kept as written rather than shifted to UTC. Text without a digit
    is rejected, so relative words like "now" or "today" never resolve to
    the clock time of the import.
    """
    if not _DIGIT.search(text):
        return None

    try:
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', UserWarning)
            ts = pd.Timestamp(text)
    except (ValueError, TypeError, OverflowError):
        return None

    if pd.isna(ts):
        return None
    return _assemble(ts.year, ts.month, ts.day, ts.hour, ts.minute, ts.second)


def format_timestamp(timestamp: Any, day_first: bool = False) -> Optional[str]:
    """
    Normalize a timestamp cell to `YYYY-MM-DD HH:MM:SS`.

    Args:
        timestamp: Raw cell value
        day_first: Read ambiguous NN-NN-YYYY dates day-first

    Returns:
        Canonical timestamp string, or None when blank or unparseable

    Example:
        >>> format_timestamp("2024-01-15T13:45:30.000Z")
        '2024-01-15 13:45:30'
        >>> format_timestamp("01/15/2024 01:45:30 PM")
        '2024-01-15 13:45:30'
    """
    if is_blank(timestamp):
        return None

    text = str(timestamp).strip()

    if _CANONICAL.match(text):
        return text

    if _ISO_T.match(text):
        return text[:19].replace('T', ' ')

    match = _SLASH_DATE_TIME.match(text)
    if match:
        result = _reassemble(match.groups(), (DAY_FIRST, MONTH_FIRST))
        if result is not None:
            return result

    match = _DASH_DATE_TIME.match(text)
    if match:
        orders = (DAY_FIRST, MONTH_FIRST) if day_first else (MONTH_FIRST, DAY_FIRST)
        result = _reassemble(match.groups(), orders)
        if result is not None:
            return result

    if _WITHOUT_SECONDS.match(text):
        return f"{text}:00"

    match = _TWELVE_HOUR.match(text)
    if match:
        date_part, hour, minute, second, period = match.groups()
        date_formatted = format_timestamp(f"{date_part} 00:00:00", day_first=day_first)
        if date_formatted is not None:
            year, month, day = (int(p) for p in date_formatted[:10].split('-'))
            result = _assemble(year, month, day, _to_24_hour(int(hour), period), int(minute), int(second))
            if result is not None:
                return result

    return _parse_generic(text)
