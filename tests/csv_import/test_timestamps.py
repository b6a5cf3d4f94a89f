"""
Tests for timestamp normalization.
"""

# Standard library imports
import sys
from pathlib import Path

# Third-party imports
import pytest

# Local imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from tradelens.csv_import import format_timestamp


class TestFormatTimestamp:
    """Test format_timestamp() across broker date spellings."""

    @pytest.mark.unit
    def test_canonical_passthrough(self):
        assert format_timestamp("2024-01-15 13:45:30") == "2024-01-15 13:45:30"

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [
        "2024-01-15T13:45:30.000Z",
        "2024-01-15T13:45:30Z",
        "2024-01-15T13:45:30+02:00",
    ])
    def test_iso_truncated_to_seconds(self, value):
        assert format_timestamp(value) == "2024-01-15 13:45:30"

    @pytest.mark.unit
    def test_slash_date_day_first(self):
        assert format_timestamp("15/01/2024 13:45:30") == "2024-01-15 13:45:30"

    @pytest.mark.unit
    def test_slash_date_zero_padded(self):
        assert format_timestamp("5/1/2024 9:05:07") == "2024-01-05 09:05:07"

    @pytest.mark.unit
    def test_slash_date_falls_back_to_month_first(self):
        """A month of 15 is impossible, so the month-first reading is used."""
        assert format_timestamp("01/15/2024 13:45:30") == "2024-01-15 13:45:30"

    @pytest.mark.unit
    def test_dash_date_month_first_by_default(self):
        assert format_timestamp("01-02-2024 10:00:00") == "2024-01-02 10:00:00"

    @pytest.mark.unit
    def test_dash_date_day_first_hint(self):
        assert format_timestamp("01-02-2024 10:00:00", day_first=True) == "2024-02-01 10:00:00"

    @pytest.mark.unit
    def test_dash_date_impossible_month_read_day_first(self):
        assert format_timestamp("25-12-2024 10:00:00") == "2024-12-25 10:00:00"

    @pytest.mark.unit
    def test_missing_seconds_appended(self):
        assert format_timestamp("2024-01-15 13:45") == "2024-01-15 13:45:00"

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [
        ("01/15/2024 01:45:30 PM", "2024-01-15 13:45:30"),
        ("2024-01-15 12:00:00 AM", "2024-01-15 00:00:00"),
        ("2024-01-15 12:30:00 PM", "2024-01-15 12:30:00"),
        ("2024-01-15 11:59:59 am", "2024-01-15 11:59:59"),
    ])
    def test_twelve_hour_clock(self, value, expected):
        assert format_timestamp(value) == expected

    @pytest.mark.unit
    def test_generic_fallback(self):
        assert format_timestamp("2024/01/15") == "2024-01-15 00:00:00"

    @pytest.mark.unit
    def test_offset_kept_as_wall_clock(self):
        """Explicit offsets are not converted to UTC."""
        assert format_timestamp("2024-01-15 13:45:30+05:00") == "2024-01-15 13:45:30"

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, "", "   ", float('nan')])
    def test_blank_is_none(self, value):
        assert format_timestamp(value) is None

    @pytest.mark.unit
    def test_unparseable_is_none(self):
        assert format_timestamp("not a date") is None

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["now", "today", "Now", " TODAY "])
    def test_relative_words_are_none(self, value):
        assert format_timestamp(value) is None

    @pytest.mark.unit
    def test_surrounding_whitespace_ignored(self):
        assert format_timestamp("  2024-01-15 13:45:30 ") == "2024-01-15 13:45:30"
