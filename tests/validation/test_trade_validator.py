"""
Tests for trade-level validation helpers.
"""

# Standard library imports
import sys
from datetime import datetime
from pathlib import Path

# Third-party imports
import pytest

# Local imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from tradelens.csv_import import get_smart_mapping_defaults, process_csv_data, read_csv_data
from tradelens.validation import (
    calculate_trade_status,
    extract_trade_date,
    normalize_action,
    sanitize_numeric,
    validate_processed_result,
    validate_trade_data,
)


def complete_trade(**overrides):
    trade = {
        'instrument': 'AAPL',
        'action': 'buy',
        'entry_time': '2024-01-15 09:30:00',
        'entry_price': 100.0,
        'quantity': 10.0,
        'exit_time': '2024-01-15 10:15:00',
        'exit_price': 110.0,
        'market_type': 'Stock',
    }
    trade.update(overrides)
    return trade


class TestNormalizeAction:
    """Test normalize_action()."""

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [
        ('buy', 'buy'),
        (' SELL ', 'sell'),
        ('long', 'long'),
        ('Short', 'short'),
        ('b', 'buy'),
        ('bought', 'buy'),
        ('s', 'sell'),
        ('sold', 'sell'),
        ('hold', None),
        ('', None),
        (None, None),
    ])
    def test_normalize_action(self, value, expected):
        assert normalize_action(value) == expected


class TestTradeHelpers:
    """Test sanitize_numeric(), calculate_trade_status() and extract_trade_date()."""

    @pytest.mark.unit
    def test_sanitize_numeric(self):
        assert sanitize_numeric("1,500.25") == 1500.25
        assert sanitize_numeric("") is None
        assert sanitize_numeric("n/a") is None

    @pytest.mark.unit
    @pytest.mark.parametrize("exit_price,exit_time,quantity,exit_quantity,expected", [
        (None, None, 10, None, 'open'),
        (110.0, None, 10, None, 'open'),
        (None, '2024-01-15 10:00:00', 10, None, 'open'),
        (110.0, '2024-01-15 10:00:00', 10, None, 'closed'),
        (110.0, '2024-01-15 10:00:00', 10, 4, 'partially_closed'),
        (110.0, '2024-01-15 10:00:00', 10, 10, 'closed'),
        (110.0, '2024-01-15 10:00:00', 10, 0, 'closed'),
    ])
    def test_calculate_trade_status(self, exit_price, exit_time, quantity, exit_quantity, expected):
        assert calculate_trade_status(exit_price, exit_time, quantity, exit_quantity) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [
        ('2024-01-15 13:45:30', '2024-01-15'),
        ('15/01/2024 13:45:30', '2024-01-15'),
        ('2024-01-15T23:59:59.000Z', '2024-01-15'),
        (datetime(2024, 3, 9, 8, 0), '2024-03-09'),
        ('garbage', None),
        (None, None),
    ])
    def test_extract_trade_date(self, value, expected):
        assert extract_trade_date(value) == expected


class TestValidateTradeData:
    """Test validate_trade_data()."""

    @pytest.mark.unit
    def test_complete_trade_passes(self):
        result = validate_trade_data(complete_trade())
        assert result.passed
        assert result.errors == []
        assert result.warnings == []
        assert result.metadata['status'] == 'closed'

    @pytest.mark.unit
    def test_missing_required_fields(self):
        result = validate_trade_data({})

        assert not result.passed
        assert result.errors == [
            'instrument is required',
            'action is required',
            'entry_time is required',
            'entry_price is required and must be a valid number',
            'quantity is required and must be a valid number',
        ]

    @pytest.mark.unit
    def test_long_short_accepted(self):
        assert validate_trade_data(complete_trade(action='short')).passed

    @pytest.mark.unit
    def test_invalid_action(self):
        result = validate_trade_data(complete_trade(action='hold'))
        assert result.errors == ['action must be one of: long, short, buy, sell']

    @pytest.mark.unit
    def test_zero_quantity_rejected(self):
        result = validate_trade_data(complete_trade(quantity=0.0))
        assert result.errors == ['quantity is required and must be a valid number']

    @pytest.mark.unit
    def test_detected_market_types_accepted(self):
        for market_type in ('Stock', 'Forex', 'Crypto', 'Indices', 'Commodities', 'Futures', 'Options'):
            assert validate_trade_data(complete_trade(market_type=market_type)).passed

    @pytest.mark.unit
    def test_unknown_market_type(self):
        result = validate_trade_data(complete_trade(market_type='Bonds'))
        assert not result.passed
        assert result.errors[0].startswith('market_type must be one of:')

    @pytest.mark.unit
    def test_open_trade_is_a_warning(self):
        result = validate_trade_data(complete_trade(exit_price=None, exit_time=None))
        assert result.passed
        assert len(result.warnings) == 1
        assert result.metadata['status'] == 'open'


class TestValidateProcessedResult:
    """Test validate_processed_result()."""

    @pytest.mark.integration
    def test_broker_export(self, broker_csv_text):
        raw = read_csv_data(broker_csv_text)
        processed = process_csv_data(raw.data, get_smart_mapping_defaults(raw.headers))

        result = validate_processed_result(processed)

        assert result.passed
        assert result.metadata['row_count'] == 3
        assert result.metadata['invalid_rows'] == []
        assert 'Row 3: Invalid action "long", defaulting to "buy"' in result.warnings
        assert any(w.startswith('Row 3: No exit price') for w in result.warnings)

    @pytest.mark.unit
    def test_invalid_rows_reported(self):
        processed = process_csv_data(
            [{'Symbol': 'AAPL'}, {'Symbol': ''}],
            {'instrument': 'Symbol'},
        )
        result = validate_processed_result(processed)

        assert not result.passed
        assert result.metadata['invalid_rows'] == [1, 2]
        assert 'Row 2: instrument is required' in result.errors
        assert 'Row 2: Missing instrument' in result.warnings
        assert 'status' not in result.metadata
