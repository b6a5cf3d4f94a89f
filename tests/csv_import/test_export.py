"""
Tests for the formatted CSV export.
"""

# Standard library imports
import sys
from datetime import date
from pathlib import Path

# Third-party imports
import pandas as pd
import pytest

# Local imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from tradelens.csv_import import (
    EXPORT_COLUMNS,
    build_export_frame,
    default_export_filename,
    export_formatted_csv,
    get_smart_mapping_defaults,
    process_csv_data,
    read_csv_data,
)

HEADER_LINE = (
    "entry_price,exit_price,entry_time,exit_time,action,quantity,contract_multiplier,"
    "instrument,sl,target,commission,fees,market_type"
)


class TestExportFormattedCsv:
    """Test export_formatted_csv()."""

    @pytest.mark.unit
    def test_fixed_header(self):
        csv_text = export_formatted_csv([{'instrument': 'AAPL'}])
        assert csv_text.splitlines()[0] == HEADER_LINE
        assert HEADER_LINE.split(',') == list(EXPORT_COLUMNS)

    @pytest.mark.unit
    def test_blank_and_zero_cells(self):
        csv_text = export_formatted_csv([{'instrument': 'AAPL', 'commission': 0, 'sl': None}])
        cells = dict(zip(EXPORT_COLUMNS, csv_text.splitlines()[1].split(',')))

        assert cells['instrument'] == 'AAPL'
        assert cells['commission'] == '0'
        assert cells['sl'] == ''
        assert cells['market_type'] == ''

    @pytest.mark.unit
    def test_empty_rows_still_have_header(self):
        assert export_formatted_csv([]).splitlines() == [HEADER_LINE]

    @pytest.mark.unit
    def test_writes_file(self, tmp_path):
        path = tmp_path / 'out' / 'trades.csv'
        csv_text = export_formatted_csv([{'instrument': 'AAPL', 'action': 'buy'}], path)

        assert path.read_text(encoding='utf-8') == csv_text

    @pytest.mark.unit
    def test_build_export_frame_columns(self):
        frame = build_export_frame([{'instrument': 'AAPL', 'profit': 10}])
        assert list(frame.columns) == list(EXPORT_COLUMNS)
        assert 'profit' not in frame.columns

    @pytest.mark.unit
    def test_default_filename(self):
        assert default_export_filename(date(2024, 1, 15)) == 'tradelens_formatted_2024-01-15.csv'

    @pytest.mark.integration
    def test_processed_rows_reimport(self, broker_csv_text):
        raw = read_csv_data(broker_csv_text)
        processed = process_csv_data(raw.data, get_smart_mapping_defaults(raw.headers))

        csv_text = export_formatted_csv(processed.data)
        lines = csv_text.splitlines()

        assert len(lines) == 4
        assert lines[3] == "42000.5,,2024-01-16 08:00:00,,buy,2.0,1.0,BTCUSDT,,,,,Crypto"

        reread = read_csv_data(csv_text)
        assert reread.headers == list(EXPORT_COLUMNS)
        assert get_smart_mapping_defaults(reread.headers).has_all_required()
