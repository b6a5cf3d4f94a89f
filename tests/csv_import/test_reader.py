"""
Tests for CSV reading.
"""

# Standard library imports
import io
import sys
from pathlib import Path

# Third-party imports
import pytest

# Local imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from tradelens.config import ImportConfig, clear_config_cache
from tradelens.csv_import import read_csv_data, read_csv_headers
from tradelens.csv_import.reader import EMPTY_FILE_ERROR
from tradelens.paths import get_project_root


class TestReadCsv:
    """Test read_csv_headers() and read_csv_data()."""

    @pytest.mark.unit
    def test_headers_and_rows_from_text(self, broker_csv_text):
        result = read_csv_data(broker_csv_text)

        assert result.ok
        assert result.headers[:3] == ['Open Time', 'Close Time', 'Side']
        assert result.row_count == 3
        assert result.data[0]['Ticker'] == 'AAPL'

    @pytest.mark.unit
    def test_cells_stay_strings(self):
        result = read_csv_data("Symbol,Qty,Price\nAAPL,007,1.50\n")
        assert result.data == [{'Symbol': 'AAPL', 'Qty': '007', 'Price': '1.50'}]

    @pytest.mark.unit
    def test_blank_cells_are_empty_strings(self):
        result = read_csv_data("Symbol,Qty,Note\nAAPL,,NA\n")
        assert result.data[0]['Qty'] == ''
        assert result.data[0]['Note'] == 'NA'

    @pytest.mark.unit
    def test_from_file(self, broker_csv_file):
        result = read_csv_data(broker_csv_file)
        assert result.ok
        assert result.row_count == 3

    @pytest.mark.unit
    def test_from_string_path(self, broker_csv_file):
        assert read_csv_data(str(broker_csv_file)).row_count == 3

    @pytest.mark.unit
    def test_from_bytes_with_bom(self):
        result = read_csv_data(b'\xef\xbb\xbfSymbol,Qty\nAAPL,1\n')
        assert result.headers == ['Symbol', 'Qty']

    @pytest.mark.unit
    def test_from_file_object(self):
        result = read_csv_data(io.StringIO("Symbol,Qty\nAAPL,1\nMSFT,2\n"))
        assert [row['Symbol'] for row in result.data] == ['AAPL', 'MSFT']

    @pytest.mark.unit
    def test_preview_rows_cap(self):
        text = "Symbol,Qty\n" + "".join(f"S{i},{i}\n" for i in range(10))
        preview = read_csv_headers(text, preview_rows=4)
        full = read_csv_data(text)

        assert preview.row_count == 4
        assert full.row_count == 10
        assert preview.headers == full.headers

    @pytest.mark.unit
    def test_empty_input(self):
        result = read_csv_data(b'')
        assert not result.ok
        assert result.error == EMPTY_FILE_ERROR
        assert result.headers is None

    @pytest.mark.unit
    def test_header_only_is_empty(self):
        result = read_csv_data("Symbol,Qty\n")
        assert result.error == EMPTY_FILE_ERROR

    @pytest.mark.unit
    def test_malformed_rows(self):
        result = read_csv_data("a,b\n1,2\n3,4,5\n")
        assert not result.ok
        assert result.error.startswith("CSV parsing error")

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        result = read_csv_data(tmp_path / 'missing.csv')
        assert not result.ok
        assert result.error.startswith("Failed to read CSV")

    @pytest.mark.unit
    def test_short_rows(self):
        result = read_csv_data("a,b,c\n1,2,3\n4,5\n")
        assert not result.ok
        assert result.error == "CSV parsing error: Too few fields in row 2: expected 3"

    @pytest.mark.unit
    def test_trailing_empty_fields_are_not_short(self):
        result = read_csv_data("a,b,c\n1,,\n")
        assert result.ok
        assert result.data == [{'a': '1', 'b': '', 'c': ''}]


class TestPreviewRowsSetting:
    """Test where read_csv_headers() takes its row cap from."""

    TEXT = "Symbol,Qty\n" + "".join(f"S{i},{i}\n" for i in range(5))

    @pytest.fixture
    def project_with_settings(self, tmp_path, monkeypatch):
        (tmp_path / 'config').mkdir()
        (tmp_path / 'config' / 'settings.yaml').write_text("csv_import:\n  preview_rows: 2\n")
        monkeypatch.setenv('PROJECT_ROOT', str(tmp_path))
        get_project_root.cache_clear()
        clear_config_cache()
        yield tmp_path
        get_project_root.cache_clear()
        clear_config_cache()

    @pytest.mark.unit
    def test_cap_from_settings(self, project_with_settings):
        assert read_csv_headers(self.TEXT).row_count == 2

    @pytest.mark.unit
    def test_explicit_cap_wins_over_settings(self, project_with_settings):
        assert read_csv_headers(self.TEXT, preview_rows=4).row_count == 4

    @pytest.mark.unit
    def test_cap_from_config(self):
        assert read_csv_headers(self.TEXT, config=ImportConfig(preview_rows=3)).row_count == 3

    @pytest.mark.unit
    def test_non_positive_cap(self):
        with pytest.raises(ValueError, match="preview_rows must be positive"):
            read_csv_headers(self.TEXT, preview_rows=0)
