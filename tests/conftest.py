"""
Pytest configuration and fixtures for the TradeLens import tests.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tradelens.config import clear_config_cache
from tradelens.logging import reset_context, shutdown_logging


# A typical MT5-style export: closed trades with profit but no contract size
BROKER_CSV = (
    "Open Time,Close Time,Side,Size,Ticker,Open Price,Close Price,Commission,Swap,Profit\n"
    "2024-01-15 09:30:00,2024-01-15 10:15:00,Buy,10,AAPL,100,110,5,2,150\n"
    "15/01/2024 13:45:30,15/01/2024 14:00:00,sell,1,EURUSD,1.0950,1.0900,-3.5,-0.5,496\n"
    "2024-01-16T08:00:00.000Z,,long,2,BTCUSDT,42000.5,,,,\n"
)


@pytest.fixture
def project_root_path():
    """Return the project root path."""
    return project_root


@pytest.fixture
def broker_csv_text():
    """Raw CSV text of a three-trade broker export."""
    return BROKER_CSV


@pytest.fixture
def broker_csv_file(tmp_path, broker_csv_text):
    """The broker export written to a temporary file."""
    csv_path = tmp_path / 'broker_export.csv'
    csv_path.write_text(broker_csv_text, encoding='utf-8')
    return csv_path


@pytest.fixture(autouse=True)
def clean_state():
    """Reset cached settings and logging context around every test."""
    clear_config_cache()
    reset_context()
    yield
    clear_config_cache()
    reset_context()
    shutdown_logging()
