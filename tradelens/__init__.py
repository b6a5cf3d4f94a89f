"""
TradeLens import toolkit.

Turns broker CSV exports into normalized trading-journal records:

    from tradelens import read_csv_data, get_smart_mapping_defaults, process_csv_data

    raw = read_csv_data("broker.csv")
    mapping = get_smart_mapping_defaults(raw.headers)
    result = process_csv_data(raw.data, mapping)
"""

__version__ = "0.1.0"

from .csv_import import (
    read_csv_headers,
    read_csv_data,
    get_smart_mapping_defaults,
    load_mapping_override,
    process_csv_data,
    export_formatted_csv,
    ColumnMapping,
    ProcessedDataResult,
)
from .config import ImportConfig
from .validation import validate_trade_data, validate_processed_result

__all__ = [
    '__version__',
    'read_csv_headers',
    'read_csv_data',
    'get_smart_mapping_defaults',
    'load_mapping_override',
    'process_csv_data',
    'export_formatted_csv',
    'ColumnMapping',
    'ProcessedDataResult',
    'ImportConfig',
    'validate_trade_data',
    'validate_processed_result',
]
