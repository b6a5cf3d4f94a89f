"""
CSV import pipeline.

Turns an arbitrary broker CSV export into normalized trade records:

    result = read_csv_data("broker.csv")
    mapping = get_smart_mapping_defaults(result.headers)
    processed = process_csv_data(result.data, mapping)
    export_formatted_csv(processed.data, "tradelens.csv")
"""

from .fields import (
    FieldKind,
    TradelensField,
    TRADELENS_FIELDS,
    FIELDS_BY_KEY,
    FIELD_KEYS,
    REQUIRED_FIELD_KEYS,
    MAPPING_PRIORITY,
    EXPORT_COLUMNS,
    MARKET_TYPES,
    get_field,
)
from .results import (
    CSVProcessResult,
    ImportIssue,
    ProcessedRow,
    ProcessedDataResult,
)
from .reader import read_csv_headers, read_csv_data
from .mapping import (
    ColumnMapping,
    FIELD_SYNONYMS,
    get_smart_mapping_defaults,
    load_mapping_override,
    normalize_header,
    tokenize_header,
)
from .numbers import parse_high_precision_number
from .timestamps import format_timestamp
from .market_type import (
    detect_market_type,
    normalize_market_type,
    is_valid_market_type,
    VALID_MARKET_TYPES,
)
from .multiplier import MultiplierResult, calculate_contract_multiplier
from .processor import process_csv_data
from .export import export_formatted_csv, build_export_frame, default_export_filename

__all__ = [
    # Schema
    'FieldKind',
    'TradelensField',
    'TRADELENS_FIELDS',
    'FIELDS_BY_KEY',
    'FIELD_KEYS',
    'REQUIRED_FIELD_KEYS',
    'MAPPING_PRIORITY',
    'EXPORT_COLUMNS',
    'MARKET_TYPES',
    'get_field',
    # Results
    'CSVProcessResult',
    'ImportIssue',
    'ProcessedRow',
    'ProcessedDataResult',
    # Reading
    'read_csv_headers',
    'read_csv_data',
    # Mapping
    'ColumnMapping',
    'FIELD_SYNONYMS',
    'get_smart_mapping_defaults',
    'load_mapping_override',
    'normalize_header',
    'tokenize_header',
    # Coercion helpers
    'parse_high_precision_number',
    'format_timestamp',
    'detect_market_type',
    'normalize_market_type',
    'is_valid_market_type',
    'VALID_MARKET_TYPES',
    'MultiplierResult',
    'calculate_contract_multiplier',
    # Processing and export
    'process_csv_data',
    'export_formatted_csv',
    'build_export_frame',
    'default_export_filename',
]
