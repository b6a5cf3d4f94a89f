"""
Error codes for structured error tracking.

Every import anomaly and every logged failure carries one of these codes so
that audit trails and log files can be filtered by category.
"""

from enum import Enum
from typing import NamedTuple


class ErrorCodeInfo(NamedTuple):
    """Container for error code information."""
    code: str
    category: str
    description: str


class ErrorCode(Enum):
    """
    Enumeration of error codes for structured logging.

    Each error code has:
    - code: Unique identifier (e.g., "CSV_001")
    - category: Error category (e.g., "csv", "import")
    - description: Human-readable description

    Usage:
        log_exception(
            logger,
            "Failed to read CSV",
            exc=e,
            error_code=ErrorCode.CSV_READ_FAILED,
        )
    """

    # CSV reading errors (CSV_xxx)
    CSV_PARSE_ERROR = ErrorCodeInfo("CSV_001", "csv", "CSV content could not be parsed")
    CSV_EMPTY = ErrorCodeInfo("CSV_002", "csv", "CSV file contains no data rows")
    CSV_READ_FAILED = ErrorCodeInfo("CSV_003", "csv", "CSV source could not be read")

    # Row coercion anomalies (IMP_xxx)
    INVALID_ACTION = ErrorCodeInfo("IMP_001", "import", "Action is not buy or sell")
    UNPARSEABLE_NUMBER = ErrorCodeInfo("IMP_002", "import", "Numeric value could not be parsed")
    MISSING_INSTRUMENT = ErrorCodeInfo("IMP_003", "import", "Instrument is missing")
    UNPARSEABLE_TIMESTAMP = ErrorCodeInfo("IMP_004", "import", "Timestamp could not be parsed")

    # Contract multiplier derivation (MUL_xxx)
    MULTIPLIER_FALLBACK = ErrorCodeInfo("MUL_001", "multiplier", "Contract multiplier fell back to a default")

    # Mapping errors (MAP_xxx)
    MAPPING_INVALID = ErrorCodeInfo("MAP_001", "mapping", "Column mapping is invalid")
    MAPPING_INCOMPLETE = ErrorCodeInfo("MAP_002", "mapping", "Required fields are not mapped")

    # Validation errors (VAL_xxx)
    VALIDATION_ERROR = ErrorCodeInfo("VAL_001", "validation", "Validation failed")

    # Configuration errors (CFG_xxx)
    CONFIG_LOAD_ERROR = ErrorCodeInfo("CFG_001", "config", "Failed to load configuration")
    CONFIG_INVALID = ErrorCodeInfo("CFG_002", "config", "Configuration is invalid")

    # File/IO errors (IO_xxx)
    IO_WRITE_ERROR = ErrorCodeInfo("IO_001", "io", "Failed to write file")

    @property
    def code(self) -> str:
        """Get the error code identifier."""
        return self.value.code

    @property
    def category(self) -> str:
        """Get the error category."""
        return self.value.category

    @property
    def description(self) -> str:
        """Get the error description."""
        return self.value.description

    def __str__(self) -> str:
        return f"{self.code}: {self.description}"


__all__ = [
    "ErrorCode",
    "ErrorCodeInfo",
]
