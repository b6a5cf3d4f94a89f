"""
Centralized logging package for the TradeLens import toolkit.

Provides structured logging with consistent formatting across all modules.
Supports both console output (human-readable) and file output (structured JSON).

Usage:
    from tradelens.logging import configure_logging, get_logger, LogContext

    configure_logging(level="INFO", console=True, file=False)

    logger = get_logger('import')
    logger.info("Import started")

    with LogContext(phase="process", source_file="broker.csv"):
        logger.info("Processing rows...")  # Includes context info
"""

from .config import (
    configure_logging,
    shutdown_logging,
    get_logger,
    LogLevel,
    ROOT_LOGGER_NAME,
)

from .context import (
    LogContext,
    reset_context,
    get_context_value,
    set_context_value,
    clear_context_value,
    has_context_value,
)

from .formatters import (
    StructuredFormatter,
    ConsoleFormatter,
)

from .error_codes import (
    ErrorCode,
    ErrorCodeInfo,
)

from .utils import (
    log_with_context,
    log_exception,
    log_validation_result,
)


__all__ = [
    # Core configuration
    "configure_logging",
    "shutdown_logging",
    "get_logger",
    "LogLevel",
    "ROOT_LOGGER_NAME",
    # Context management
    "LogContext",
    "reset_context",
    "get_context_value",
    "set_context_value",
    "clear_context_value",
    "has_context_value",
    # Formatters
    "StructuredFormatter",
    "ConsoleFormatter",
    # Error codes
    "ErrorCode",
    "ErrorCodeInfo",
    # Logging utilities
    "log_with_context",
    "log_exception",
    "log_validation_result",
]
