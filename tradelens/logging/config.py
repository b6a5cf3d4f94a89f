"""
Core logging configuration.

Provides functions to configure logging for the TradeLens import toolkit.
"""

import atexit
import logging
import logging.handlers
import sys
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Literal, Optional

from .formatters import (
    StructuredFormatter,
    ConsoleFormatter,
    set_context_value,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

ROOT_LOGGER_NAME = 'tradelens'

_context_lock = threading.RLock()

# Handlers installed by configure_logging(), closed on shutdown
_active_handlers: List[logging.Handler] = []
_shutdown_registered = False


def _validate_log_level(level: str) -> str:
    """
    Validate and normalize log level string.

    Args:
        level: Log level string to validate.

    Returns:
        Normalized uppercase log level.

    Raises:
        ValueError: If level is not a valid log level.
    """
    normalized = str(level).upper()
    if normalized not in _VALID_LOG_LEVELS:
        valid_levels = ", ".join(sorted(_VALID_LOG_LEVELS))
        raise ValueError(
            f"Invalid log level '{level}'. Must be one of: {valid_levels}"
        )
    return normalized


def _get_logging_level(level: LogLevel) -> int:
    """Convert a log level string to its logging constant."""
    return getattr(logging, _validate_log_level(level))


def shutdown_logging() -> None:
    """
    Flush and close all handlers installed by configure_logging().

    Registered with atexit on first configuration.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in _active_handlers[:]:
        try:
            handler.flush()
            handler.close()
        except (OSError, ValueError):
            pass  # stream already closed
        root_logger.removeHandler(handler)

    _active_handlers.clear()


def _register_shutdown() -> None:
    global _shutdown_registered
    if not _shutdown_registered:
        atexit.register(shutdown_logging)
        _shutdown_registered = True


def configure_logging(
    level: LogLevel = "INFO",
    log_dir: Optional[Path] = None,
    console: bool = True,
    file: bool = True,
    structured: bool = True,
    source_file: Optional[str] = None,
    import_id: Optional[str] = None,
) -> logging.Logger:
    """
    Configure centralized logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files (default: PROJECT_ROOT/logs).
        console: Enable console output (stderr).
        file: Enable rotating file output.
        structured: Use JSON structured format for file logs.
        source_file: Optional CSV file name for context.
        import_id: Optional import run identifier for context.

    Returns:
        Root logger for the 'tradelens' namespace.

    Raises:
        ValueError: If level is not a valid log level.
    """
    log_level_int = _get_logging_level(level)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(log_level_int)

    shutdown_logging()

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level_int)
        console_handler.setFormatter(ConsoleFormatter(use_colors=sys.stderr.isatty()))
        root_logger.addHandler(console_handler)
        _active_handlers.append(console_handler)

    if file:
        if log_dir is None:
            # Imported lazily to avoid a cycle with tradelens.paths
            from ..paths import get_logs_dir
            log_dir = get_logs_dir()
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / f"tradelens_{datetime.now(timezone.utc).strftime('%Y%m%d')}.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(StructuredFormatter() if structured else ConsoleFormatter(use_colors=False))
        file_handler.setLevel(log_level_int)
        root_logger.addHandler(file_handler)
        _active_handlers.append(file_handler)

    _register_shutdown()

    with _context_lock:
        if source_file:
            set_context_value('source_file', source_file)
        if import_id:
            set_context_value('import_id', import_id)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the tradelens namespace prefix.

    Args:
        name: Logger name (e.g., 'import', 'mapping').

    Returns:
        Logger instance.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f'{ROOT_LOGGER_NAME}.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


__all__ = [
    "configure_logging",
    "shutdown_logging",
    "get_logger",
    "LogLevel",
    "ROOT_LOGGER_NAME",
]
