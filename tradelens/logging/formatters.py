"""
Log formatters for structured and console output.

Provides custom formatters for:
- StructuredFormatter: JSON output for file logs
- ConsoleFormatter: Human-readable output for console
"""

import json
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# Shared context values attached to every record
_context: Dict[str, Any] = {}
_context_lock = threading.RLock()

# Context keys shown inline on console lines
_CONSOLE_CONTEXT_KEYS = ('phase', 'source_file', 'import_id')


def get_context_value(key: str) -> Optional[Any]:
    """
    Get a context value by key.

    Args:
        key: Context key to retrieve.

    Returns:
        Context value or None if not set.
    """
    with _context_lock:
        return _context.get(key)


def set_context_value(key: str, value: Any) -> None:
    """Set a context value."""
    with _context_lock:
        _context[key] = value


def clear_context_value(key: str) -> None:
    """Remove a context value if present."""
    with _context_lock:
        _context.pop(key, None)


def has_context_value(key: str) -> bool:
    """Check if a context value exists."""
    with _context_lock:
        return key in _context


def _get_all_context() -> Dict[str, Any]:
    """Return a copy of all context values."""
    with _context_lock:
        return dict(_context)


class StructuredFormatter(logging.Formatter):
    """
    JSON structured formatter for file logging.

    Outputs log records as JSON objects with:
    - timestamp: ISO 8601 UTC timestamp
    - level: Log level name
    - logger: Logger name
    - message: Log message
    - context: Current context values (phase, source_file, import_id)
    - extra: Additional fields from log_with_context
    - exception: Exception info if present
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = _get_all_context()
        if context:
            log_data["context"] = context

        extra_fields = getattr(record, 'extra_fields', None)
        if extra_fields:
            log_data["extra"] = extra_fields

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
            }
            if record.exc_text:
                log_data["exception"]["traceback"] = record.exc_text

        if record.levelno <= logging.DEBUG:
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable formatter for console output.

    Outputs log records in format:
    YYYY-MM-DD HH:MM:SS | LEVEL | logger | message [context] (code=...)
    """

    COLORS = {
        'DEBUG': '\033[2m',
        'INFO': '',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[1;31m',
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for console display."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        logger_name = record.name.split('.')[-1]
        message = record.getMessage()

        context = _get_all_context()
        context_parts = [
            f"{key}={context[key]}"
            for key in _CONSOLE_CONTEXT_KEYS
            if context.get(key)
        ]
        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        extra_fields = getattr(record, 'extra_fields', None)
        extra_str = ""
        if extra_fields and 'error_code' in extra_fields:
            extra_str = f" (code={extra_fields['error_code']})"

        formatted = f"{timestamp} | {level} | {logger_name} | {message}{context_str}{extra_str}"

        if self.use_colors:
            color = self.COLORS.get(record.levelname)
            if color:
                formatted = f"{color}{formatted}{self.RESET}"

        if record.exc_info:
            formatted = f"{formatted}\n{self.formatException(record.exc_info)}"

        return formatted


__all__ = [
    "StructuredFormatter",
    "ConsoleFormatter",
    "_context",
    "get_context_value",
    "set_context_value",
    "clear_context_value",
    "has_context_value",
]
