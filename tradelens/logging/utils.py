"""
Logging utility functions.

Provides helper functions for structured logging with context,
exception handling, and validation result logging.
"""

import logging
import sys
import traceback
from typing import Any, Dict, Optional, Union

from .config import LogLevel, _get_logging_level
from .error_codes import ErrorCode


def log_with_context(
    logger: logging.Logger,
    level: Union[int, LogLevel],
    message: str,
    error_code: Optional[ErrorCode] = None,
    **kwargs: Any,
) -> None:
    """
    Log a message with additional context fields.

    Args:
        logger: Logger instance.
        level: Logging level (e.g., logging.INFO or "INFO").
        message: Log message.
        error_code: Optional error code for structured error tracking.
        **kwargs: Additional context fields to include.

    Raises:
        ValueError: If level string is not a valid log level.
    """
    if isinstance(level, str):
        level = _get_logging_level(level)

    if not logger.isEnabledFor(level):
        return

    record = logger.makeRecord(
        logger.name, level, '', 0, message, (), None
    )

    extra_fields = dict(kwargs)
    if error_code is not None:
        extra_fields['error_code'] = error_code.code
        extra_fields['error_category'] = error_code.category

    record.extra_fields = extra_fields
    logger.handle(record)


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: Optional[BaseException] = None,
    error_code: Optional[ErrorCode] = None,
    include_traceback: bool = True,
    **kwargs: Any,
) -> None:
    """
    Log an exception with consistent traceback formatting.

    Args:
        logger: Logger instance.
        message: Log message describing the error context.
        exc: Exception instance (uses sys.exc_info() if None).
        error_code: Optional error code for structured error tracking.
        include_traceback: Whether to include full traceback.
        **kwargs: Additional context fields to include.

    Usage:
        try:
            settings = load_settings()
        except FileNotFoundError as e:
            log_exception(
                logger,
                "Settings file missing",
                exc=e,
                error_code=ErrorCode.CONFIG_LOAD_ERROR,
            )
    """
    extra_fields = dict(kwargs)

    if exc is None:
        exc_info = sys.exc_info()
        exc = exc_info[1]
    else:
        exc_info = (type(exc), exc, exc.__traceback__)

    if exc is not None:
        extra_fields['exception_type'] = type(exc).__name__
        extra_fields['exception_message'] = str(exc)

        if include_traceback and exc_info[2] is not None:
            extra_fields['traceback'] = ''.join(traceback.format_exception(*exc_info))

    if error_code is not None:
        extra_fields['error_code'] = error_code.code
        extra_fields['error_category'] = error_code.category

    record = logger.makeRecord(
        logger.name, logging.ERROR, '', 0, message, (),
        exc_info if include_traceback and exc is not None else None
    )
    record.extra_fields = extra_fields
    logger.handle(record)


def log_validation_result(
    logger: logging.Logger,
    result: Any,
    include_details: bool = True,
) -> None:
    """
    Log a ValidationResult with appropriate log levels.

    Logs failures at ERROR, passes-with-warnings at WARNING and clean passes
    at INFO.

    Args:
        logger: Logger instance to use.
        result: ValidationResult from tradelens.validation.
        include_details: Whether to include detailed issue information.
    """
    is_valid = getattr(result, 'passed', True)
    errors = list(getattr(result, 'errors', []))
    warnings = list(getattr(result, 'warnings', []))

    if is_valid and not errors:
        if warnings:
            summary = f"Validation passed with {len(warnings)} warning(s)"
            level = logging.WARNING
        else:
            summary = "Validation passed successfully"
            level = logging.INFO
    else:
        summary = f"Validation failed: {len(errors)} error(s), {len(warnings)} warning(s)"
        level = logging.ERROR

    extra: Dict[str, Any] = {
        'is_valid': is_valid,
        'error_count': len(errors),
        'warning_count': len(warnings),
    }

    if include_details:
        if errors:
            extra['errors'] = [str(e) for e in errors[:10]]
        if warnings:
            extra['warnings'] = [str(w) for w in warnings[:10]]

    log_with_context(logger, level, summary, **extra)

    if include_details:
        for error in errors[:5]:
            log_with_context(
                logger,
                logging.ERROR,
                str(error),
                error_code=ErrorCode.VALIDATION_ERROR,
            )


__all__ = [
    "log_with_context",
    "log_exception",
    "log_validation_result",
]
