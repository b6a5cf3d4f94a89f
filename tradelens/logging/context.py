"""
Logging context management.

Provides a context manager for tagging every log line emitted during an
import run with the phase, source file and import identifier.
"""

import threading
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from .formatters import (
    _context,
    get_context_value,
    set_context_value,
    clear_context_value,
    has_context_value,
)

_context_lock = threading.RLock()


def reset_context() -> None:
    """Clear all context values at once (useful between test cases)."""
    with _context_lock:
        _context.clear()


@contextmanager
def LogContext(
    phase: str,
    source_file: Optional[str] = None,
    import_id: Optional[str] = None,
) -> Generator[None, None, None]:
    """
    Context manager for adding context to all logs within the block.

    Usage:
        with LogContext(phase="mapping", source_file="broker.csv"):
            mapping = get_smart_mapping_defaults(headers)

    Args:
        phase: Pipeline phase (e.g., "read", "mapping", "process", "export").
        source_file: Optional CSV file name.
        import_id: Optional import run identifier.
    """
    context_fields: Dict[str, Any] = {
        'phase': phase,
        'source_file': source_file,
        'import_id': import_id,
    }

    prev_values: Dict[str, Any] = {}
    with _context_lock:
        for key, value in context_fields.items():
            if value is not None or key == 'phase':
                prev_values[key] = get_context_value(key)
                set_context_value(key, value)

    try:
        yield
    finally:
        with _context_lock:
            for key, prev_value in prev_values.items():
                if prev_value is not None:
                    set_context_value(key, prev_value)
                elif has_context_value(key):
                    clear_context_value(key)


__all__ = [
    "LogContext",
    "reset_context",
    "get_context_value",
    "set_context_value",
    "clear_context_value",
    "has_context_value",
]
