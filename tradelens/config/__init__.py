"""
Configuration loading for the TradeLens import toolkit.
"""

from .core import (
    load_settings,
    get_setting,
    get_config_cache,
    clear_config_cache,
)
from .import_config import (
    ImportConfig,
    DateOrder,
    DEFAULT_PREVIEW_ROWS,
    DEFAULT_MAX_CONTRACT_MULTIPLIER,
    DEFAULT_MULTIPLIER_PRECISION,
    DEFAULT_DATE_ORDER,
)

__all__ = [
    'load_settings',
    'get_setting',
    'get_config_cache',
    'clear_config_cache',
    'ImportConfig',
    'DateOrder',
    'DEFAULT_PREVIEW_ROWS',
    'DEFAULT_MAX_CONTRACT_MULTIPLIER',
    'DEFAULT_MULTIPLIER_PRECISION',
    'DEFAULT_DATE_ORDER',
]
