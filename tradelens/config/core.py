"""
Core configuration loading and cache management.

Provides settings loading and cache management functions.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Any, Optional

from ..paths import get_config_dir
from ..utils import load_yaml


logger = logging.getLogger(__name__)

# Cache for loaded configs
_config_cache: Dict[str, Any] = {}


def _get_config_path(filename: str) -> Path:
    """Get path to config file."""
    return get_config_dir() / filename


def get_config_cache() -> Dict[str, Any]:
    """
    Get the configuration cache dictionary.

    Returns:
        dict: The configuration cache dictionary
    """
    return _config_cache


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load global settings from config/settings.yaml.

    Args:
        path: Optional explicit settings file. Explicit paths are not cached.

    Returns:
        dict: Settings dictionary

    Raises:
        FileNotFoundError: If the settings file doesn't exist
    """
    if path is not None:
        logger.debug(f"Loading settings from {path}")
        return load_yaml(path)

    cache_key = 'settings'
    if cache_key in _config_cache:
        logger.debug("Returning cached settings")
        return _config_cache[cache_key]

    settings_path = _get_config_path('settings.yaml')
    logger.debug(f"Loading settings from {settings_path}")
    settings = load_yaml(settings_path)
    _config_cache[cache_key] = settings
    return settings


def get_setting(section: str, key: str, default: Any = None) -> Any:
    """
    Read a single value from a settings section.

    Missing sections or keys return the default.
    """
    section_data = load_settings().get(section) or {}
    return section_data.get(key, default)


def clear_config_cache() -> None:
    """Clear the configuration cache. Useful for testing or reloading configs."""
    cache_size = len(_config_cache)
    _config_cache.clear()
    logger.debug(f"Cleared config cache ({cache_size} entries)")
