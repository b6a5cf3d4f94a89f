"""
Centralized path resolution for the TradeLens import toolkit.

Provides project root discovery using marker files, with caching, so that
settings and log locations resolve the same way from scripts, tests and
library calls.
"""

import os
from functools import lru_cache
from pathlib import Path


class ProjectRootNotFoundError(Exception):
    """Raised when project root cannot be determined."""
    pass


# Project marker files in priority order
PROJECT_MARKERS = [
    'pyproject.toml',
    '.git',
    'config/settings.yaml',
    '.project_root',
]


@lru_cache(maxsize=1)
def get_project_root() -> Path:
    """
    Find the project root directory using marker-based discovery.

    Searches upward from this file's location for known project markers.
    Set the PROJECT_ROOT environment variable to override detection.

    Returns:
        Path: Absolute path to project root

    Raises:
        ProjectRootNotFoundError: If no project markers are found
    """
    env_root = os.environ.get('PROJECT_ROOT')
    if env_root:
        env_path = Path(env_root)
        if env_path.exists():
            return env_path.resolve()

    current = Path(__file__).resolve().parent
    searched_paths = []

    while current != current.parent:
        searched_paths.append(current)
        for marker in PROJECT_MARKERS:
            if (current / marker).exists():
                return current
        current = current.parent

    raise ProjectRootNotFoundError(
        f"Could not find project root. Searched for markers {PROJECT_MARKERS} "
        f"in directories: {searched_paths[:5]}... "
        f"Set PROJECT_ROOT environment variable to override."
    )


def get_config_dir() -> Path:
    """Get the config directory path."""
    return get_project_root() / 'config'


def get_logs_dir() -> Path:
    """Get the logs directory path."""
    return get_project_root() / 'logs'


def get_exports_dir() -> Path:
    """Get the default directory for formatted CSV exports."""
    return get_project_root() / 'exports'
