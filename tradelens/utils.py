"""
Utility functions for the TradeLens import toolkit.

Provides directory management and YAML handling.
"""

from pathlib import Path
from typing import Any, Dict, Union

import yaml


def ensure_dir(path: Path) -> Path:
    """
    Create directory if it doesn't exist.

    Args:
        path: Directory path to ensure exists

    Returns:
        Path: The directory path
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML file.

    Args:
        path: Path to YAML file

    Returns:
        dict: Parsed YAML content (empty dict for an empty file)

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the document is not valid YAML or not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"YAML file {path} must contain a mapping, got {type(content).__name__}")
    return content


def save_yaml(data: Dict[str, Any], path: Union[str, Path]) -> None:
    """
    Save data to a YAML file.

    Args:
        data: Dictionary to save
        path: Path to save YAML file
    """
    path = Path(path)
    ensure_dir(path.parent)

    with open(path, 'w', encoding='utf-8') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
