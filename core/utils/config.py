"""
YAML helpers for config/providers/*.yaml
"""

from pathlib import Path
from typing import Any

import yaml


def load_yaml(filepath: str | Path) -> dict[str, Any]:
    """
    Parse a YAML mapping

    Args:
        filepath: YAML file, relative to the working directory or absolute

    Returns:
        Parsed mapping ({} for an empty document)

    Raises:
        FileNotFoundError: Missing file
        yaml.YAMLError: Malformed YAML

    Example:
        >>> load_yaml("config/providers/cache.yaml")["ttl_seconds"]["indicators"]
        300
    """
    path = Path(filepath)
    if not path.is_file():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_yaml_safe(filepath: str | Path) -> dict[str, Any]:
    """
    Like load_yaml(), but a missing or malformed file yields {}

    Settings fall back to their built-in defaults in that case.
    """
    try:
        return load_yaml(filepath)
    except (FileNotFoundError, yaml.YAMLError):
        return {}
