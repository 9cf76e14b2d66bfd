"""Configuration loader for the bundled JSON catalogs.

The achievement badges and the pool templates ship as JSON files in this
directory.  ``POOLUP_CATALOG_DIR`` points the loader at a different
directory, which is how a new catalog version is deployed.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import get_catalog_dir

logger = logging.getLogger(__name__)


def get_config_path(config_name: str, directory: Optional[Path] = None) -> Path:
    """Path of the JSON file backing ``config_name``."""
    return (directory or get_catalog_dir()) / f"{config_name}.json"


def load_config(config_name: str, directory: Optional[Path] = None) -> Dict[str, Any]:
    """Load a catalog file by name.

    Args:
        config_name: Name of the catalog file (without .json extension)
        directory: Directory to read from; defaults to the configured catalog dir

    Returns:
        Dictionary containing the catalog

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
        json.JSONDecodeError: If the catalog file is invalid JSON

    Example:
        >>> config = load_config('achievements')
        >>> config['achievements'][0]['id']
        'pool_buddy'
    """
    config_path = get_config_path(config_name, directory)

    if not config_path.exists():
        raise FileNotFoundError(f"Catalog file not found: {config_path}")

    logger.debug("Loading catalog %s", config_path)
    with open(config_path, 'r', encoding='utf-8') as f:
        return json.load(f)

