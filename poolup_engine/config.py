"""Configuration management for the savings engine.

This module centralizes the catalog location, the fixed numeric policies
used by the calculators, and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

# Base package root - assumes this file is in poolup_engine/
_PACKAGE_ROOT = Path(__file__).parent.resolve()

# Catalog data (achievement badges, pool templates, category policies)
CATALOG_DIR = Path(
    os.getenv("POOLUP_CATALOG_DIR", _PACKAGE_ROOT / "catalogs")
).resolve()

LOG_LEVEL = os.getenv("POOLUP_LOG_LEVEL", "WARNING")

# Fixed rounding policy: months are counted in blocks of 30.44 days rather
# than following calendar month lengths.
DAYS_PER_MONTH = 30.44

# Divisor for the per-day figure shown next to the monthly amount.
DAYS_PER_MONTH_DISPLAY = 30

DEFAULT_CURRENCY = "USD"

CENTS_PER_UNIT = 100


def get_catalog_dir() -> Path:
    """Get the catalog directory, re-reading the environment override."""
    override = os.getenv("POOLUP_CATALOG_DIR")
    if override:
        return Path(override).resolve()
    return CATALOG_DIR


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging for scripts and interactive use."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
