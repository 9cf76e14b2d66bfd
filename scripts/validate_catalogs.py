#!/usr/bin/env python3
"""Lightweight validator for the achievement and template catalog JSON files."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional

from poolup_engine.achievements import AchievementCatalog
from poolup_engine.config import configure_logging, get_catalog_dir
from poolup_engine.templates import TemplateCategory, build_template_catalog


def validate_achievements(path: Path) -> List[str]:
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    try:
        AchievementCatalog.from_config(data)
    except (KeyError, ValueError) as exc:
        return [f"{path.name}: {exc}"]
    return []


def validate_templates(path: Path) -> List[str]:
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    try:
        catalog = build_template_catalog(data)
    except (KeyError, ValueError) as exc:
        return [f"{path.name}: {exc}"]

    errors = []
    missing = [c.value for c in TemplateCategory if c not in catalog.policies]
    if missing:
        errors.append(f"{path.name}: no policy for categories {', '.join(missing)}")
    for template in catalog.templates:
        if not template.fields:
            errors.append(f"{path.name}: template '{template.id}' has no fields")
    return errors


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--catalog-dir", type=Path, default=None)
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    catalog_dir = args.catalog_dir or get_catalog_dir()
    if not catalog_dir.exists():
        print(f"Catalog directory not found: {catalog_dir}")
        return 1

    issues: List[str] = []
    for name, validator in (("achievements", validate_achievements), ("templates", validate_templates)):
        path = catalog_dir / f"{name}.json"
        if not path.exists():
            issues.append(f"{path.name}: missing")
            continue
        try:
            issues.extend(validator(path))
        except json.JSONDecodeError as exc:
            issues.append(f"{path.name}: invalid JSON ({exc})")

    if issues:
        print("Catalog validation failed:")
        for message in issues:
            print(f"  - {message}")
        return 1

    print("All catalogs validated successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
