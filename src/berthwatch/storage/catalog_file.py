"""Local JSON export/import of the vessel catalog."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from berthwatch.storage.fleet import Fleet

logger = logging.getLogger(__name__)

CATALOG_FILENAME = "catalog.json"


def _data_dir() -> Path:
    return Path(os.environ.get("BERTHWATCH_DATA_DIR", "data"))


def default_catalog_path() -> Path:
    return _data_dir() / CATALOG_FILENAME


def save_catalog(fleet: Fleet, path: Path | None = None) -> Path:
    """Write the catalog as a JSON list. Returns the path written."""
    path = path or default_catalog_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(fleet.records(), indent=2, ensure_ascii=False))
    return path


def load_catalog(fleet: Fleet, path: Path | None = None, merge: bool = True) -> int:
    """Import a JSON catalog into the fleet, merging by default.

    A missing file imports nothing. Raises ValueError if the document is
    not a JSON list.
    """
    path = path or default_catalog_path()
    if not path.exists():
        logger.info("No catalog file at %s", path)
        return 0

    data = json.loads(path.read_text())
    if not isinstance(data, list):
        raise ValueError(f"Catalog file {path} must contain a JSON list")
    count = fleet.load_records(data, merge=merge)
    logger.info("Loaded %d vessels from %s", count, path)
    return count
