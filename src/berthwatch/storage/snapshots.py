"""JSON save/load for meteocean snapshots."""

from __future__ import annotations

import json
from pathlib import Path

from berthwatch.models import MeteoceanSnapshot


def save_snapshot(snapshot: MeteoceanSnapshot, path: Path) -> Path:
    """Save a snapshot to JSON. Returns the path written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(snapshot.model_dump_json(indent=2))
    return path


def load_snapshot(path: Path) -> MeteoceanSnapshot:
    """Load a snapshot from JSON."""
    raw = json.loads(path.read_text())
    return MeteoceanSnapshot.model_validate(raw)
