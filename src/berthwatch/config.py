"""Named berth position loading from YAML."""

from __future__ import annotations

from pathlib import Path

import yaml

from berthwatch.models import BerthPosition

CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "config"


def _load_berths_file(config_dir: Path | None) -> dict:
    config_dir = config_dir or CONFIG_DIR
    berths_file = config_dir / "berths.yaml"

    with open(berths_file) as f:
        data = yaml.safe_load(f) or {}

    return data.get("berths", {})


def load_berth(name: str, config_dir: Path | None = None) -> BerthPosition:
    """Load a named berth position from berths.yaml.

    Args:
        name: Berth key in berths.yaml.
        config_dir: Override for config directory (testing).
    """
    berths = _load_berths_file(config_dir)
    if name not in berths:
        available = ", ".join(berths.keys())
        raise KeyError(f"Berth '{name}' not found. Available: {available}")

    b = berths[name]
    return BerthPosition(
        pier=b["pier"],
        side=b["side"],
        arrangement=b.get("arrangement", 1),
        channel=b.get("channel", "norte"),
    )


def list_berths(config_dir: Path | None = None) -> list[str]:
    """List available berth names."""
    return list(_load_berths_file(config_dir).keys())
