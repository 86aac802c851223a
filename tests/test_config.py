"""Tests for berth configuration loading."""

from __future__ import annotations

import pytest

from berthwatch.config import list_berths, load_berth
from berthwatch.models import Channel, Pier, Side


def test_bundled_berths():
    names = list_berths()
    assert "p1-shoreward" in names
    assert len(names) == 6


def test_load_bundled_berth():
    berth = load_berth("p3-seaward")
    assert berth.pier is Pier.P3
    assert berth.side is Side.SEAWARD
    assert berth.channel is Channel.SOUTH
    assert berth.neighbor_occupied is False


def test_custom_config_dir(tmp_path):
    (tmp_path / "berths.yaml").write_text(
        "berths:\n"
        "  outer:\n"
        "    pier: P2\n"
        "    side: seaward\n"
        "    arrangement: 2\n"
    )
    berth = load_berth("outer", config_dir=tmp_path)
    assert berth.key == "P2-mar"
    assert berth.arrangement == 2
    assert berth.channel is Channel.NORTH


def test_unknown_berth(tmp_path):
    (tmp_path / "berths.yaml").write_text("berths:\n  a:\n    pier: P1\n    side: praia\n")
    with pytest.raises(KeyError, match="Available: a"):
        load_berth("zzz", config_dir=tmp_path)


def test_empty_file(tmp_path):
    (tmp_path / "berths.yaml").write_text("")
    assert list_berths(config_dir=tmp_path) == []
