"""Shared test fixtures."""

from __future__ import annotations

import pytest

from berthwatch.models import BerthPosition, MeteoceanSnapshot, Pier, SectorReadings, Side, Vessel
from berthwatch.storage.fleet import Fleet


def _make_snapshot(
    tide: float = 0.6,
    hs_ext: float = 1.0,
    tp_ext: float = 10.0,
    hs_int: float = 0.8,
    tp_int: float = 10.5,
    wind_ext: float = 12.0,
    wind_int: float = 12.0,
    gust_ext: float = 18.0,
    gust_int: float = 18.0,
    berth_clearance: float = 12.0,
) -> MeteoceanSnapshot:
    """Snapshot with calm-day defaults; override only what a test cares about."""
    return MeteoceanSnapshot(
        tide=tide,
        external=SectorReadings(hs=hs_ext, tp=tp_ext, wind_mean=wind_ext, wind_gust=gust_ext),
        internal=SectorReadings(hs=hs_int, tp=tp_int, wind_mean=wind_int, wind_gust=gust_int),
        berth_clearance=berth_clearance,
    )


@pytest.fixture
def make_snapshot():
    """Factory fixture building snapshots from keyword overrides."""
    return _make_snapshot


@pytest.fixture
def calm_snapshot() -> MeteoceanSnapshot:
    return _make_snapshot()


@pytest.fixture
def psv() -> Vessel:
    """Standard PSV, category B."""
    return Vessel(name="Alfa Star", category="B", loa=75, beam=18, draft=6)


@pytest.fixture
def ahts() -> Vessel:
    """Large anchor handler, category A."""
    return Vessel(name="Bravo Tide", category="A", loa=100, beam=24, draft=7)


@pytest.fixture
def small_tanker() -> Vessel:
    return Vessel(name="Tanque Um", category="Tanker", loa=88.1, beam=14.82, draft=6.5)


@pytest.fixture
def p1_shoreward() -> BerthPosition:
    return BerthPosition(pier=Pier.P1, side=Side.SHOREWARD, arrangement=1)


@pytest.fixture
def fleet(psv: Vessel, ahts: Vessel) -> Fleet:
    f = Fleet()
    f.upsert(psv)
    f.upsert(ahts)
    return f
