"""Static threshold tables and the lookups that select from them.

Lookups return ``None`` when no rule applies to a combination; callers turn
that into a failure reason rather than an error.
"""

from __future__ import annotations

from types import MappingProxyType

from berthwatch.models import Category, ClearanceRow, ClearanceSegment, Pier, Side, WaveLimit

# Facility maxima enforced at registration
MAX_LOA_M = 120.0
MAX_DRAFT_M = 8.4

GUST_CEILING_KN = 27.0
MIN_SIDE_CLEARANCE_M = 10.0

# Tide at which the second clearance column applies
CLEARANCE_TIDE_SPAN_M = 1.2

CLEARANCE_TABLE = MappingProxyType({
    ClearanceSegment.SOUTH_CHANNEL: ClearanceRow(m0=9.1, m1_2=10.2),
    ClearanceSegment.NORTH_CHANNEL: ClearanceRow(m0=8.0, m1_2=9.1),
    ClearanceSegment.INNER_BASIN: ClearanceRow(m0=9.0, m1_2=10.1),
    ClearanceSegment.NORTH_PIERS: ClearanceRow(m0=8.0, m1_2=9.1),
})

# Near-limit tolerances
WAVE_HEIGHT_TOLERANCE_M = 0.1
PERIOD_TOLERANCE_S = 0.5
CLEARANCE_TOLERANCE_M = 0.1
WIND_TOLERANCE_KN = 1.0

RESTRICTION_MITIGATIONS = (
    "Extra mooring lines",
    "Tugs on standby",
    "Gust and wave watch",
    "Pause deck work as needed",
)

_REDUCED_CHANNEL = WaveLimit(hs=1.5, tp=12)
_OPEN_CHANNEL = WaveLimit(hs=2.0, tp=12)

DEFAULT_ONBERTH_LIMIT = WaveLimit(hs=1.2, tp=12)

TANKER_POSITIONS = ((Pier.P1, Side.SEAWARD), (Pier.P2, Side.SHOREWARD))


def is_p3_seaward(pier: Pier, side: Side) -> bool:
    return pier is Pier.P3 and side is Side.SEAWARD


def is_tanker_position(pier: Pier, side: Side) -> bool:
    return (pier, side) in TANKER_POSITIONS


def channel_rule_for(category: Category, pier: Pier, side: Side) -> WaveLimit | None:
    """Channel Hs/Tp entry limit for a category bound to a berth."""
    if category is Category.A:
        return _REDUCED_CHANNEL
    if category in (Category.B, Category.C):
        return _REDUCED_CHANNEL if is_p3_seaward(pier, side) else _OPEN_CHANNEL
    if category is Category.TANKER and is_tanker_position(pier, side):
        return _REDUCED_CHANNEL
    return None


def wind_limit_for(
    category: Category, pier: Pier, side: Side, neighbor_occupied: bool
) -> float | None:
    """Mean wind limit (kn) while moored."""
    by_neighbor = 15.0 if neighbor_occupied else 18.0
    if category is Category.A:
        return by_neighbor
    if category is Category.B:
        return 15.0 if is_p3_seaward(pier, side) else 27.0
    if category is Category.C:
        if is_p3_seaward(pier, side):
            return 15.0
        if pier is Pier.P3:
            return 27.0
        return by_neighbor
    if category is Category.TANKER and is_tanker_position(pier, side):
        return by_neighbor
    return None


# --- On-berth presets ---
#
# Two co-located reference points ("P1" and "P1P") per (category, pier, side,
# mooring arrangement). The governing limit is their component-wise minimum.
# Both points carry the aggregated per-category harbor limits.

ONBERTH_CATEGORY_LIMITS = MappingProxyType({
    Category.A: WaveLimit(hs=1.2, tp=12),
    Category.B: WaveLimit(hs=2.0, tp=12),
    Category.C: WaveLimit(hs=2.4, tp=12),
    Category.TANKER: WaveLimit(hs=1.5, tp=12),
})

MOORING_ARRANGEMENTS = (1, 2)

_ALL_POSITIONS = tuple((pier, side) for pier in Pier for side in Side)

_PRESET_POSITIONS = {
    Category.A: tuple(p for p in _ALL_POSITIONS if not is_p3_seaward(*p)),
    Category.B: _ALL_POSITIONS,
    Category.C: _ALL_POSITIONS,
    Category.TANKER: TANKER_POSITIONS,
}

ONBERTH_PRESETS = MappingProxyType({
    (category, pier, side, arrangement): MappingProxyType({"P1": limit, "P1P": limit})
    for category, limit in ONBERTH_CATEGORY_LIMITS.items()
    for pier, side in _PRESET_POSITIONS[category]
    for arrangement in MOORING_ARRANGEMENTS
})


def onberth_preset_for(
    category: Category, pier: Pier, side: Side, arrangement: int
) -> WaveLimit | None:
    """Governing on-berth limit from the presets, or None when no preset exists."""
    points = ONBERTH_PRESETS.get((category, pier, side, arrangement))
    if points is None:
        return None
    return WaveLimit(
        hs=min(limit.hs for limit in points.values()),
        tp=min(limit.tp for limit in points.values()),
    )


def onberth_limit_for(
    category: Category, pier: Pier, side: Side, arrangement: int
) -> tuple[WaveLimit, str]:
    """On-berth limit and its source ("preset" or "default")."""
    preset = onberth_preset_for(category, pier, side, arrangement)
    if preset is None:
        return DEFAULT_ONBERTH_LIMIT, "default"
    return preset, "preset"
