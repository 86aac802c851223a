"""Tide-dependent minimum clearance (CMR) interpolation."""

from __future__ import annotations

from berthwatch.models import Channel, ClearanceFigures, ClearanceRow, ClearanceSegment
from berthwatch.thresholds import CLEARANCE_TABLE, CLEARANCE_TIDE_SPAN_M


def clearance(row: ClearanceRow, tide: float) -> float:
    """Linear interpolation between the tide-0 and tide-1.2 m columns, clamped to that range."""
    fraction = max(0.0, min(1.0, tide / CLEARANCE_TIDE_SPAN_M))
    return round(row.m0 + (row.m1_2 - row.m0) * fraction, 2)


def clearance_figures(channel: Channel, tide: float) -> ClearanceFigures:
    """Channel, basin and pier clearances at the given tide, plus the governing minimum.

    A transit is only clear when the draft fits all three at once, so the
    minimum is the gate.
    """
    segment = ClearanceSegment.SOUTH_CHANNEL if channel is Channel.SOUTH else ClearanceSegment.NORTH_CHANNEL
    channel_m = clearance(CLEARANCE_TABLE[segment], tide)
    basin_m = clearance(CLEARANCE_TABLE[ClearanceSegment.INNER_BASIN], tide)
    pier_m = clearance(CLEARANCE_TABLE[ClearanceSegment.NORTH_PIERS], tide)
    return ClearanceFigures(
        channel=channel_m,
        basin=basin_m,
        pier=pier_m,
        minimum=min(channel_m, basin_m, pier_m),
    )
