"""Permanence (on-berth) check."""

from __future__ import annotations

from berthwatch.models import BerthPosition, MeteoceanSnapshot, PermanenceResult, Vessel
from berthwatch.parsing import format_number as fmt
from berthwatch.thresholds import (
    GUST_CEILING_KN,
    MIN_SIDE_CLEARANCE_M,
    onberth_limit_for,
    wind_limit_for,
)


def side_clearance_required(berth: BerthPosition) -> bool:
    """Side clearance is checked when a neighbour is alongside and not already confirmed."""
    return berth.neighbor_occupied and not berth.side_clearance_confirmed


def check_permanence(
    vessel: Vessel, berth: BerthPosition, snapshot: MeteoceanSnapshot
) -> PermanenceResult:
    """Evaluate every on-berth sub-check and collect all failure reasons.

    Wind and gust use the worst of the external and internal readings.
    """
    failures: list[str] = []

    wind_limit = wind_limit_for(vessel.category, berth.pier, berth.side, berth.neighbor_occupied)
    worst_wind = snapshot.worst_wind_mean
    if wind_limit is None:
        failures.append("Berth not applicable for category")
    elif worst_wind > wind_limit:
        failures.append(f"Mean wind {fmt(worst_wind)} kn > {fmt(wind_limit)} kn")

    worst_gust = snapshot.worst_wind_gust
    if worst_gust > GUST_CEILING_KN:
        failures.append(f"Gust {fmt(worst_gust)} kn > {fmt(GUST_CEILING_KN)} kn ceiling")

    limit, source = onberth_limit_for(vessel.category, berth.pier, berth.side, berth.arrangement)
    if not (snapshot.internal.hs <= limit.hs and snapshot.internal.tp <= limit.tp):
        failures.append(
            f"On-berth Hs x Tp exceeded (limit {fmt(limit.hs)} m / {fmt(limit.tp)} s)"
        )

    checked = side_clearance_required(berth)
    if checked and snapshot.berth_clearance < MIN_SIDE_CLEARANCE_M:
        failures.append(
            f"Side clearance {fmt(snapshot.berth_clearance)} m < "
            f"{fmt(MIN_SIDE_CLEARANCE_M)} m with neighbour occupied"
        )

    return PermanenceResult(
        ok=not failures,
        failures=tuple(failures),
        wind_limit=wind_limit,
        worst_wind_mean=worst_wind,
        worst_wind_gust=worst_gust,
        gust_ceiling=GUST_CEILING_KN,
        onberth_limit=limit,
        onberth_source=source,
        side_clearance_checked=checked,
    )
