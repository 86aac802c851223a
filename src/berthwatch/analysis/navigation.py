"""Navigation (channel entry) check."""

from __future__ import annotations

from berthwatch.analysis.clearance import clearance_figures
from berthwatch.models import (
    BerthPosition,
    Category,
    MeteoceanSnapshot,
    NavigationResult,
    Pier,
    Side,
    Vessel,
)
from berthwatch.parsing import format_number as fmt
from berthwatch.thresholds import channel_rule_for, is_tanker_position


def check_navigation(
    vessel: Vessel, berth: BerthPosition, snapshot: MeteoceanSnapshot
) -> NavigationResult:
    """Evaluate every entry sub-check and collect all failure reasons."""
    failures: list[str] = []
    rule = None

    if vessel.category is Category.A and berth.is_at(Pier.P3, Side.SEAWARD):
        failures.append("Category A not authorized at P3-seaward")

    if vessel.category is Category.TANKER and not is_tanker_position(berth.pier, berth.side):
        failures.append("Tanker only at P1-seaward or P2-shoreward")
    else:
        rule = channel_rule_for(vessel.category, berth.pier, berth.side)
        if rule is None:
            failures.append("No applicable channel rule")
        elif not (snapshot.external.hs <= rule.hs and snapshot.external.tp <= rule.tp):
            failures.append(
                f"Channel Hs x Tp exceeded (limit {fmt(rule.hs)} m / {fmt(rule.tp)} s)"
            )

    figures = clearance_figures(berth.channel, snapshot.tide)
    if vessel.draft > figures.minimum:
        failures.append(
            f"Insufficient clearance: draft {fmt(vessel.draft)} m > {fmt(figures.minimum)} m"
        )

    return NavigationResult(
        ok=not failures,
        failures=tuple(failures),
        channel_rule=rule,
        clearance=figures,
        draft=vessel.draft,
    )
