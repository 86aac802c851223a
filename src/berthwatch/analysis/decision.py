"""Berthing decision engine: navigation + permanence -> Go / Go-with-restriction / No-Go.

Usage:
    from berthwatch.analysis.decision import evaluate

    verdict = evaluate(vessel, berth, snapshot)

``evaluate`` only reads its arguments and the static threshold tables, so
calls for different berths are independent of each other.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from berthwatch.analysis.navigation import check_navigation
from berthwatch.analysis.permanence import check_permanence
from berthwatch.models import (
    BerthPosition,
    DecisionStatus,
    MeteoceanSnapshot,
    NavigationResult,
    PermanenceResult,
    Verdict,
    Vessel,
)
from berthwatch.parsing import format_number as fmt
from berthwatch.thresholds import (
    CLEARANCE_TOLERANCE_M,
    MIN_SIDE_CLEARANCE_M,
    PERIOD_TOLERANCE_S,
    RESTRICTION_MITIGATIONS,
    WAVE_HEIGHT_TOLERANCE_M,
    WIND_TOLERANCE_KN,
)

logger = logging.getLogger(__name__)


def _within(margin: float, tolerance: float) -> bool:
    # rounding keeps 2.0 - 1.9 from landing just above 0.1
    return round(margin, 6) <= tolerance


def near_limits(
    navigation: NavigationResult,
    permanence: PermanenceResult,
    snapshot: MeteoceanSnapshot,
) -> list[str]:
    """Describe every passing reading that sits within tolerance of the limit it was checked against."""
    near: list[str] = []
    ext = snapshot.external
    internal = snapshot.internal

    rule = navigation.channel_rule
    if rule is not None:
        if _within(rule.hs - ext.hs, WAVE_HEIGHT_TOLERANCE_M):
            near.append(f"Channel Hs {fmt(ext.hs)} m near limit {fmt(rule.hs)} m")
        if _within(rule.tp - ext.tp, PERIOD_TOLERANCE_S):
            near.append(f"Channel Tp {fmt(ext.tp)} s near limit {fmt(rule.tp)} s")

    minimum = navigation.clearance.minimum
    if _within(minimum - navigation.draft, CLEARANCE_TOLERANCE_M):
        near.append(f"Draft {fmt(navigation.draft)} m near minimum clearance {fmt(minimum)} m")

    if permanence.wind_limit is not None and _within(
        permanence.wind_limit - permanence.worst_wind_mean, WIND_TOLERANCE_KN
    ):
        near.append(
            f"Mean wind {fmt(permanence.worst_wind_mean)} kn near limit {fmt(permanence.wind_limit)} kn"
        )
    if _within(permanence.gust_ceiling - permanence.worst_wind_gust, WIND_TOLERANCE_KN):
        near.append(
            f"Gust {fmt(permanence.worst_wind_gust)} kn near ceiling {fmt(permanence.gust_ceiling)} kn"
        )

    limit = permanence.onberth_limit
    if _within(limit.hs - internal.hs, WAVE_HEIGHT_TOLERANCE_M):
        near.append(f"On-berth Hs {fmt(internal.hs)} m near limit {fmt(limit.hs)} m")
    if _within(limit.tp - internal.tp, PERIOD_TOLERANCE_S):
        near.append(f"On-berth Tp {fmt(internal.tp)} s near limit {fmt(limit.tp)} s")

    if permanence.side_clearance_checked and _within(
        snapshot.berth_clearance - MIN_SIDE_CLEARANCE_M, CLEARANCE_TOLERANCE_M
    ):
        near.append(
            f"Side clearance {fmt(snapshot.berth_clearance)} m near minimum {fmt(MIN_SIDE_CLEARANCE_M)} m"
        )

    return near


def evaluate(vessel: Vessel, berth: BerthPosition, snapshot: MeteoceanSnapshot) -> Verdict:
    """Evaluate one vessel at one berth against a meteocean snapshot."""
    navigation = check_navigation(vessel, berth, snapshot)
    permanence = check_permanence(vessel, berth, snapshot)

    near: list[str] = []
    mitigations: tuple[str, ...] = ()
    if not (navigation.ok and permanence.ok):
        status = DecisionStatus.NO_GO
    else:
        near = near_limits(navigation, permanence, snapshot)
        if near:
            status = DecisionStatus.GO_WITH_RESTRICTION
            mitigations = RESTRICTION_MITIGATIONS
        else:
            status = DecisionStatus.GO

    logger.debug(
        "Evaluated %s (%s) at %s: %s", vessel.name, vessel.category.value, berth.key, status.value,
    )

    return Verdict(
        status=status,
        navigation=navigation,
        permanence=permanence,
        near_limits=tuple(near),
        mitigations=mitigations,
    )


def fleet_status(statuses: Iterable[DecisionStatus]) -> DecisionStatus:
    """Return the worst status across several evaluations (Go when there are none)."""
    order = [DecisionStatus.GO, DecisionStatus.GO_WITH_RESTRICTION, DecisionStatus.NO_GO]
    worst = DecisionStatus.GO
    for s in statuses:
        if order.index(s) > order.index(worst):
            worst = s
    return worst
