"""Evaluate every occupied berth of a fleet against one meteocean snapshot.

Returns structured results without printing or exiting.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from berthwatch.analysis.decision import evaluate
from berthwatch.models import BerthEvaluation, BerthPosition, MeteoceanSnapshot, Side
from berthwatch.storage.fleet import Fleet

logger = logging.getLogger(__name__)


def opposite_key(berth: BerthPosition) -> str:
    """Position key of the other side of the same pier."""
    other = Side.SEAWARD if berth.side is Side.SHOREWARD else Side.SHOREWARD
    return f"{berth.pier.value}-{other.value}"


def evaluate_fleet(
    fleet: Fleet,
    berths: Iterable[BerthPosition],
    snapshot: MeteoceanSnapshot,
) -> list[BerthEvaluation]:
    """Evaluate the vessel assigned to each berth; unassigned berths are skipped.

    A berth's neighbour counts as occupied when its flag is already set or
    the other side of the same pier has a vessel assigned.
    """
    results: list[BerthEvaluation] = []
    for berth in berths:
        vessel = fleet.assigned(berth.key)
        if vessel is None:
            continue
        if not berth.neighbor_occupied and fleet.assigned(opposite_key(berth)) is not None:
            berth = berth.model_copy(update={"neighbor_occupied": True})

        verdict = evaluate(vessel, berth, snapshot)
        results.append(BerthEvaluation(
            position_key=berth.key,
            vessel=vessel,
            berth=berth,
            verdict=verdict,
        ))

    logger.info("Evaluated %d occupied berths", len(results))
    return results
