"""Plain text technical note for a No-Go verdict."""

from __future__ import annotations

from datetime import datetime, timezone

from berthwatch.models import BerthPosition, DecisionStatus, MeteoceanSnapshot, Verdict, Vessel
from berthwatch.parsing import format_number as fmt

SEPARATOR = "=" * 60

SIGNATURE = (
    "Port Operations - Berthing Decision Support",
    "Issued from meteocean criteria in force; subject to Harbor Master review.",
)


def compose(
    vessel: Vessel,
    berth: BerthPosition,
    snapshot: MeteoceanSnapshot,
    verdict: Verdict,
    issued_at: datetime | None = None,
) -> str:
    """Format a technical note explaining a No-Go verdict.

    Raises:
        ValueError: if the verdict is not No-Go.
    """
    if verdict.status is not DecisionStatus.NO_GO:
        raise ValueError(f"Technical note is only issued for No-Go verdicts, got {verdict.status.value}")

    issued_at = issued_at or datetime.now(timezone.utc)
    lines: list[str] = []

    # Header
    lines.append(SEPARATOR)
    lines.append(f"  TECHNICAL NOTE - {vessel.name}")
    lines.append(
        f"  Category {vessel.category.value}  LOA {fmt(vessel.loa)} m  "
        f"Beam {fmt(vessel.beam)} m  Draft {fmt(vessel.draft)} m"
    )
    lines.append(
        f"  Berth {berth.label} (arrangement {berth.arrangement}), "
        f"channel {berth.channel.value}"
    )
    lines.append(f"  Issued: {issued_at.strftime('%Y-%m-%d %H:%MZ')}")
    lines.append(SEPARATOR)
    lines.append("")

    lines.extend(_format_environment(snapshot, verdict))

    if verdict.navigation.failures:
        lines.append("")
        lines.append("--- Navigation failures ---")
        lines.extend(f"  - {reason}" for reason in verdict.navigation.failures)

    if verdict.permanence.failures:
        lines.append("")
        lines.append("--- Permanence failures ---")
        lines.extend(f"  - {reason}" for reason in verdict.permanence.failures)

    lines.append("")
    lines.append(f"Decision: {verdict.status.value}")
    lines.append(f"Recommendation: {_recommendation(verdict)}")
    lines.append("")
    lines.append(SEPARATOR)
    lines.extend(f"  {line}" for line in SIGNATURE)
    lines.append(SEPARATOR)
    return "\n".join(lines)


def _format_environment(snapshot: MeteoceanSnapshot, verdict: Verdict) -> list[str]:
    ext = snapshot.external
    internal = snapshot.internal
    cmr = verdict.navigation.clearance
    return [
        "--- Meteocean summary ---",
        f"  External: Hs {fmt(ext.hs)} m, Tp {fmt(ext.tp)} s, "
        f"Wind {fmt(ext.wind_mean)} kn, Gust {fmt(ext.wind_gust)} kn",
        f"  Internal: Hs {fmt(internal.hs)} m, Tp {fmt(internal.tp)} s, "
        f"Wind {fmt(internal.wind_mean)} kn, Gust {fmt(internal.wind_gust)} kn "
        f"(ceiling {fmt(verdict.permanence.gust_ceiling)} kn)",
        f"  Tide {fmt(snapshot.tide)} m | Min clearance {fmt(cmr.minimum)} m "
        f"(channel {fmt(cmr.channel)} / basin {fmt(cmr.basin)} / pier {fmt(cmr.pier)})",
        f"  Side clearance {fmt(snapshot.berth_clearance)} m",
    ]


def _recommendation(verdict: Verdict) -> str:
    nav_ok = verdict.navigation.ok
    perm_ok = verdict.permanence.ok
    if not nav_ok and not perm_ok:
        return "Entry and permanence advised against. Wait for improvement or a safe departure."
    if not nav_ok:
        return "Navigation/entry advised against at this time."
    return "Permanence at berth advised against at this time."
