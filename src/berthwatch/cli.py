"""CLI entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from berthwatch.analysis.classify import classify
from berthwatch.analysis.decision import evaluate, fleet_status
from berthwatch.config import list_berths, load_berth
from berthwatch.digest.note import compose
from berthwatch.models import (
    BerthPosition,
    Channel,
    DecisionStatus,
    MeteoceanSnapshot,
    SectorReadings,
    SyncStatus,
    Verdict,
    Vessel,
)
from berthwatch.pipeline import evaluate_fleet
from berthwatch.storage.catalog_file import load_catalog, save_catalog
from berthwatch.storage.fleet import Fleet
from berthwatch.storage.github import GitHubCatalogStore, GitHubConfig
from berthwatch.storage.snapshots import load_snapshot
from berthwatch.storage.sync import CatalogSync

logger = logging.getLogger(__name__)


def _load_fleet(path: Path | None) -> Fleet:
    fleet = Fleet()
    load_catalog(fleet, path, merge=False)
    return fleet


def _build_vessel(args: argparse.Namespace) -> Vessel:
    """Vessel from the local catalog (--vessel) or from inline dimensions."""
    if args.vessel:
        fleet = _load_fleet(args.catalog)
        try:
            return fleet.get(args.vessel)
        except KeyError as exc:
            print(f"Error: {exc.args[0]}")
            sys.exit(1)

    if args.loa is None or args.draft is None:
        print("Error: Provide --vessel NAME or --loa/--beam/--draft.")
        sys.exit(1)
    return Vessel(
        name=args.name,
        category=args.category,
        loa=args.loa,
        beam=args.beam,
        draft=args.draft,
    )


def _build_berth(args: argparse.Namespace) -> BerthPosition:
    """BerthPosition from a named berth (--berth) or inline pier/side."""
    if args.berth:
        berth = load_berth(args.berth)
        update = {}
        if args.arrangement is not None:
            update["arrangement"] = args.arrangement
        if args.channel:
            update["channel"] = args.channel
        if update:
            berth = BerthPosition.model_validate({**berth.model_dump(), **update})
    else:
        if not (args.pier and args.side):
            print("Error: Provide --berth NAME or --pier and --side.")
            sys.exit(1)
        berth = BerthPosition(
            pier=args.pier,
            side=args.side,
            arrangement=args.arrangement or 1,
            channel=args.channel or "norte",
        )
    return berth.model_copy(update={
        "neighbor_occupied": args.neighbor,
        "side_clearance_confirmed": args.clearance_confirmed,
    })


def _build_snapshot(args: argparse.Namespace) -> MeteoceanSnapshot:
    if args.snapshot:
        return load_snapshot(args.snapshot)
    external_wind = args.wind_ext if args.wind_ext is not None else args.wind
    external_gust = args.gust_ext if args.gust_ext is not None else args.gust
    return MeteoceanSnapshot(
        tide=args.tide,
        external=SectorReadings(hs=args.hs_ext, tp=args.tp_ext, wind_mean=external_wind, wind_gust=external_gust),
        internal=SectorReadings(hs=args.hs_int, tp=args.tp_int, wind_mean=args.wind, wind_gust=args.gust),
        berth_clearance=args.berth_clearance,
    )


def _print_verdict(vessel: Vessel, berth: BerthPosition, verdict: Verdict) -> None:
    print(f"{vessel.name} [{vessel.category.value}] at {berth.label}: {verdict.status.value}")
    nav = verdict.navigation
    cmr = nav.clearance
    print(
        f"  Navigation: {'OK' if nav.ok else 'FAIL'}  "
        f"min clearance {cmr.minimum} m (channel {cmr.channel} / basin {cmr.basin} / pier {cmr.pier})"
    )
    for reason in nav.failures:
        print(f"    - {reason}")
    perm = verdict.permanence
    print(
        f"  Permanence: {'OK' if perm.ok else 'FAIL'}  "
        f"on-berth limit {perm.onberth_limit.hs} m / {perm.onberth_limit.tp} s ({perm.onberth_source})"
    )
    for reason in perm.failures:
        print(f"    - {reason}")
    for item in verdict.near_limits:
        print(f"  Near limit: {item}")
    if verdict.mitigations:
        print(f"  Mitigations: {', '.join(verdict.mitigations)}")


def run_evaluate(args: argparse.Namespace) -> None:
    vessel = _build_vessel(args)
    berth = _build_berth(args)
    snapshot = _build_snapshot(args)
    verdict = evaluate(vessel, berth, snapshot)

    if args.json:
        print(verdict.model_dump_json(indent=2))
    else:
        _print_verdict(vessel, berth, verdict)

    if args.note and verdict.status is DecisionStatus.NO_GO:
        print()
        print(compose(vessel, berth, snapshot, verdict))


def run_catalog(args: argparse.Namespace) -> None:
    if args.action == "list":
        fleet = _load_fleet(args.catalog)
        for v in fleet.vessels():
            print(f"  {v.name:<24} {v.category.value:<7} LOA {v.loa:g}  Beam {v.beam:g}  Draft {v.draft:g}")
        return

    if args.action == "add":
        fleet = _load_fleet(args.catalog)
        try:
            vessel = fleet.register(args.name, args.loa, args.beam, args.draft, args.category)
        except ValueError as exc:
            print(f"Error: {exc}")
            sys.exit(1)
        path = save_catalog(fleet, args.catalog)
        print(f"Registered {vessel.name} as category {vessel.category.value} ({path})")
        return

    if args.action == "remove":
        fleet = _load_fleet(args.catalog)
        try:
            fleet.remove(args.name)
        except KeyError as exc:
            print(f"Error: {exc.args[0]}")
            sys.exit(1)
        save_catalog(fleet, args.catalog)
        print(f"Removed {args.name}")
        return

    try:
        config = GitHubConfig.from_env()
    except ValueError as exc:
        print(f"Error: {exc}")
        sys.exit(1)
    sync = CatalogSync(GitHubCatalogStore(config))

    if args.action == "pull":
        fleet = Fleet()
        status = sync.pull(fleet)
        if status is SyncStatus.SYNCED:
            path = save_catalog(fleet, args.catalog)
            print(f"Pulled {len(fleet)} vessels into {path}")
    else:
        fleet = _load_fleet(args.catalog)
        status = sync.refresh_token()
        if status is SyncStatus.SYNCED:
            status = sync.push(fleet)
        if status is SyncStatus.SYNCED:
            print(f"Pushed {len(fleet)} vessels")

    if status is SyncStatus.SYNC_ERROR:
        print(f"Sync error: {sync.last_error}")
        sys.exit(1)


def _split_pair(text: str, what: str) -> tuple[str, str]:
    key, sep, name = text.partition("=")
    if not sep or not key.strip() or not name.strip():
        print(f"Error: Expected {what}=NAME, got {text!r}")
        sys.exit(1)
    return key.strip(), name.strip()


def run_board(args: argparse.Namespace) -> None:
    """Assign catalog vessels to berths and evaluate the whole board."""
    fleet = _load_fleet(args.catalog)
    snapshot = _build_snapshot(args)

    try:
        for item in args.assign:
            position, name = _split_pair(item, "PIER-SIDE")
            pier, _, side = position.partition("-")
            fleet.assign(BerthPosition(pier=pier, side=side).key, name)
        for item in args.reserve:
            channel, name = _split_pair(item, "CHANNEL")
            fleet.reserve_channel(Channel(channel), name)
    except KeyError as exc:
        print(f"Error: {exc.args[0]}")
        sys.exit(1)
    except ValueError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    berths = [load_berth(name) for name in list_berths()]
    results = evaluate_fleet(fleet, berths, snapshot)
    if not results:
        print("No berths assigned.")
        return

    for result in results:
        verdict = result.verdict
        print(f"  {result.berth.label:<14} {result.vessel.name:<24} {verdict.status.value}")
        for reason in verdict.failures:
            print(f"      - {reason}")
        for item in verdict.near_limits:
            print(f"      near limit: {item}")
    for channel, key in fleet.channels.items():
        print(f"  Channel {channel.value}: reserved for {fleet.get(key).name}")
    print(f"Board status: {fleet_status(r.verdict.status for r in results).value}")


def _add_snapshot_args(parser: argparse.ArgumentParser) -> None:
    """Meteocean inputs; values go through the same comma/dot coercion as the models."""
    parser.add_argument("--snapshot", type=Path, help="Meteocean snapshot JSON")
    parser.add_argument("--tide", default="0.6", help="Tide (m, default: 0.6)")
    parser.add_argument("--hs-ext", default="1.0", help="External Hs (m)")
    parser.add_argument("--tp-ext", default="10.0", help="External Tp (s)")
    parser.add_argument("--hs-int", default="0.8", help="Internal Hs (m)")
    parser.add_argument("--tp-int", default="10.5", help="Internal Tp (s)")
    parser.add_argument("--wind", default="12.0", help="Internal mean wind (kn)")
    parser.add_argument("--gust", default="18.0", help="Internal gust (kn)")
    parser.add_argument("--wind-ext", help="External mean wind (kn, default: --wind)")
    parser.add_argument("--gust-ext", help="External gust (kn, default: --gust)")
    parser.add_argument(
        "--berth-clearance", default="12.0", help="Side clearance to neighbour (m)"
    )


def main() -> None:
    """CLI entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="berthwatch",
        description="Meteocean berthing decision support (Go / Go-with-restriction / No-Go)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--catalog", type=Path, default=None,
        help="Local catalog JSON (default: $BERTHWATCH_DATA_DIR/catalog.json)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # classify subcommand
    classify_parser = subparsers.add_parser("classify", help="Category from LOA and beam")
    classify_parser.add_argument("loa", help="Length overall (m)")
    classify_parser.add_argument("beam", help="Beam (m)")

    # berths subcommand
    subparsers.add_parser("berths", help="List named berth positions")

    # evaluate subcommand
    eval_parser = subparsers.add_parser("evaluate", help="Evaluate a vessel at a berth")
    eval_parser.add_argument("--vessel", help="Vessel name from the local catalog")
    eval_parser.add_argument("--name", default="Ad-hoc vessel", help="Name for an inline vessel")
    eval_parser.add_argument("--loa", help="Length overall (m)")
    eval_parser.add_argument("--beam", help="Beam (m)")
    eval_parser.add_argument("--draft", help="Draft (m)")
    eval_parser.add_argument("--category", help="A, B, C or Tanker (default: derived)")
    eval_parser.add_argument("--berth", help="Named berth from berths.yaml")
    eval_parser.add_argument("--pier", help="P1, P2 or P3")
    eval_parser.add_argument("--side", help="praia (shoreward) or mar (seaward)")
    eval_parser.add_argument("--arrangement", type=int, help="Mooring arrangement (default: 1)")
    eval_parser.add_argument("--channel", help="norte or sul (default: norte)")
    eval_parser.add_argument("--neighbor", action="store_true", help="Adjacent berth is occupied")
    eval_parser.add_argument(
        "--clearance-confirmed", action="store_true",
        help="Operator confirmed side clearance to the neighbour",
    )
    _add_snapshot_args(eval_parser)
    eval_parser.add_argument("--json", action="store_true", help="Print the verdict as JSON")
    eval_parser.add_argument("--note", action="store_true", help="Print a technical note on No-Go")

    # board subcommand
    board_parser = subparsers.add_parser("board", help="Evaluate every assigned berth")
    board_parser.add_argument(
        "--assign", action="append", default=[], metavar="PIER-SIDE=NAME",
        help="Put a catalog vessel at a berth, e.g. P1-praia=\"Alfa Star\" (repeatable)",
    )
    board_parser.add_argument(
        "--reserve", action="append", default=[], metavar="CHANNEL=NAME",
        help="Reserve a channel for a catalog vessel, e.g. norte=\"Alfa Star\" (repeatable)",
    )
    _add_snapshot_args(board_parser)

    # catalog subcommand
    catalog_parser = subparsers.add_parser("catalog", help="Manage the vessel catalog")
    catalog_sub = catalog_parser.add_subparsers(dest="action", required=True)
    catalog_sub.add_parser("list", help="List catalog vessels")
    add_parser = catalog_sub.add_parser("add", help="Register or update a vessel")
    add_parser.add_argument("name")
    add_parser.add_argument("--loa", required=True)
    add_parser.add_argument("--beam", default="")
    add_parser.add_argument("--draft", required=True)
    add_parser.add_argument("--category", help="A, B, C or Tanker (default: derived)")
    remove_parser = catalog_sub.add_parser("remove", help="Remove a vessel")
    remove_parser.add_argument("name")
    catalog_sub.add_parser("pull", help="Replace the local catalog with the GitHub document")
    catalog_sub.add_parser("push", help="Overwrite the GitHub document with the local catalog")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if args.command == "classify":
        print(classify(args.loa, args.beam).value)
    elif args.command == "berths":
        for name in list_berths():
            print(f"  {name}")
    elif args.command == "evaluate":
        run_evaluate(args)
    elif args.command == "board":
        run_board(args)
    elif args.command == "catalog":
        run_catalog(args)


if __name__ == "__main__":
    main()
