"""Tests for the in-memory catalog, berth assignments and channel reservations."""

from __future__ import annotations

import pytest

from berthwatch.models import Category, Channel, Vessel
from berthwatch.storage.fleet import Fleet


class TestRegister:
    def test_upsert_by_name(self):
        fleet = Fleet()
        fleet.register("Alfa", loa=75, beam=18, draft=6)
        fleet.register("Alfa", loa=82.4, beam=21, draft=7)
        assert len(fleet) == 1
        vessel = fleet.get("Alfa")
        assert vessel.name == "Alfa"
        assert (vessel.loa, vessel.beam, vessel.draft) == (82.4, 21, 7)

    def test_name_match_is_case_insensitive(self):
        fleet = Fleet()
        fleet.register("Alfa", loa=75, beam=18, draft=6)
        fleet.register("ALFA", loa=60, beam=12, draft=4)
        assert len(fleet) == 1
        assert fleet.get("alfa").name == "ALFA"
        assert "aLfA" in fleet

    def test_category_derived(self):
        fleet = Fleet()
        vessel = fleet.register("Tank", loa="88,1", beam="14,82", draft="6,5")
        assert vessel.category is Category.TANKER
        assert vessel.draft == 6.5

    def test_explicit_category_kept(self):
        fleet = Fleet()
        vessel = fleet.register("Manual", loa=75, beam=18, draft=6, category="C")
        assert vessel.category is Category.C

    @pytest.mark.parametrize(
        "name, loa, draft, message",
        [
            ("", 75, 6, "name is required"),
            ("Long", 121, 6, "Invalid LOA"),
            ("Bad", "abc", 6, "Invalid LOA"),
            ("Deep", 75, 8.5, "Invalid draft"),
            ("NoDraft", 75, "", "Invalid draft"),
            ("Negative", "-5", 6, "Invalid LOA"),
            ("Zero", 0, 6, "Invalid LOA"),
            ("Afloat", 75, "0", "Invalid draft"),
            ("Upside", 75, -1.5, "Invalid draft"),
        ],
    )
    def test_rejects_out_of_range(self, name, loa, draft, message):
        fleet = Fleet()
        with pytest.raises(ValueError, match=message):
            fleet.register(name, loa=loa, beam=18, draft=draft)
        assert len(fleet) == 0


class TestRemove:
    def test_cascades_to_all_assignments(self, fleet: Fleet):
        fleet.assign("P1-praia", "Alfa Star")
        fleet.assign("P2-mar", "alfa star")
        fleet.assign("P3-praia", "Bravo Tide")
        fleet.reserve_channel(Channel.NORTH, "Alfa Star")

        fleet.remove("Alfa Star")

        assert "Alfa Star" not in fleet
        assert fleet.berths == {"P3-praia": "bravo tide"}
        assert fleet.channels == {}

    def test_unknown_vessel(self, fleet: Fleet):
        with pytest.raises(KeyError):
            fleet.remove("Nobody")


class TestAssignments:
    def test_one_vessel_per_position(self, fleet: Fleet):
        fleet.assign("P1-praia", "Alfa Star")
        fleet.assign("P1-praia", "Bravo Tide")
        assert fleet.assigned("P1-praia").name == "Bravo Tide"
        assert fleet.positions_of("Alfa Star") == []

    def test_clear(self, fleet: Fleet):
        fleet.assign("P1-praia", "Alfa Star")
        fleet.clear("P1-praia")
        assert fleet.assigned("P1-praia") is None
        fleet.clear("P1-praia")

    def test_assign_unknown_vessel(self, fleet: Fleet):
        with pytest.raises(KeyError):
            fleet.assign("P1-praia", "Ghost")


class TestChannels:
    def test_reserved_channel_conflict(self, fleet: Fleet):
        fleet.reserve_channel(Channel.SOUTH, "Alfa Star")
        with pytest.raises(ValueError, match="already occupied"):
            fleet.reserve_channel(Channel.SOUTH, "Bravo Tide")

    def test_same_vessel_may_reserve_again(self, fleet: Fleet):
        fleet.reserve_channel(Channel.SOUTH, "Alfa Star")
        fleet.reserve_channel(Channel.SOUTH, "ALFA STAR")
        fleet.release_channel(Channel.SOUTH)
        fleet.reserve_channel(Channel.SOUTH, "Bravo Tide")
        assert fleet.channels[Channel.SOUTH] == "bravo tide"


class TestRecords:
    def test_records_shape(self, fleet: Fleet):
        records = fleet.records()
        assert records[0] == {"name": "Alfa Star", "category": "B", "loa": 75.0, "beam": 18.0, "draft": 6.0}
        assert records[1]["category"] == "A"

    def test_replace(self, fleet: Fleet):
        fleet.assign("P1-praia", "Alfa Star")
        count = fleet.load_records([{"name": "Charlie", "category": "C", "loa": 60, "beam": 12, "draft": 4}])
        assert count == 1
        assert [v.name for v in fleet.vessels()] == ["Charlie"]
        assert fleet.berths == {}

    def test_merge_updates_fields(self, fleet: Fleet):
        fleet.load_records(
            [{"name": "ALFA STAR", "draft": 6.8}, {"name": "Delta", "category": "T", "loa": 88, "boa": 15}],
            merge=True,
        )
        assert len(fleet) == 3
        alfa = fleet.get("alfa star")
        assert alfa.draft == 6.8
        assert alfa.loa == 75.0
        assert fleet.get("Delta").category is Category.TANKER
        assert fleet.get("Delta").beam == 15.0

    def test_merge_boa_overrides_beam(self, fleet: Fleet):
        fleet.load_records([{"name": "Alfa Star", "boa": 19}], merge=True)
        assert fleet.get("Alfa Star").beam == 19.0

    def test_records_without_name_skipped(self):
        fleet = Fleet()
        assert fleet.load_records([{"loa": 70}, {"name": "  "}, {"name": "Echo", "loa": 70, "beam": 17}]) == 1
        assert fleet.get("echo").category is Category.B

    def test_upsert_keeps_order(self, fleet: Fleet):
        fleet.upsert(Vessel(name="alfa star", category="C", loa=60, beam=12, draft=4))
        assert [v.key for v in fleet.vessels()] == ["alfa star", "bravo tide"]
