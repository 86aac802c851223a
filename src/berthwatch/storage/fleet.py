"""In-memory vessel catalog, berth assignment map and channel reservations."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from berthwatch.analysis.classify import classify
from berthwatch.models import Category, Channel, Vessel
from berthwatch.parsing import parse_number
from berthwatch.thresholds import MAX_DRAFT_M, MAX_LOA_M

logger = logging.getLogger(__name__)


def _key(name: str) -> str:
    return str(name or "").strip().lower()


class Fleet:
    """Known vessels keyed by lower-cased name, plus who sits where.

    ``berths`` maps a berth position key (``"P1-praia"``) to a vessel key and
    ``channels`` maps a channel to the vessel key holding it. Both hold at
    most one vessel per slot.
    """

    def __init__(self) -> None:
        self._vessels: dict[str, Vessel] = {}
        self.berths: dict[str, str] = {}
        self.channels: dict[Channel, str] = {}

    def __len__(self) -> int:
        return len(self._vessels)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _key(name) in self._vessels

    # --- Catalog ---

    def register(
        self,
        name: str,
        loa: Any,
        beam: Any,
        draft: Any,
        category: Category | str | None = None,
    ) -> Vessel:
        """Register a vessel from operator input, deriving its category when not given.

        Raises ValueError for a blank name or a LOA/draft that is missing or
        above the facility maximum.
        """
        if not str(name or "").strip():
            raise ValueError("Vessel name is required")
        length = parse_number(loa, default=None)
        if length is None or length <= 0 or length > MAX_LOA_M:
            raise ValueError(f"Invalid LOA {loa!r}. Must be above 0 and at most {MAX_LOA_M:g} m.")
        depth = parse_number(draft, default=None)
        if depth is None or depth <= 0 or depth > MAX_DRAFT_M:
            raise ValueError(f"Invalid draft {draft!r}. Must be above 0 and at most {MAX_DRAFT_M:g} m.")

        vessel = Vessel(
            name=name,
            category=category if category is not None else classify(loa, beam),
            loa=length,
            beam=beam,
            draft=depth,
        )
        return self.upsert(vessel)

    def upsert(self, vessel: Vessel) -> Vessel:
        """Insert or replace by case-insensitive name. Replacing keeps catalog order."""
        if vessel.key in self._vessels:
            logger.debug("Updating vessel %s", vessel.name)
        self._vessels[vessel.key] = vessel
        return vessel

    def get(self, name: str) -> Vessel:
        """Look up a vessel by name. Raises KeyError if not found."""
        try:
            return self._vessels[_key(name)]
        except KeyError:
            raise KeyError(f"Vessel not found: {name}") from None

    def vessels(self) -> list[Vessel]:
        return list(self._vessels.values())

    def remove(self, name: str) -> Vessel:
        """Delete a vessel together with every berth assignment and channel reservation it holds.

        Raises KeyError if not found.
        """
        key = _key(name)
        if key not in self._vessels:
            raise KeyError(f"Vessel not found: {name}")
        vessel = self._vessels.pop(key)
        self._release_all(key)
        logger.info("Removed vessel %s", vessel.name)
        return vessel

    def load_records(self, records: Iterable[dict[str, Any]], merge: bool = False) -> int:
        """Load catalog document records, replacing the catalog or merging into it.

        Merging updates existing vessels field by field. Records without a
        name are skipped. Returns the number of records applied.
        """
        applied = 0
        if merge:
            vessels = dict(self._vessels)
        else:
            vessels = {}
        for record in records:
            key = _key(record.get("name", ""))
            if not key:
                logger.debug("Skipping catalog record without a name: %r", record)
                continue
            existing = vessels.get(key)
            data = {**existing.model_dump(), **record} if existing else dict(record)
            if existing and "boa" in record and "beam" not in record:
                data["beam"] = record["boa"]
            vessels[key] = Vessel.model_validate(data)
            applied += 1

        self._vessels = vessels
        for key in set(self.berths.values()) | set(self.channels.values()):
            if key not in vessels:
                self._release_all(key)
        return applied

    def records(self) -> list[dict[str, Any]]:
        """Catalog document records, in catalog order."""
        return [v.model_dump(mode="json") for v in self._vessels.values()]

    # --- Berth assignments ---

    def assign(self, position_key: str, name: str) -> None:
        """Put a vessel at a berth position, replacing whoever was there."""
        vessel = self.get(name)
        self.berths[position_key] = vessel.key

    def clear(self, position_key: str) -> None:
        self.berths.pop(position_key, None)

    def assigned(self, position_key: str) -> Vessel | None:
        key = self.berths.get(position_key)
        return self._vessels.get(key) if key else None

    def positions_of(self, name: str) -> list[str]:
        key = _key(name)
        return [pos for pos, holder in self.berths.items() if holder == key]

    # --- Channel reservations ---

    def reserve_channel(self, channel: Channel, name: str) -> None:
        """Reserve a channel for a vessel. Raises ValueError if another vessel holds it."""
        vessel = self.get(name)
        holder = self.channels.get(channel)
        if holder is not None and holder != vessel.key:
            raise ValueError(f"Channel {channel.value} already occupied by {self._vessels[holder].name}")
        self.channels[channel] = vessel.key

    def release_channel(self, channel: Channel) -> None:
        self.channels.pop(channel, None)

    def _release_all(self, key: str) -> None:
        for pos in [p for p, holder in self.berths.items() if holder == key]:
            del self.berths[pos]
        for channel in [c for c, holder in self.channels.items() if holder == key]:
            del self.channels[channel]
