"""Pydantic v2 models for berthwatch."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from berthwatch.parsing import parse_number


class Category(str, Enum):
    """Regulatory vessel category."""

    A = "A"
    B = "B"
    C = "C"
    TANKER = "Tanker"

    @classmethod
    def _missing_(cls, value: object) -> Optional[Category]:
        if not isinstance(value, str):
            return None
        text = value.strip().lower()
        if text in ("t", "tanque", "tanker"):
            return cls.TANKER
        for member in cls:
            if member.value.lower() == text:
                return member
        return None


class Pier(str, Enum):
    """Harbor piers."""

    P1 = "P1"
    P2 = "P2"
    P3 = "P3"

    @classmethod
    def _missing_(cls, value: object) -> Optional[Pier]:
        if isinstance(value, str):
            text = value.strip().upper()
            for member in cls:
                if member.value == text:
                    return member
        return None


class Side(str, Enum):
    """Berth side of a pier."""

    SHOREWARD = "praia"
    SEAWARD = "mar"

    @classmethod
    def _missing_(cls, value: object) -> Optional[Side]:
        if not isinstance(value, str):
            return None
        text = value.strip().lower()
        if text in ("shoreward", "praia"):
            return cls.SHOREWARD
        if text in ("seaward", "mar"):
            return cls.SEAWARD
        return None

    @property
    def label(self) -> str:
        return "shoreward" if self is Side.SHOREWARD else "seaward"


class Channel(str, Enum):
    """Access channels into the harbor."""

    NORTH = "norte"
    SOUTH = "sul"

    @classmethod
    def _missing_(cls, value: object) -> Optional[Channel]:
        if not isinstance(value, str):
            return None
        text = value.strip().lower()
        if text in ("north", "norte"):
            return cls.NORTH
        if text in ("south", "sul"):
            return cls.SOUTH
        return None


class ClearanceSegment(str, Enum):
    """Segments with a tide-dependent minimum clearance."""

    SOUTH_CHANNEL = "south_channel"
    NORTH_CHANNEL = "north_channel"
    INNER_BASIN = "inner_basin"
    NORTH_PIERS = "north_piers"


class DecisionStatus(str, Enum):
    """Overall berthing decision."""

    GO = "Go"
    GO_WITH_RESTRICTION = "Go-with-restriction"
    NO_GO = "No-Go"


class SyncStatus(str, Enum):
    """State of the last exchange with the remote catalog document."""

    NEVER_SYNCED = "never_synced"
    SYNCED = "synced"
    SYNC_ERROR = "sync_error"


# --- Inputs ---


class Vessel(BaseModel):
    """A registered or ad-hoc vessel.

    Dimensions are coerced with ``parse_number`` (comma decimals accepted,
    unparseable values become 0). A missing or unknown category is derived
    from the dimensions by the classifier.
    """

    name: str
    category: Category = Category.B
    loa: float = 0.0
    beam: float = Field(default=0.0, validation_alias=AliasChoices("beam", "boa"))
    draft: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def _resolve_category(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        try:
            category = Category(data.get("category"))
        except ValueError:
            from berthwatch.analysis.classify import classify

            category = classify(data.get("loa"), data.get("beam", data.get("boa")))
        return {**data, "category": category}

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v: Any) -> str:
        return str(v or "").strip()

    @field_validator("loa", "beam", "draft", mode="before")
    @classmethod
    def _coerce_dimension(cls, v: Any) -> float:
        return parse_number(v)

    @property
    def key(self) -> str:
        """Case-insensitive catalog key."""
        return self.name.lower()


class BerthPosition(BaseModel):
    """A mooring location plus the operational flags attached to it."""

    model_config = ConfigDict(frozen=True)

    pier: Pier
    side: Side
    arrangement: int = Field(default=1, ge=1)
    channel: Channel = Channel.NORTH
    neighbor_occupied: bool = False
    side_clearance_confirmed: bool = False

    @field_validator("pier", "side", "channel", mode="before")
    @classmethod
    def _parse_alias(cls, v: Any, info: ValidationInfo) -> Any:
        enum_cls = {"pier": Pier, "side": Side, "channel": Channel}[info.field_name]
        try:
            return enum_cls(v)
        except ValueError:
            return v

    @property
    def key(self) -> str:
        """Assignment map identifier, e.g. 'P1-praia'."""
        return f"{self.pier.value}-{self.side.value}"

    @property
    def label(self) -> str:
        """Readable form, e.g. 'P1-shoreward'."""
        return f"{self.pier.value}-{self.side.label}"

    def is_at(self, pier: Pier, side: Side) -> bool:
        return self.pier is pier and self.side is side


class SectorReadings(BaseModel):
    """Wave and wind readings for one sector (external approach or internal basin)."""

    model_config = ConfigDict(frozen=True)

    hs: float = 0.0  # m
    tp: float = 0.0  # s
    wind_mean: float = 0.0  # kn
    wind_gust: float = 0.0  # kn

    @field_validator("hs", "tp", "wind_mean", "wind_gust", mode="before")
    @classmethod
    def _coerce(cls, v: Any) -> float:
        return parse_number(v)


class MeteoceanSnapshot(BaseModel):
    """Environmental state for one evaluation, shared by every berth."""

    model_config = ConfigDict(frozen=True)

    tide: float = 0.0  # m
    external: SectorReadings = SectorReadings()
    internal: SectorReadings = SectorReadings()
    berth_clearance: float = 0.0  # m, side distance to the adjacent berth

    @field_validator("tide", "berth_clearance", mode="before")
    @classmethod
    def _coerce(cls, v: Any) -> float:
        return parse_number(v)

    @property
    def worst_wind_mean(self) -> float:
        return max(self.external.wind_mean, self.internal.wind_mean)

    @property
    def worst_wind_gust(self) -> float:
        return max(self.external.wind_gust, self.internal.wind_gust)


# --- Threshold shapes ---


class WaveLimit(BaseModel):
    """Hs/Tp pair, used for channel and on-berth limits."""

    model_config = ConfigDict(frozen=True)

    hs: float
    tp: float


class ClearanceRow(BaseModel):
    """Minimum clearance at tide 0 and at tide 1.2 m."""

    model_config = ConfigDict(frozen=True)

    m0: float
    m1_2: float


# --- Results ---


class ClearanceFigures(BaseModel):
    """Interpolated minimum clearances at the current tide (m)."""

    model_config = ConfigDict(frozen=True)

    channel: float
    basin: float
    pier: float
    minimum: float


class NavigationResult(BaseModel):
    """Entry (channel transit) sub-result."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    failures: tuple[str, ...] = ()
    channel_rule: Optional[WaveLimit] = None
    clearance: ClearanceFigures
    draft: float


class PermanenceResult(BaseModel):
    """On-berth sub-result."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    failures: tuple[str, ...] = ()
    wind_limit: Optional[float] = None
    worst_wind_mean: float
    worst_wind_gust: float
    gust_ceiling: float
    onberth_limit: WaveLimit
    onberth_source: str  # "preset" or "default"
    side_clearance_checked: bool = False


class Verdict(BaseModel):
    """Immutable result of one evaluation."""

    model_config = ConfigDict(frozen=True)

    status: DecisionStatus
    navigation: NavigationResult
    permanence: PermanenceResult
    near_limits: tuple[str, ...] = ()
    mitigations: tuple[str, ...] = ()

    @property
    def failures(self) -> tuple[str, ...]:
        """Navigation then permanence failure reasons."""
        return self.navigation.failures + self.permanence.failures


class BerthEvaluation(BaseModel):
    """Verdict for the vessel assigned to one berth position."""

    position_key: str
    vessel: Vessel
    berth: BerthPosition
    verdict: Verdict


class CatalogDocument(BaseModel):
    """Remote catalog document: vessel records plus the version token."""

    records: list[dict[str, Any]] = Field(default_factory=list)
    sha: Optional[str] = None
