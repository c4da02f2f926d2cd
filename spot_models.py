"""
Data structures for the catch map.

Two kinds of input:
- StaticSpot: curated catalogue entry (fishing_spots.py), never changes.
- CatchRecord: one logged catch from the feed, delivered as a snapshot.

And the derived output:
- AggregatedSpot, in two flavours: StaticMapSpot (a catalogue spot with
  whatever catches landed near it) and DynamicMapSpot (a cluster formed
  purely from catch coordinates).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


# -----------------------------
# Inputs
# -----------------------------

@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(frozen=True)
class Regulations:
    description: str
    bag_limit: str


@dataclass(frozen=True)
class StaticLatestCatch:
    """Cached 'latest catch' shipped with the catalogue."""
    species: str
    weight: str
    bait: str


@dataclass(frozen=True)
class StaticSpot:
    id: str
    name: str
    latitude: float
    longitude: float
    species: List[str] = field(default_factory=list)
    regulations: Optional[Regulations] = None
    latest_catch: Optional[StaticLatestCatch] = None
    public_access: bool = True

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "StaticSpot":
        regs = raw.get("regulations")
        latest = raw.get("latest_catch")
        return cls(
            id=raw["id"],
            name=raw["name"],
            latitude=float(raw["lat"]),
            longitude=float(raw["lon"]),
            species=list(raw.get("species", [])),
            regulations=Regulations(**regs) if regs else None,
            latest_catch=StaticLatestCatch(**latest) if latest else None,
            public_access=bool(raw.get("public_access", True)),
        )


@dataclass(frozen=True)
class CatchRecord:
    id: str
    species: str = ""
    weight: Optional[str] = None
    caption: Optional[str] = None
    location: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    display_name: Optional[str] = None
    user_id: Optional[str] = None
    captured_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def occurred_at(self) -> Optional[datetime]:
        return self.captured_at or self.created_at

    @property
    def occurred_at_time(self) -> float:
        """Epoch seconds, 0 when the catch carries no timestamp at all."""
        occurred = self.occurred_at
        return occurred.timestamp() if occurred else 0.0


# -----------------------------
# Outputs
# -----------------------------

class SummarySource(str, Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"


@dataclass(frozen=True)
class LatestCatchSummary:
    species: str
    source: SummarySource
    id: Optional[str] = None
    weight: Optional[str] = None
    bait: Optional[str] = None
    display_name: Optional[str] = None
    occurred_at: Optional[datetime] = None

    @classmethod
    def from_static(cls, latest: Optional[StaticLatestCatch]) -> Optional["LatestCatchSummary"]:
        if latest is None:
            return None
        return cls(
            species=latest.species,
            weight=latest.weight,
            bait=latest.bait,
            source=SummarySource.STATIC,
        )

    @classmethod
    def from_catch(cls, record: CatchRecord) -> "LatestCatchSummary":
        return cls(
            id=record.id,
            species=record.species,
            weight=record.weight,
            display_name=record.display_name,
            occurred_at=record.occurred_at,
            source=SummarySource.DYNAMIC,
        )


@dataclass(frozen=True)
class SpotPin:
    id: str
    latitude: float
    longitude: float


@dataclass
class AggregatedSpot:
    name: str
    latitude: float
    longitude: float
    species: List[str]
    regulations: Optional[Regulations]
    catch_count: int
    latest_catch: Optional[LatestCatchSummary]
    pins: List[SpotPin]
    aggregation_radius_meters: Optional[float]

    @property
    def id(self) -> str:
        raise NotImplementedError

    @property
    def from_static(self) -> bool:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["id"] = self.id
        data["from_static"] = self.from_static
        return data


@dataclass
class StaticMapSpot(AggregatedSpot):
    spot_id: str

    @property
    def id(self) -> str:
        return self.spot_id

    @property
    def from_static(self) -> bool:
        return True


@dataclass
class DynamicMapSpot(AggregatedSpot):
    anchor_catch_id: str

    @property
    def id(self) -> str:
        return f"dynamic-{self.anchor_catch_id}"

    @property
    def from_static(self) -> bool:
        return False


@dataclass(frozen=True)
class LeaderboardRanking:
    id: str
    display_name: str
    weight_label: str
    weight_value: float


@dataclass
class LeaderboardEntry:
    species: str
    rankings: List[LeaderboardRanking]
