"""
Catch aggregation engine for the fishing map.

Takes the static spot catalogue plus the current catch snapshot and turns
them into one list of map spots:

- a catch within the matching radius of a catalogue spot is merged into
  that spot (nearest one wins)
- anything else is clustered with other loose catches into "dynamic"
  spots whose centre is the running mean of their members

Catches are processed oldest first and never reassigned, so the first
catch in an area anchors its cluster. The whole thing is recomputed from
scratch on every call; nothing is cached between runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from geo import LatLng, compute_distance_miles, miles_to_meters
from spot_models import (
    AggregatedSpot,
    CatchRecord,
    DynamicMapSpot,
    LatestCatchSummary,
    Regulations,
    SpotPin,
    StaticMapSpot,
    StaticSpot,
)

logger = logging.getLogger(__name__)

MATCH_DISTANCE_MILES = 0.5
MATCH_DISTANCE_METERS = miles_to_meters(MATCH_DISTANCE_MILES)
NEARBY_DISTANCE_LIMIT_MILES = 20.0

USER_REPORTED_REGULATIONS = Regulations(
    description="User reported location. Verify public access and regulations before fishing.",
    bag_limit="Check local authorities for current limits.",
)

SYNTHETIC_NAME_PREFIX = "Catch near"


# -----------------------------
# Buckets (only live for one aggregate_spots call)
# -----------------------------

@dataclass
class _Bucket:
    species: Dict[str, None] = field(default_factory=dict)  # ordered set
    catch_count: int = 0
    latest_catch: Optional[LatestCatchSummary] = None
    latest_time: float = float("-inf")
    pins: List[SpotPin] = field(default_factory=list)

    def add(self, record: CatchRecord) -> None:
        coords = record.coordinates
        self.catch_count += 1
        if record.species:
            self.species.setdefault(record.species, None)
        # >= so that on equal times the later-processed catch wins
        occurred = record.occurred_at_time
        if occurred >= self.latest_time:
            self.latest_catch = LatestCatchSummary.from_catch(record)
            self.latest_time = occurred
        self.pins.append(SpotPin(id=record.id, latitude=coords.lat, longitude=coords.lng))


@dataclass
class _StaticBucket(_Bucket):
    spot: Optional[StaticSpot] = None

    @property
    def position(self) -> LatLng:
        return (self.spot.latitude, self.spot.longitude)


@dataclass
class _DynamicBucket(_Bucket):
    name: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    sum_lat: float = 0.0
    sum_lng: float = 0.0

    @property
    def position(self) -> LatLng:
        return (self.latitude, self.longitude)

    def add(self, record: CatchRecord) -> None:
        super().add(record)
        location = (record.location or "").strip()
        if self.name.startswith(SYNTHETIC_NAME_PREFIX) and location:
            logger.debug("Renaming cluster %r to %r", self.name, location)
            self.name = location
        self.sum_lat += record.coordinates.lat
        self.sum_lng += record.coordinates.lng
        self.latitude = self.sum_lat / self.catch_count
        self.longitude = self.sum_lng / self.catch_count


def _nearest_within(buckets: Iterable, position: LatLng, max_miles: float):
    """
    Nearest bucket whose (rounded) distance is <= max_miles, or None.

    Scans in order and keeps a candidate on `<=`, so equal distances go to
    the later bucket.
    """
    best = None
    best_distance = max_miles
    for bucket in buckets:
        distance = compute_distance_miles(bucket.position, position)
        if distance <= best_distance:
            best_distance = distance
            best = bucket
    return best


def _synthetic_name(lat: float, lng: float) -> str:
    return f"{SYNTHETIC_NAME_PREFIX} {lat:.3f}, {lng:.3f}"


# -----------------------------
# Public API
# -----------------------------

def sort_catches_chronologically(catches: Iterable[CatchRecord]) -> List[CatchRecord]:
    """Oldest first (captured_at, then created_at, then epoch). Stable on ties."""
    return sorted(catches, key=lambda c: c.occurred_at_time)


def aggregate_spots(
    static_spots: List[StaticSpot],
    catches: List[CatchRecord],
    match_distance_miles: float = MATCH_DISTANCE_MILES,
) -> List[AggregatedSpot]:
    """
    Build the map spot list.

    Returns one StaticMapSpot per catalogue entry (in catalogue order, even
    with zero catches) followed by one DynamicMapSpot per cluster (in the
    order the clusters were created). Catches without coordinates are
    skipped.
    """
    static_buckets: List[_StaticBucket] = [
        _StaticBucket(spot=spot, species=dict.fromkeys(spot.species))
        for spot in static_spots
    ]
    dynamic_buckets: List[_DynamicBucket] = []
    skipped = 0

    for record in sort_catches_chronologically(catches):
        coords = record.coordinates
        if coords is None:
            skipped += 1
            continue

        position = (coords.lat, coords.lng)

        static_match = _nearest_within(static_buckets, position, match_distance_miles)
        if static_match is not None:
            static_match.add(record)
            continue

        target = _nearest_within(dynamic_buckets, position, match_distance_miles)
        if target is None:
            location = (record.location or "").strip()
            target = _DynamicBucket(
                name=location or _synthetic_name(coords.lat, coords.lng),
                latitude=coords.lat,
                longitude=coords.lng,
            )
            dynamic_buckets.append(target)
            logger.debug("New catch cluster %r seeded by catch %s", target.name, record.id)

        target.add(record)

    radius_meters = miles_to_meters(match_distance_miles)
    aggregated: List[AggregatedSpot] = []

    for bucket in static_buckets:
        spot = bucket.spot
        aggregated.append(
            StaticMapSpot(
                spot_id=spot.id,
                name=spot.name,
                latitude=spot.latitude,
                longitude=spot.longitude,
                species=list(bucket.species),
                regulations=spot.regulations,
                catch_count=bucket.catch_count,
                latest_catch=bucket.latest_catch or LatestCatchSummary.from_static(spot.latest_catch),
                pins=bucket.pins,
                aggregation_radius_meters=radius_meters if bucket.pins else None,
            )
        )

    for bucket in dynamic_buckets:
        pins = sorted(bucket.pins, key=lambda pin: pin.id)
        aggregated.append(
            DynamicMapSpot(
                anchor_catch_id=pins[0].id,
                name=bucket.name,
                latitude=bucket.latitude,
                longitude=bucket.longitude,
                species=list(bucket.species),
                regulations=USER_REPORTED_REGULATIONS,
                catch_count=bucket.catch_count,
                latest_catch=bucket.latest_catch,
                pins=pins,
                aggregation_radius_meters=radius_meters,
            )
        )

    logger.debug(
        "Aggregated %d catches into %d static and %d dynamic spots (%d without coordinates)",
        len(catches) - skipped,
        len(static_buckets),
        len(dynamic_buckets),
        skipped,
    )
    return aggregated


def find_spot(spots: List[AggregatedSpot], spot_id: str) -> Optional[AggregatedSpot]:
    for spot in spots:
        if spot.id == spot_id:
            return spot
    return None


def catch_belongs_to_static_spot(
    spot: AggregatedSpot,
    record: CatchRecord,
    match_distance_miles: float = MATCH_DISTANCE_MILES,
) -> bool:
    if record.coordinates is None:
        return False
    position = (record.coordinates.lat, record.coordinates.lng)
    return compute_distance_miles((spot.latitude, spot.longitude), position) <= match_distance_miles


def get_spot_catches(
    spot: Optional[AggregatedSpot],
    catches: List[CatchRecord],
    match_distance_miles: float = MATCH_DISTANCE_MILES,
) -> List[CatchRecord]:
    """
    Catches that belong to `spot`, in input order.

    Spots built by aggregate_spots always carry pins, so membership is an
    id lookup. The distance re-check only exists for static spots built
    without pins (compatibility with older callers).
    """
    if spot is None:
        return []

    if spot.pins:
        pin_ids = {pin.id for pin in spot.pins}
        return [record for record in catches if record.id in pin_ids]

    if spot.from_static:
        return [
            record for record in catches
            if catch_belongs_to_static_spot(spot, record, match_distance_miles)
        ]

    return []


@dataclass
class NearbySpot:
    spot: AggregatedSpot
    distance_miles: float


def rank_spots_by_distance(
    spots: List[AggregatedSpot],
    position: LatLng,
    limit_miles: float = NEARBY_DISTANCE_LIMIT_MILES,
) -> List[NearbySpot]:
    """Spots within `limit_miles` of `position`, closest first."""
    nearby = [
        NearbySpot(spot=spot, distance_miles=compute_distance_miles(position, (spot.latitude, spot.longitude)))
        for spot in spots
    ]
    nearby = [n for n in nearby if n.distance_miles <= limit_miles]
    nearby.sort(key=lambda n: n.distance_miles)
    return nearby
