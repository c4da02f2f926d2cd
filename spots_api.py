# spots_api.py
#
# Catch map endpoints:
# - catches come in the request body (the feed owns storage)
# - static spots come from fishing_spots.FISHING_SPOTS
# - spot_engine / leaderboards do the work, this file only adapts shapes

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Dict, Any, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from fishing_spots import get_static_spots
from leaderboards import build_leaderboards
from species_filters import build_species_filters, filter_spots_by_species
from spot_config import get_aggregation_settings
from spot_detail import build_spot_detail
from spot_engine import aggregate_spots, find_spot, rank_spots_by_distance
from spot_models import AggregatedSpot, CatchRecord, Coordinates, LeaderboardEntry
from spot_text import describe_latest_catch, summarise_spot

logger = logging.getLogger(__name__)

router = APIRouter()


# ------------- Request models -------------


class CoordinatesIn(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class CatchIn(BaseModel):
    id: str
    species: str = ""
    weight: Optional[str] = None
    caption: Optional[str] = None
    location: Optional[str] = None
    coordinates: Optional[CoordinatesIn] = None
    display_name: Optional[str] = None
    user_id: Optional[str] = None
    captured_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def to_record(self) -> CatchRecord:
        coords = self.coordinates
        return CatchRecord(
            id=self.id,
            species=self.species,
            weight=self.weight,
            caption=self.caption,
            location=self.location,
            coordinates=Coordinates(lat=coords.lat, lng=coords.lng) if coords else None,
            display_name=self.display_name,
            user_id=self.user_id,
            captured_at=self.captured_at,
            created_at=self.created_at,
        )


class CatchesRequest(BaseModel):
    catches: List[CatchIn] = Field(default_factory=list, description="Feed snapshot, newest first")


class AggregateRequest(CatchesRequest):
    species_filters: Dict[str, bool] = Field(
        default_factory=dict,
        description="Existing toggles; new species are added as visible",
    )


class NearbyRequest(AggregateRequest):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


# ------------- Helpers -------------


def _records(payload: CatchesRequest) -> List[CatchRecord]:
    return [c.to_record() for c in payload.catches]


def _serialise_spot(spot: AggregatedSpot) -> Dict[str, Any]:
    out = spot.to_dict()
    out["latest_catch_text"] = describe_latest_catch(spot.latest_catch)
    out["summary"] = summarise_spot(spot)
    return out


def _serialise_leaderboards(entries: List[LeaderboardEntry]) -> List[Dict[str, Any]]:
    return [asdict(e) for e in entries]


def _aggregate(payload: CatchesRequest, settings: Dict[str, Any]) -> List[AggregatedSpot]:
    return aggregate_spots(
        get_static_spots(),
        _records(payload),
        match_distance_miles=settings["match_distance_miles"],
    )


# ------------- Endpoints -------------


@router.get("/api/spots/static")
async def static_spots():
    """The curated catalogue, as loaded."""
    return {"spots": [asdict(s) for s in get_static_spots()]}


@router.post("/api/spots/aggregate")
async def aggregate_endpoint(payload: AggregateRequest):
    """
    Main map endpoint:
      1. Aggregate catalogue + posted catches into map spots
      2. Merge any new species into the posted toggles
      3. Return only spots with a visible species
    """
    settings = get_aggregation_settings()
    spots = _aggregate(payload, settings)
    filters = build_species_filters(spots, payload.species_filters)
    visible = filter_spots_by_species(spots, filters)

    return {
        "match_distance_miles": settings["match_distance_miles"],
        "spot_count": len(spots),
        "spots": [_serialise_spot(s) for s in visible],
        "species_filters": filters,
    }


@router.post("/api/spots/nearby")
async def nearby_endpoint(payload: NearbyRequest):
    settings = get_aggregation_settings()
    spots = _aggregate(payload, settings)
    filters = build_species_filters(spots, payload.species_filters)
    nearby = rank_spots_by_distance(
        filter_spots_by_species(spots, filters),
        (payload.latitude, payload.longitude),
        limit_miles=settings["nearby_limit_miles"],
    )
    return {
        "limit_miles": settings["nearby_limit_miles"],
        "spots": [
            {**_serialise_spot(n.spot), "distance_miles": n.distance_miles}
            for n in nearby
        ],
    }


@router.post("/api/spots/leaderboards")
async def leaderboards_endpoint(payload: CatchesRequest):
    """Leaderboards for whatever catches are posted, no spot lookup."""
    settings = get_aggregation_settings()
    entries = build_leaderboards(_records(payload), size=settings["leaderboard_size"])
    return {"leaderboards": _serialise_leaderboards(entries)}


@router.post("/api/spots/{spot_id}")
async def spot_detail_endpoint(spot_id: str, payload: CatchesRequest):
    """
    Spot details panel: member catches, leaderboards, species, anglers.
    """
    settings = get_aggregation_settings()
    records = _records(payload)
    spots = aggregate_spots(
        get_static_spots(),
        records,
        match_distance_miles=settings["match_distance_miles"],
    )

    spot = find_spot(spots, spot_id)
    if spot is None:
        logger.info("Spot lookup for unknown id %s", spot_id)
        raise HTTPException(status_code=404, detail="Unknown spot_id")

    detail = build_spot_detail(
        spot,
        records,
        match_distance_miles=settings["match_distance_miles"],
        leaderboard_size=settings["leaderboard_size"],
    )

    return {
        "spot": _serialise_spot(detail.spot),
        "catches": [asdict(c) for c in detail.catches],
        "leaderboards": _serialise_leaderboards(detail.leaderboards),
        "species": detail.species,
        "angler_count": detail.angler_count,
        "last_updated": detail.last_updated,
    }
