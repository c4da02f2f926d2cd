"""
Everything the spot details panel needs for one aggregated spot.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from leaderboards import LEADERBOARD_SIZE, build_leaderboards
from spot_engine import MATCH_DISTANCE_MILES, get_spot_catches
from spot_models import AggregatedSpot, CatchRecord, LeaderboardEntry


@dataclass
class SpotDetail:
    spot: AggregatedSpot
    catches: List[CatchRecord]
    leaderboards: List[LeaderboardEntry]
    species: List[str]
    angler_count: int
    last_updated: Optional[datetime]


def build_spot_detail(
    spot: AggregatedSpot,
    catches: List[CatchRecord],
    match_distance_miles: float = MATCH_DISTANCE_MILES,
    leaderboard_size: int = LEADERBOARD_SIZE,
) -> SpotDetail:
    """
    `catches` is the full feed snapshot, newest first (the order the feed
    delivers it), so the first member is the last activity at the spot.
    """
    members = get_spot_catches(spot, catches, match_distance_miles)

    species = {s for s in spot.species if s}
    species.update(c.species for c in members if c.species)

    anglers = {c.user_id for c in members if c.user_id}

    return SpotDetail(
        spot=spot,
        catches=members,
        leaderboards=build_leaderboards(members, size=leaderboard_size),
        species=sorted(species, key=str.casefold),
        angler_count=len(anglers),
        last_updated=members[0].occurred_at if members else None,
    )
