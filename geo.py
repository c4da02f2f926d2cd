"""
Great-circle distance helpers.

Every "is this catch close enough" decision in the map code goes through
compute_distance_miles, so the rounding here is part of the matching rule:
distances are compared after rounding to one decimal place.
"""

from __future__ import annotations

import math
from typing import Tuple

LatLng = Tuple[float, float]

EARTH_RADIUS_MILES = 3958.8
METERS_PER_MILE = 1609.34


def _round_half_up(value: float, places: int = 1) -> float:
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def compute_distance_miles(a: LatLng, b: LatLng) -> float:
    """
    Haversine distance between two (lat, lng) pairs in degrees.

    Returns statute miles rounded (half-up) to one decimal place.
    """
    lat1, lon1 = a
    lat2, lon2 = b

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    la1 = math.radians(lat1)
    la2 = math.radians(lat2)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.sin(d_lon / 2) ** 2 * math.cos(la1) * math.cos(la2)
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return _round_half_up(EARTH_RADIUS_MILES * c)


def miles_to_meters(miles: float) -> float:
    return miles * METERS_PER_MILE
