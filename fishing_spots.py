# fishing_spots.py
#
# Curated fishing spots the map knows about (Canton, Ohio area).
# spot_engine / spots_api do:
#   from fishing_spots import get_static_spots
#   aggregate_spots(get_static_spots(), catches)

from typing import Any, Dict, List

from spot_models import StaticSpot

FISHING_SPOTS: List[Dict[str, Any]] = [
    {
        "id": "sippo-lake",
        "name": "Sippo Lake",
        "lat": 40.8482,
        "lon": -81.4375,
        "distance_from_canton_mi": 4.5,
        "species": ["Largemouth Bass", "Channel Catfish", "Bluegill"],
        "public_access": True,
        "regulations": {
            "description": "Electric motors only. Shoreline fishing permitted at public park.",
            "bag_limit": "Bass 5 (≥ 12\"), Catfish 6",
        },
        "latest_catch": {
            "species": "Largemouth Bass",
            "weight": "3.4 lb",
            "bait": "Chartreuse paddle tail",
        },
    },
    {
        "id": "nimisila-reservoir",
        "name": "Nimisila Reservoir",
        "lat": 40.937,
        "lon": -81.5116,
        "distance_from_canton_mi": 13.1,
        "species": ["Muskie", "Crappie", "Yellow Perch"],
        "public_access": True,
        "regulations": {
            "description": "No wake after sunset. State boating permit required.",
            "bag_limit": "Muskie catch-and-release, Perch 30",
        },
        "latest_catch": {
            "species": "Muskie",
            "weight": "38 in",   # a length; catalogue snapshots never reach the leaderboards
            "bait": "Silver bucktail spinner",
        },
    },
    {
        "id": "portage-lakes",
        "name": "Portage Lakes",
        "lat": 40.9972,
        "lon": -81.5416,
        "distance_from_canton_mi": 17.5,
        "species": ["Smallmouth Bass", "Walleye", "Carp"],
        "public_access": True,
        "regulations": {
            "description": "Multiple public ramps. Observe 12\" minimum for bass.",
            "bag_limit": "Bass 5 (≥ 12\"), Walleye 6",
        },
        "latest_catch": {
            "species": "Smallmouth Bass",
            "weight": "2.9 lb",
            "bait": "Ned rig",
        },
    },
    {
        "id": "tuscarawas-river",
        "name": "Tuscarawas River",
        "lat": 40.783,
        "lon": -81.3785,
        "distance_from_canton_mi": 1.1,
        "species": ["Smallmouth Bass", "Sauger", "Channel Catfish"],
        "public_access": True,
        "regulations": {
            "description": "Check seasonal closures for sauger. Respect private property lines.",
            "bag_limit": "Sauger 6, Catfish 6",
        },
        "latest_catch": {
            "species": "Sauger",
            "weight": "18 in",
            "bait": "Chartreuse jig",
        },
    },
]


def get_static_spots() -> List[StaticSpot]:
    return [StaticSpot.from_dict(raw) for raw in FISHING_SPOTS]
