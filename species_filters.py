"""
Species toggles for the map.

The filter map is {species: visible}. New species default to visible and
existing toggles are never reset when the spot list changes.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from spot_engine import aggregate_spots
from spot_models import AggregatedSpot, StaticSpot

SpeciesFilters = Dict[str, bool]


def build_species_filters(
    spots: List[AggregatedSpot],
    existing: Optional[SpeciesFilters] = None,
) -> SpeciesFilters:
    filters: SpeciesFilters = dict(existing) if existing else {}
    for spot in spots:
        for species in spot.species:
            if species not in filters:
                filters[species] = True
    return filters


def ensure_species_filters(
    static_spots: List[StaticSpot],
    existing: Optional[SpeciesFilters] = None,
) -> SpeciesFilters:
    """Seed the toggles from the catalogue alone, before any catches load."""
    return build_species_filters(aggregate_spots(static_spots, []), existing)


def filter_spots_by_species(
    spots: List[AggregatedSpot],
    filters: SpeciesFilters,
) -> List[AggregatedSpot]:
    """
    Keep spots showing at least one visible species.

    Spots with no species at all are always kept, and species missing from
    `filters` count as visible.
    """
    return [
        spot for spot in spots
        if not spot.species or any(filters.get(species, True) for species in spot.species)
    ]
