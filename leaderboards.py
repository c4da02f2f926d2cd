"""
Per-species leaderboards for a set of catches (usually one spot's members).
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List

from spot_models import CatchRecord, LeaderboardEntry, LeaderboardRanking
from weights import parse_weight_value

LEADERBOARD_SIZE = 5
UNKNOWN_SPECIES = "Unknown"
ANONYMOUS_ANGLER = "Anonymous angler"


def build_leaderboards(
    catches: Iterable[CatchRecord],
    size: int = LEADERBOARD_SIZE,
) -> List[LeaderboardEntry]:
    """
    Rank catches by parsed weight (heaviest first), top `size` per species.

    Catches whose weight can't be parsed are left out completely rather
    than ranked as zero. Equal weights keep their input order. Species are
    returned alphabetically.
    """
    per_species: Dict[str, List[LeaderboardRanking]] = defaultdict(list)

    for record in catches:
        weight_value = parse_weight_value(record.weight)
        if weight_value is None:
            continue

        per_species[record.species or UNKNOWN_SPECIES].append(
            LeaderboardRanking(
                id=record.id,
                display_name=record.display_name or ANONYMOUS_ANGLER,
                weight_label=record.weight or "",
                weight_value=weight_value,
            )
        )

    entries = [
        LeaderboardEntry(
            species=species,
            rankings=sorted(rankings, key=lambda r: r.weight_value, reverse=True)[:size],
        )
        for species, rankings in per_species.items()
    ]
    entries.sort(key=lambda e: e.species.casefold())
    return entries
