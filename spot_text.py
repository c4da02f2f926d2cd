"""
Small text helpers for the map popups / nearby list.

Goal: produce lines like:

Sippo Lake
Electric motors only. Shoreline fishing permitted at public park.
Bag limit: Bass 5 (≥ 12"), Catfish 6
Logged catches: 3
Latest catch: Bluegill (0.6 lb) by Sam on Jun 2, 2026
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from spot_models import AggregatedSpot, LatestCatchSummary, SummarySource


def format_catch_date(when: Optional[datetime]) -> Optional[str]:
    """'Jun 2, 2026' style, no zero padding."""
    if when is None:
        return None
    return f"{when.strftime('%b')} {when.day}, {when.year}"


def describe_latest_catch(latest: Optional[LatestCatchSummary]) -> Optional[str]:
    """
    Provenance-aware latest-catch line.

    Live catches credit the angler and the date; catalogue snapshots only
    know the bait.
    """
    if latest is None:
        return None

    text = f"Latest catch: {latest.species}"
    if latest.weight:
        text += f" ({latest.weight})"

    if latest.source == SummarySource.DYNAMIC:
        if latest.display_name:
            text += f" by {latest.display_name}"
        occurred = format_catch_date(latest.occurred_at)
        if occurred:
            text += f" on {occurred}"
    elif latest.bait:
        text += f" on {latest.bait}"

    return text


def describe_catch_count(count: int) -> str:
    if count > 0:
        return f"Logged catches: {count}"
    return "No catches logged yet"


def summarise_spot(spot: AggregatedSpot) -> str:
    lines: List[str] = [spot.name]

    regs = spot.regulations
    if regs and regs.description:
        lines.append(regs.description)
    if regs and regs.bag_limit:
        lines.append(f"Bag limit: {regs.bag_limit}")

    lines.append(describe_catch_count(spot.catch_count))

    latest_line = describe_latest_catch(spot.latest_catch)
    if latest_line:
        lines.append(latest_line)

    return "\n".join(lines)
