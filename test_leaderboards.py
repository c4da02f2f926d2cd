"""
Leaderboards and spot detail.
"""

from datetime import datetime, timedelta, timezone

from fishing_spots import get_static_spots
from leaderboards import build_leaderboards
from spot_detail import build_spot_detail
from spot_engine import aggregate_spots, find_spot
from spot_models import CatchRecord, Coordinates

BASE_TIME = datetime(2026, 6, 1, 8, 0, tzinfo=timezone.utc)


def make_catch(catch_id, species="Walleye", weight=None, **kwargs):
    return CatchRecord(id=catch_id, species=species, weight=weight, **kwargs)


def test_unparseable_weight_is_left_off_the_board():
    catches = [
        make_catch("a", weight="4 lb", display_name="Ann"),
        make_catch("b", weight="n/a", display_name="Bob"),
        make_catch("c", weight="6.5 lb", display_name="Cy"),
    ]
    (entry,) = build_leaderboards(catches)

    assert entry.species == "Walleye"
    assert [r.id for r in entry.rankings] == ["c", "a"]
    assert [r.weight_value for r in entry.rankings] == [6.5, 4.0]
    assert entry.rankings[0].weight_label == "6.5 lb"


def test_board_is_capped_at_five():
    catches = [make_catch(f"c{i}", weight=f"{i} lb") for i in range(1, 8)]
    (entry,) = build_leaderboards(catches)
    assert [r.id for r in entry.rankings] == ["c7", "c6", "c5", "c4", "c3"]


def test_custom_board_size():
    catches = [make_catch(f"c{i}", weight=f"{i} lb") for i in range(1, 8)]
    (entry,) = build_leaderboards(catches, size=2)
    assert len(entry.rankings) == 2


def test_ounces_rank_below_pounds():
    catches = [
        make_catch("oz", species="Bluegill", weight="12 oz"),
        make_catch("lb", species="Bluegill", weight="1 lb"),
    ]
    (entry,) = build_leaderboards(catches)
    assert [r.id for r in entry.rankings] == ["lb", "oz"]
    assert entry.rankings[1].weight_value == 0.75


def test_equal_weights_keep_input_order():
    catches = [
        make_catch("first", weight="3 lb"),
        make_catch("second", weight="3.0"),
        make_catch("third", weight="48 oz"),
    ]
    (entry,) = build_leaderboards(catches)
    assert [r.id for r in entry.rankings] == ["first", "second", "third"]


def test_species_sorted_alphabetically_with_defaults():
    catches = [
        make_catch("w", species="Walleye", weight="2 lb"),
        make_catch("b", species="bluegill", weight="0.5 lb"),
        make_catch("u", species="", weight="1 lb"),
    ]
    entries = build_leaderboards(catches)
    assert [e.species for e in entries] == ["bluegill", "Unknown", "Walleye"]

    unknown = entries[1]
    assert unknown.rankings[0].display_name == "Anonymous angler"


def test_species_with_no_weights_has_no_entry():
    assert build_leaderboards([make_catch("a"), make_catch("b", weight="big")]) == []


# -----------------------------
# Spot detail
# -----------------------------

def test_spot_detail_for_static_spot():
    feed = [
        # newest first, the way the feed delivers it
        make_catch(
            "new", species="Crappie", weight="1.1 lb", user_id="u1",
            coordinates=Coordinates(40.8485, -81.4380),
            captured_at=BASE_TIME + timedelta(hours=2),
        ),
        make_catch(
            "old", species="Bluegill", weight="8oz", user_id="u2",
            coordinates=Coordinates(40.8479, -81.4371),
            captured_at=BASE_TIME,
        ),
        make_catch(
            "again", species="Crappie", weight="n/a", user_id="u1",
            coordinates=Coordinates(40.8482, -81.4375),
            captured_at=BASE_TIME - timedelta(days=1),
        ),
        make_catch("elsewhere", coordinates=Coordinates(42.0, -80.0)),
    ]

    spots = aggregate_spots(get_static_spots(), feed)
    detail = build_spot_detail(find_spot(spots, "sippo-lake"), feed)

    assert [c.id for c in detail.catches] == ["new", "old", "again"]
    assert detail.angler_count == 2
    assert detail.last_updated == BASE_TIME + timedelta(hours=2)
    assert detail.species == [
        "Bluegill", "Channel Catfish", "Crappie", "Largemouth Bass",
    ]
    assert [e.species for e in detail.leaderboards] == ["Bluegill", "Crappie"]
    assert [r.id for r in detail.leaderboards[1].rankings] == ["new"]


def test_spot_detail_with_no_members():
    spots = aggregate_spots(get_static_spots(), [])
    detail = build_spot_detail(find_spot(spots, "portage-lakes"), [])
    assert detail.catches == []
    assert detail.leaderboards == []
    assert detail.angler_count == 0
    assert detail.last_updated is None
    assert detail.species == ["Carp", "Smallmouth Bass", "Walleye"]
