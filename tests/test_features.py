import random

from layoutforge.dungeon.features import FEATURE_WEIGHTS, LARGE_ROOM_AREA, _primary_feature, add_room_features
from layoutforge.dungeon.profiles import LAYOUT_PROFILES
from layoutforge.dungeon.rooms import ENTRY, EXIT

from dungeon_test_utils import make_room

ALLOWED = {"trap", "treasure", "encounter", "altar", "decoration", "chest"}


def _rooms(n, size=4):
    rooms = [make_room(i, i * 10, 0, size, size) for i in range(n)]
    rooms[0].type = ENTRY
    rooms[-1].type = EXIT
    return rooms


def test_entry_and_exit_rooms_stay_bare():
    rooms = _rooms(6)
    add_room_features(rooms, LAYOUT_PROFILES["fortress"], "hard", random.Random(1))
    assert rooms[0].features == [] and rooms[-1].features == []


def test_added_count_matches_attached_features():
    rooms = _rooms(12, size=10)
    added = add_room_features(rooms, LAYOUT_PROFILES["temple"], "medium", random.Random(6))
    assert added == sum(len(r.features) for r in rooms)
    for room in rooms:
        assert {f.type for f in room.features} <= ALLOWED
        assert len(room.features) <= 2


def test_small_rooms_never_get_chests():
    rooms = _rooms(30, size=4)
    assert rooms[1].area <= LARGE_ROOM_AREA
    add_room_features(rooms, LAYOUT_PROFILES["dungeon"], "medium", random.Random(2))
    assert all(f.type != "chest" for r in rooms for f in r.features)


def test_primary_feature_thresholds():
    weights = FEATURE_WEIGHTS["military"]
    assert _primary_feature(0.0, weights, 1.0, "military", "medium").type == "trap"
    # 0.35 falls past trap (0.3) into treasure (0.4)
    assert _primary_feature(0.35, weights, 1.0, "military", "medium").type == "treasure"
    # deadly widens the trap band to 0.42
    assert _primary_feature(0.35, weights, 1.4, "military", "deadly").type == "trap"
    lair = _primary_feature(0.999, weights, 1.0, "military", "medium")
    assert lair.type == "decoration" and lair.icon == "lair"


def test_feature_metadata():
    religious = FEATURE_WEIGHTS["religious"]
    altar = _primary_feature(0.7, religious, 1.0, "religious", "medium")
    assert altar.type == "altar" and altar.metadata == {"blessed": True}
    trap = _primary_feature(0.01, religious, 1.0, "religious", "deadly")
    assert trap.metadata == {"severity": "deadly"}
    assert trap.to_dict() == {
        "type": "trap",
        "description": "Hidden pressure plate trap",
        "metadata": {"severity": "deadly"},
        "icon": "trap",
    }


def test_same_seed_same_features():
    def run(seed):
        rooms = _rooms(10, size=10)
        add_room_features(rooms, LAYOUT_PROFILES["lair"], "easy", random.Random(seed))
        return [[f.to_dict() for f in r.features] for r in rooms]

    assert run(99) == run(99)
