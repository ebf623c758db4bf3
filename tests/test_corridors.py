import random

from layoutforge.dungeon.corridors import (
    ORGANIC,
    STRAIGHT,
    Point,
    build_corridors,
    l_shaped_path,
    minimum_spanning_tree,
)
from layoutforge.dungeon.corridors import _all_edges

from dungeon_test_utils import make_room, reachable_ids, row_of_rooms


def test_single_room_gets_no_corridors():
    rooms = [make_room(0, 0, 0)]
    corridors, conns = build_corridors(rooms, 0.5, rng=random.Random(1))
    assert corridors == [] and conns == []
    assert rooms[0].connections == []


def test_spanning_tree_connects_every_room():
    rooms = row_of_rooms(5)
    corridors, conns = build_corridors(rooms, 0.0, rng=random.Random(1))
    assert len(corridors) == len(conns) == 4
    assert reachable_ids(rooms) == {r.id for r in rooms}


def test_mst_prefers_shortest_edges():
    rooms = row_of_rooms(3)
    mst = minimum_spanning_tree(rooms, _all_edges(rooms))
    pairs = {frozenset((e.room1_id, e.room2_id)) for e in mst}
    assert pairs == {frozenset(("room-0", "room-1")), frozenset(("room-1", "room-2"))}


def test_extra_connections_add_loops():
    rooms = row_of_rooms(5)
    corridors, conns = build_corridors(rooms, 1.0, rng=random.Random(3))
    # 4 tree edges + floor(4 * 1.0) extra edges out of 6 spare pairs
    assert len(conns) == 8
    pairs = [frozenset((c.room1_id, c.room2_id)) for c in conns]
    assert len(set(pairs)) == len(pairs)


def test_extra_connections_capped_by_available_pairs():
    rooms = row_of_rooms(3)
    _corridors, conns = build_corridors(rooms, 1.0, rng=random.Random(3))
    # only one pair is left outside the tree
    assert len(conns) == 3


def test_connections_are_symmetric_and_ids_sequential():
    rooms = row_of_rooms(4)
    corridors, _ = build_corridors(rooms, 0.5, rng=random.Random(8))
    assert [c.id for c in corridors] == [f"corridor-{i}" for i in range(len(corridors))]
    by_id = {r.id: r for r in rooms}
    for room in rooms:
        for other in room.connections:
            assert room.id in by_id[other].connections


def test_straight_path_is_single_elbow():
    rng = random.Random(0)
    for _ in range(20):
        path = l_shaped_path(Point(2, 3), Point(10, 12), STRAIGHT, rng)
        assert path[0] == Point(2, 3) and path[-1] == Point(10, 12)
        assert len(path) == 3
        elbow = path[1]
        assert elbow in (Point(10, 3), Point(2, 12))


def test_organic_path_jitters_within_bounds():
    rng = random.Random(5)
    for _ in range(50):
        path = l_shaped_path(Point(0, 0), Point(9, 9), ORGANIC, rng, bounds=(10, 10))
        assert len(path) == 5
        assert path[0] == Point(0, 0) and path[-1] == Point(9, 9)
        for p in path:
            assert 0 <= p.x < 10 and 0 <= p.y < 10


def test_corridor_endpoints_are_room_centers():
    rooms = row_of_rooms(3, gap=12, size=5)
    corridors, conns = build_corridors(rooms, 0.0, STRAIGHT, random.Random(2))
    by_id = {r.id: r for r in rooms}
    for corridor, conn in zip(corridors, conns):
        assert tuple(corridor.path[0]) == by_id[conn.room1_id].center
        assert tuple(corridor.path[-1]) == by_id[conn.room2_id].center
        assert corridor.to_dict()["path"][0] == {"x": corridor.path[0].x, "y": corridor.path[0].y}
