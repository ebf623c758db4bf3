"""Corridor graph: minimum spanning tree over room centers plus a few loop edges.

Every accepted edge becomes an L-shaped path between the two room centers.
Organic corridors get a jittered midpoint between consecutive path points so
they read as winding tunnels rather than clean elbows.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

from .rooms import Room

STRAIGHT = "straight"
ORGANIC = "organic"


class Point(NamedTuple):
    x: int
    y: int

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}


class RoomConnection(NamedTuple):
    room1_id: str
    room2_id: str
    distance: int


@dataclass
class Corridor:
    id: str
    path: List[Point]
    width: int = 1
    doors: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "path": [p.to_dict() for p in self.path],
            "width": self.width,
            "doors": [d.to_dict() for d in self.doors],
        }


def _all_edges(rooms: Sequence[Room]) -> List[RoomConnection]:
    edges = []
    centers = [r.center for r in rooms]
    for i in range(len(rooms)):
        x1, y1 = centers[i]
        for j in range(i + 1, len(rooms)):
            x2, y2 = centers[j]
            edges.append(RoomConnection(rooms[i].id, rooms[j].id, abs(x1 - x2) + abs(y1 - y2)))
    # stable: equal distances keep (i, j) generation order
    edges.sort(key=lambda e: e.distance)
    return edges


def minimum_spanning_tree(rooms: Sequence[Room], edges: Sequence[RoomConnection]) -> List[RoomConnection]:
    """Kruskal over pre-sorted edges; returns exactly ``len(rooms) - 1`` edges for a non-empty room set."""
    parent = {r.id: r.id for r in rooms}

    def find(a):
        while parent[a] != a:
            parent[a] = parent[parent[a]]
            a = parent[a]
        return a

    mst = []
    for edge in edges:
        ra, rb = find(edge.room1_id), find(edge.room2_id)
        if ra != rb:
            parent[rb] = ra
            mst.append(edge)
            if len(mst) == len(rooms) - 1:
                break
    return mst


def _pick_extra_edges(edges: Sequence[RoomConnection], used: List[RoomConnection], count: int) -> List[RoomConnection]:
    seen = {frozenset((e.room1_id, e.room2_id)) for e in used}
    extra: List[RoomConnection] = []
    for edge in edges:
        if len(extra) >= count:
            break
        key = frozenset((edge.room1_id, edge.room2_id))
        if key in seen:
            continue
        extra.append(edge)
        seen.add(key)
    return extra


def _clamp_point(p: Point, bounds: Optional[Tuple[int, int]]) -> Point:
    if bounds is None:
        return p
    w, h = bounds
    return Point(max(0, min(w - 1, p.x)), max(0, min(h - 1, p.y)))


def l_shaped_path(
    start: Point,
    end: Point,
    style: str,
    rng: random.Random,
    bounds: Optional[Tuple[int, int]] = None,
) -> List[Point]:
    if rng.random() < 0.5:
        elbow = Point(end.x, start.y)
    else:
        elbow = Point(start.x, end.y)
    path = [start, elbow, end]
    if style != ORGANIC:
        return path
    jittered = [path[0]]
    for current in path[1:]:
        prev = jittered[-1]
        mid = Point((prev.x + current.x + 1) // 2 + rng.randint(-1, 1), (prev.y + current.y + 1) // 2 + rng.randint(-1, 1))
        jittered.append(_clamp_point(mid, bounds))
        jittered.append(current)
    return jittered


def build_corridors(
    rooms: List[Room],
    extra_connections_ratio: float,
    style: str = STRAIGHT,
    rng: Optional[random.Random] = None,
    bounds: Optional[Tuple[int, int]] = None,
) -> Tuple[List[Corridor], List[RoomConnection]]:
    """Connect every room; returns ``(corridors, accepted_connections)``.

    The first ``len(rooms) - 1`` connections form the spanning tree, followed by
    ``floor(tree_edges * extra_connections_ratio)`` loop edges (shortest first).
    Room ``connections`` lists are updated in place.
    """
    if len(rooms) < 2:
        return [], []
    if rng is None:
        rng = random.Random()
    edges = _all_edges(rooms)
    mst = minimum_spanning_tree(rooms, edges)
    extra_count = int(len(mst) * max(0.0, extra_connections_ratio))
    accepted = mst + _pick_extra_edges(edges, mst, extra_count)

    by_id = {r.id: r for r in rooms}
    corridors: List[Corridor] = []
    for i, conn in enumerate(accepted):
        a, b = by_id[conn.room1_id], by_id[conn.room2_id]
        path = l_shaped_path(Point(*a.center), Point(*b.center), style, rng, bounds)
        corridors.append(Corridor(id=f"corridor-{i}", path=path))
        a.connect(b.id)
        b.connect(a.id)
    return corridors, accepted


__all__ = [
    "ORGANIC",
    "STRAIGHT",
    "Corridor",
    "Point",
    "RoomConnection",
    "build_corridors",
    "l_shaped_path",
    "minimum_spanning_tree",
]
