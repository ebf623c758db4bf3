"""Door placement at room / corridor junctions.

For every corridor, rooms whose center sits within 3 cells (Manhattan) of a
path endpoint receive one door where the corridor meets the room boundary.
Doors are attached to the room and, when the door lies on the corridor path,
to the corridor as well. Rooms and corridors are mutated in place.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .corridors import Corridor, Point
from .rooms import Room

DOOR_MATERIALS = ("wooden", "iron", "stone")
DOOR_TYPES = DOOR_MATERIALS + ("secret", "magical", "barred")
DOOR_STATES = ("open", "closed", "locked", "stuck", "broken")
# Generated state weights; "broken" is reserved for later world updates
_STATE_WEIGHTS = (("open", 0.2), ("closed", 0.5), ("locked", 0.2), ("stuck", 0.1))

ATTACH_RADIUS = 3


@dataclass
class Door:
    id: str
    x: int
    y: int
    type: str
    state: str
    lock_dc: Optional[int] = None
    strength_dc: Optional[int] = None
    key_item_id: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_secret(self) -> bool:
        return self.type == "secret"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id, "x": self.x, "y": self.y, "type": self.type, "state": self.state}
        for key in ("lock_dc", "strength_dc", "key_item_id", "description"):
            val = getattr(self, key)
            if val is not None:
                out[key] = val
        return out


def _random_door_type(rng: random.Random) -> str:
    return rng.choice(DOOR_MATERIALS)


def _random_door_state(rng: random.Random) -> str:
    roll = rng.random()
    acc = 0.0
    for state, weight in _STATE_WEIGHTS:
        acc += weight
        if roll < acc:
            return state
    return "closed"


def _describe(door_type: str, state: str) -> str:
    if door_type == "secret":
        return "A concealed door hidden in the wall"
    return f"A {state} {door_type} door"


def closest_boundary_point(point: Point, room: Room) -> Point:
    right = room.x + room.width - 1
    bottom = room.y + room.height - 1
    d_left = abs(point.x - room.x)
    d_right = abs(point.x - right)
    d_top = abs(point.y - room.y)
    d_bottom = abs(point.y - bottom)
    nearest = min(d_left, d_right, d_top, d_bottom)
    clamp_y = max(room.y, min(bottom, point.y))
    clamp_x = max(room.x, min(right, point.x))
    if nearest == d_left:
        return Point(room.x, clamp_y)
    if nearest == d_right:
        return Point(right, clamp_y)
    if nearest == d_top:
        return Point(clamp_x, room.y)
    return Point(clamp_x, bottom)


def find_connection_point(room: Room, corridor: Corridor) -> Optional[Point]:
    if len(corridor.path) < 2:
        return None
    start, end = corridor.path[0], corridor.path[-1]
    if room.on_boundary(start.x, start.y):
        return start
    if room.on_boundary(end.x, end.y):
        return end
    near_start = closest_boundary_point(start, room)
    near_end = closest_boundary_point(end, room)
    d_start = abs(near_start.x - start.x) + abs(near_start.y - start.y)
    d_end = abs(near_end.x - end.x) + abs(near_end.y - end.y)
    return near_start if d_start < d_end else near_end


def is_door_along_corridor(door: Door, corridor: Corridor) -> bool:
    for p1, p2 in zip(corridor.path, corridor.path[1:]):
        if min(p1.x, p2.x) <= door.x <= max(p1.x, p2.x) and min(p1.y, p2.y) <= door.y <= max(p1.y, p2.y):
            return True
    return False


def _rooms_near_endpoints(rooms: Sequence[Room], start: Point, end: Point) -> List[Room]:
    near = []
    for room in rooms:
        cx, cy = room.center
        d_start = abs(cx - start.x) + abs(cy - start.y)
        d_end = abs(cx - end.x) + abs(cy - end.y)
        if d_start < ATTACH_RADIUS or d_end < ATTACH_RADIUS:
            near.append(room)
    return near


def place_doors(
    rooms: List[Room],
    corridors: List[Corridor],
    secret_door_ratio: float,
    rng: Optional[random.Random] = None,
) -> Tuple[List[Door], Dict[str, int]]:
    """Attach doors; returns ``(doors, counts)`` where counts tallies door types."""
    if rng is None:
        rng = random.Random()
    doors: List[Door] = []
    counts: Dict[str, int] = {}
    for corridor in corridors:
        if len(corridor.path) < 2:
            continue
        for room in _rooms_near_endpoints(rooms, corridor.path[0], corridor.path[-1]):
            point = find_connection_point(room, corridor)
            if point is None:
                continue
            door_type = "secret" if rng.random() < secret_door_ratio else _random_door_type(rng)
            state = _random_door_state(rng)
            lock_dc = 10 + rng.randrange(10) if rng.random() < 0.3 else None
            strength_dc = 15 + rng.randrange(10) if rng.random() < 0.2 else None
            door = Door(
                id=f"door-{len(doors)}",
                x=point.x,
                y=point.y,
                type=door_type,
                state=state,
                lock_dc=lock_dc,
                strength_dc=strength_dc,
                description=_describe(door_type, state),
            )
            doors.append(door)
            counts[door_type] = counts.get(door_type, 0) + 1
            room.doors.append(door)
            if is_door_along_corridor(door, corridor):
                corridor.doors.append(door)
    return doors, counts


__all__ = [
    "DOOR_MATERIALS",
    "DOOR_STATES",
    "DOOR_TYPES",
    "Door",
    "closest_boundary_point",
    "find_connection_point",
    "is_door_along_corridor",
    "place_doors",
]
