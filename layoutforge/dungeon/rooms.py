import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .bsp import SpaceNode

CHAMBER = "chamber"
ENTRY = "entry"
EXIT = "exit"
SPECIAL = "special"


@dataclass
class Room:
    id: str
    x: int
    y: int
    width: int
    height: int
    type: str = CHAMBER
    doors: List[Any] = field(default_factory=list)
    description: str = ""
    features: List[Any] = field(default_factory=list)
    connections: List[str] = field(default_factory=list)
    floor_texture: Optional[str] = None
    wall_texture: Optional[str] = None
    is_secret: bool = False

    def cells(self):
        for ix in range(self.x, self.x + self.width):
            for iy in range(self.y, self.y + self.height):
                yield ix, iy

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.width // 2, self.y + self.height // 2)

    @property
    def area(self) -> int:
        return self.width * self.height

    def intersects(self, other: "Room") -> bool:
        return not (
            self.x + self.width <= other.x
            or other.x + other.width <= self.x
            or self.y + self.height <= other.y
            or other.y + other.height <= self.y
        )

    def on_boundary(self, x: int, y: int) -> bool:
        inside_x = self.x <= x < self.x + self.width
        inside_y = self.y <= y < self.y + self.height
        return (inside_y and x in (self.x, self.x + self.width - 1)) or (
            inside_x and y in (self.y, self.y + self.height - 1)
        )

    def connect(self, other_id: str) -> None:
        if other_id not in self.connections:
            self.connections.append(other_id)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "type": self.type,
            "doors": [d.to_dict() for d in self.doors],
            "description": self.description,
            "features": [f.to_dict() for f in self.features],
            "connections": list(self.connections),
        }
        if self.floor_texture is not None:
            out["floor_texture"] = self.floor_texture
        if self.wall_texture is not None:
            out["wall_texture"] = self.wall_texture
        if self.is_secret:
            out["is_secret"] = True
        return out


def room_center(room: Room) -> Tuple[int, int]:
    return room.center


def rooms_overlap(a: Room, b: Room) -> bool:
    return a.intersects(b)


def _quantize(size: int, span: int, min_size: int, max_size: int) -> Optional[int]:
    q = (size // span) * span
    if q < min_size:
        q = -(-min_size // span) * span
    if q > max_size:
        return None
    return q


def place_rooms(
    leaves: Iterable[SpaceNode],
    min_room_size: int,
    max_room_size: int,
    room_padding: int,
    min_tile_span: int = 1,
    max_tile_span: int = 1,
    rng: Optional[random.Random] = None,
) -> List[Room]:
    """Carve one room out of each leaf, skipping leaves the padded room cannot fit.

    Padding is ``room_padding`` plus 0-1 extra cells per side. With a tile span
    above 1 both dimensions and the in-leaf offset snap to multiples of the span;
    when no multiple lands inside the size bounds the room keeps its raw size.
    A skipped leaf is not an error, the level simply ends up with fewer rooms.
    """
    if rng is None:
        rng = random.Random()
    min_tile_span = max(1, min_tile_span)
    max_tile_span = max(min_tile_span, max_tile_span)
    rooms: List[Room] = []
    for i, leaf in enumerate(leaves):
        padding = room_padding + rng.randint(0, 1)
        x0 = leaf.x + padding
        y0 = leaf.y + padding
        w = max(min_room_size, min(max_room_size, leaf.width - padding * 2))
        h = max(min_room_size, min(max_room_size, leaf.height - padding * 2))

        span = rng.randint(min_tile_span, max_tile_span) if max_tile_span > 1 else 1
        if span > 1:
            qw = _quantize(w, span, min_room_size, max_room_size)
            qh = _quantize(h, span, min_room_size, max_room_size)
            if qw is None or qh is None:
                span = 1
            else:
                w, h = qw, qh

        if x0 + w > leaf.x + leaf.width or y0 + h > leaf.y + leaf.height:
            continue

        extra_w = (leaf.x + leaf.width) - (x0 + w)
        extra_h = (leaf.y + leaf.height) - (y0 + h)
        off_x = rng.randrange(extra_w) if extra_w > 0 else 0
        off_y = rng.randrange(extra_h) if extra_h > 0 else 0
        if span > 1:
            off_x -= off_x % span
            off_y -= off_y % span

        rooms.append(Room(id=f"room-{i}", x=x0 + off_x, y=y0 + off_y, width=w, height=h))
    return rooms


__all__ = ["CHAMBER", "ENTRY", "EXIT", "SPECIAL", "Room", "place_rooms", "room_center", "rooms_overlap"]
