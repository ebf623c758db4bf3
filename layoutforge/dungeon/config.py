import hashlib
import random
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Union

DIFFICULTIES = ("easy", "medium", "hard", "deadly")
MAX_LEVELS = 5
SEED_MAX_INT = 9223372036854775807


def coerce_seed(value: Union[int, str, None]) -> int:
    """Convert a provided seed (int or str) into a bounded non-negative int.

    Digit strings parse as ints, other strings hash deterministically, None or
    blank draws a fresh random seed.
    """
    if value is None or isinstance(value, bool):
        return random.randint(1, 1_000_000)
    if isinstance(value, int):
        return value % SEED_MAX_INT
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return random.randint(1, 1_000_000)
        # isdigit() alone accepts superscripts and other digits int() rejects
        if s.isascii() and s.isdigit():
            return int(s) % SEED_MAX_INT
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX_INT
    return random.randint(1, 1_000_000)


def _ratio(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return max(0.0, min(1.0, float(value)))


@dataclass
class DungeonGenerationParams:
    grid_width: int = 50
    grid_height: int = 50
    num_levels: int = 1
    min_room_size: int = 2
    max_room_size: int = 10
    min_tile_span: Optional[int] = None
    max_tile_span: Optional[int] = None
    room_density: Optional[float] = None
    extra_connections_ratio: Optional[float] = None
    secret_door_ratio: float = 0.1
    theme: Optional[str] = None
    difficulty: str = "medium"
    tile_type: str = "square"
    world_id: Optional[str] = None
    seed: Union[int, str, None] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DungeonGenerationParams":
        """Build from a JSON-ish mapping, ignoring unknown keys and explicit nulls."""
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in payload.items() if k in known and v is not None}
        return cls(**kwargs)

    def normalized(self) -> "DungeonGenerationParams":
        """Return a copy with degenerate values clamped into a consistent range."""
        min_room = max(1, int(self.min_room_size))
        max_room = max(1, int(self.max_room_size))
        if min_room > max_room:
            min_room, max_room = max_room, min_room
        min_span = None if self.min_tile_span is None else max(1, int(self.min_tile_span))
        max_span = None if self.max_tile_span is None else max(1, int(self.max_tile_span))
        # A tile unit larger than the biggest room can never quantize anything
        if min_span is not None:
            min_span = min(min_span, max_room)
        if max_span is not None:
            max_span = min(max_span, max_room)
        if min_span is not None and max_span is not None and max_span < min_span:
            max_span = min_span
        difficulty = self.difficulty if self.difficulty in DIFFICULTIES else "medium"
        return replace(
            self,
            grid_width=max(1, int(self.grid_width)),
            grid_height=max(1, int(self.grid_height)),
            num_levels=max(1, min(MAX_LEVELS, int(self.num_levels))),
            min_room_size=min_room,
            max_room_size=max_room,
            min_tile_span=min_span,
            max_tile_span=max_span,
            room_density=_ratio(self.room_density),
            extra_connections_ratio=_ratio(self.extra_connections_ratio),
            secret_door_ratio=_ratio(self.secret_door_ratio),
            difficulty=difficulty,
            tile_type=self.tile_type or "square",
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["DIFFICULTIES", "MAX_LEVELS", "DungeonGenerationParams", "coerce_seed"]
