from __future__ import annotations

from typing import Optional, Tuple


class DungeonGenerationError(RuntimeError):
    """Raised when a level cannot be built (no room fits the partitioned grid).

    Fatal for the whole generation call; no partial dungeon is returned. Callers
    are expected to relax the parameters (bigger grid, smaller rooms) and retry.
    """

    def __init__(
        self,
        message: str,
        *,
        level_index: Optional[int] = None,
        grid_size: Optional[Tuple[int, int]] = None,
        min_room_size: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.level_index = level_index
        self.grid_size = grid_size
        self.min_room_size = min_room_size

    def to_dict(self):
        out = {"error": self.message}
        if self.level_index is not None:
            out["level_index"] = self.level_index
        if self.grid_size is not None:
            out["grid_size"] = list(self.grid_size)
        if self.min_room_size is not None:
            out["min_room_size"] = self.min_room_size
        return out


__all__ = ["DungeonGenerationError"]
