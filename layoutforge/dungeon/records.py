"""Output records handed to persistence / rendering collaborators.

Everything here serializes through ``to_dict()`` into plain JSON types; unset
optional fields are omitted rather than emitted as null.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .corridors import Corridor
from .rooms import Room

CELL_SIZE_FEET = 5


@dataclass
class Stair:
    id: str
    x: int
    y: int
    from_level: int
    to_level: int
    direction: str  # up | down | spiral
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "from_level": self.from_level,
            "to_level": self.to_level,
            "direction": self.direction,
            "description": self.description,
        }


@dataclass
class FogOfWarState:
    revealed_rooms: List[str] = field(default_factory=list)
    revealed_corridors: List[str] = field(default_factory=list)
    discovered_doors: List[str] = field(default_factory=list)
    discovered_secrets: List[str] = field(default_factory=list)
    entry_point_visible: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "revealed_rooms": list(self.revealed_rooms),
            "revealed_corridors": list(self.revealed_corridors),
            "discovered_doors": list(self.discovered_doors),
            "discovered_secrets": list(self.discovered_secrets),
            "entry_point_visible": self.entry_point_visible,
        }


@dataclass
class DungeonLevel:
    level_index: int
    name: str
    width: int
    height: int
    rooms: List[Room]
    corridors: List[Corridor]
    stairs: List[Stair] = field(default_factory=list)
    cell_size: int = CELL_SIZE_FEET
    tile_type: str = "square"
    texture_set: Optional[str] = None
    fog_of_war: Optional[FogOfWarState] = None

    def entry_room_index(self) -> int:
        for i, room in enumerate(self.rooms):
            if room.type == "entry":
                return i
        return 0

    def exit_room_index(self) -> int:
        for i, room in enumerate(self.rooms):
            if room.type == "exit":
                return i
        return len(self.rooms) - 1

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "level_index": self.level_index,
            "name": self.name,
            "grid": {"width": self.width, "height": self.height, "cell_size": self.cell_size},
            "rooms": [r.to_dict() for r in self.rooms],
            "corridors": [c.to_dict() for c in self.corridors],
            "stairs": [s.to_dict() for s in self.stairs],
            "tile_type": self.tile_type,
        }
        if self.texture_set is not None:
            out["texture_set"] = self.texture_set
        if self.fog_of_war is not None:
            out["fog_of_war"] = self.fog_of_war.to_dict()
        return out


@dataclass
class Identity:
    name: str
    type: str
    theme: str
    difficulty: str
    recommended_level: int


@dataclass
class LevelRef:
    level_index: int
    room_index: int
    description: str
    condition: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "level_index": self.level_index,
            "room_index": self.room_index,
            "description": self.description,
        }
        if self.condition is not None:
            out["condition"] = self.condition
        return out


@dataclass
class History:
    origin: str = "A procedurally generated dungeon"
    current_state: str = "Unknown"
    legends: List[str] = field(default_factory=list)


@dataclass
class WorldIntegration:
    parent_location_id: Optional[str] = None
    connected_locations: List[str] = field(default_factory=list)
    associated_factions: List[Dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "connected_locations": list(self.connected_locations),
            "associated_factions": [dict(f) for f in self.associated_factions],
        }
        if self.parent_location_id is not None:
            out["parent_location_id"] = self.parent_location_id
        return out


@dataclass
class DungeonDetail:
    identity: Identity
    levels: List[DungeonLevel]
    entry_point: LevelRef
    exit_points: List[LevelRef]
    history: History = field(default_factory=History)
    world_integration: WorldIntegration = field(default_factory=WorldIntegration)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identity": {
                "name": self.identity.name,
                "type": self.identity.type,
                "theme": self.identity.theme,
                "difficulty": self.identity.difficulty,
                "recommended_level": self.identity.recommended_level,
            },
            "structure": {
                "levels": [lvl.to_dict() for lvl in self.levels],
                "entry_point": self.entry_point.to_dict(),
                "exit_points": [p.to_dict() for p in self.exit_points],
            },
            "history": {
                "origin": self.history.origin,
                "current_state": self.history.current_state,
                "legends": list(self.history.legends),
            },
            "world_integration": self.world_integration.to_dict(),
        }


__all__ = [
    "CELL_SIZE_FEET",
    "DungeonDetail",
    "DungeonLevel",
    "FogOfWarState",
    "History",
    "Identity",
    "LevelRef",
    "Stair",
    "WorldIntegration",
]
