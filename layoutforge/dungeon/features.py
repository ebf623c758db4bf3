"""Room decoration: traps, treasure, encounters, altars and lair markings.

One primary roll per decorated room picks at most one feature from the
archetype's bias table; large rooms may additionally hide a chest.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .profiles import LayoutProfile
from .rooms import ENTRY, EXIT, Room

FEATURE_TYPES = ("fountain", "altar", "throne", "chest", "trap", "encounter", "treasure", "decoration")

FEATURE_WEIGHTS: Dict[str, Dict[str, float]] = {
    "religious": {"trap": 0.15, "treasure": 0.25, "encounter": 0.2, "altar": 0.35, "lair": 0.05},
    "military": {"trap": 0.3, "treasure": 0.1, "encounter": 0.25, "altar": 0.05, "lair": 0.3},
    "organic": {"trap": 0.1, "treasure": 0.05, "encounter": 0.35, "altar": 0.05, "lair": 0.45},
    "arcane": {"trap": 0.25, "treasure": 0.25, "encounter": 0.2, "altar": 0.2, "lair": 0.1},
    "wild": {"trap": 0.15, "treasure": 0.15, "encounter": 0.3, "altar": 0.05, "lair": 0.35},
}

DIFFICULTY_TRAP_SCALE = {"easy": 0.7, "medium": 1.0, "hard": 1.2, "deadly": 1.4}

LARGE_ROOM_AREA = 80
CHEST_CHANCE = 0.3


@dataclass
class RoomFeature:
    type: str
    description: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    icon: Optional[str] = None
    x: Optional[int] = None
    y: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type, "description": self.description, "metadata": dict(self.metadata)}
        if self.icon is not None:
            out["icon"] = self.icon
        if self.x is not None and self.y is not None:
            out["x"], out["y"] = self.x, self.y
        return out


def _primary_feature(roll: float, weights: Dict[str, float], trap_scale: float, bias: str, difficulty: str):
    threshold = weights["trap"] * trap_scale
    if roll < threshold:
        return RoomFeature("trap", "Hidden pressure plate trap", {"severity": difficulty}, "trap")
    threshold += weights["treasure"]
    if roll < threshold:
        return RoomFeature("treasure", "Stashed valuables", {"guarded": roll < 0.4}, "treasure")
    threshold += weights["encounter"]
    if roll < threshold:
        return RoomFeature("encounter", "Active inhabitants", {"intensity": difficulty}, "encounter")
    threshold += weights["altar"]
    if roll < threshold:
        return RoomFeature("altar", "Ritual focal point", {"blessed": bias == "religious"}, "altar")
    if roll < 1:
        return RoomFeature("decoration", "Nest or lair markings", {"feral": True}, "lair")
    return None


def add_room_features(
    rooms: List[Room],
    profile: LayoutProfile,
    difficulty: str,
    rng: Optional[random.Random] = None,
) -> int:
    """Append features to every non entry/exit room; returns the number added."""
    if rng is None:
        rng = random.Random()
    weights = FEATURE_WEIGHTS[profile.feature_bias]
    trap_scale = DIFFICULTY_TRAP_SCALE.get(difficulty, 1.0)
    added = 0
    for room in rooms:
        if room.type in (ENTRY, EXIT):
            continue
        feature = _primary_feature(rng.random(), weights, trap_scale, profile.feature_bias, difficulty)
        if feature is not None:
            room.features.append(feature)
            added += 1
        if room.area > LARGE_ROOM_AREA and rng.random() < CHEST_CHANCE:
            room.features.append(
                RoomFeature("chest", "Side chamber cache", {"locked": rng.random() < 0.5}, "treasure")
            )
            added += 1
    return added


__all__ = ["DIFFICULTY_TRAP_SCALE", "FEATURE_TYPES", "FEATURE_WEIGHTS", "RoomFeature", "add_room_features"]
