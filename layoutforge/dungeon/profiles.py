"""Theme → archetype resolution and per-archetype layout tuning.

The resolver is a plain ordered substring scan over the lower-cased theme. The
order matters ("cave den" is a cave, not a lair) so keep new keywords appended
to the matching tuple rather than re-ordering ``_THEME_KEYWORDS``.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Tuple

DUNGEON = "dungeon"
CAVE = "cave"
RUIN = "ruin"
FORTRESS = "fortress"
TOWER = "tower"
TEMPLE = "temple"
LAIR = "lair"

ARCHETYPES = (DUNGEON, CAVE, RUIN, FORTRESS, TOWER, TEMPLE, LAIR)


@dataclass(frozen=True)
class LayoutProfile:
    min_room_size: int
    max_room_size: int
    min_split_size: int
    room_padding: int
    room_density: float
    split_ratio: float
    extra_connections: float
    trap_weight: float
    treasure_weight: float
    feature_bias: str
    default_tile_span: int

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


LAYOUT_PROFILES: Dict[str, LayoutProfile] = {
    DUNGEON: LayoutProfile(2, 10, 6, 1, 0.3, 0.5, 0.25, 0.2, 0.15, "arcane", 2),
    CAVE: LayoutProfile(2, 8, 5, 2, 0.4, 0.45, 0.35, 0.1, 0.05, "organic", 2),
    RUIN: LayoutProfile(3, 9, 6, 1, 0.32, 0.48, 0.2, 0.25, 0.2, "arcane", 2),
    FORTRESS: LayoutProfile(4, 11, 7, 1, 0.28, 0.52, 0.18, 0.35, 0.1, "military", 2),
    TOWER: LayoutProfile(3, 8, 5, 1, 0.25, 0.55, 0.2, 0.2, 0.25, "arcane", 2),
    TEMPLE: LayoutProfile(4, 12, 7, 1, 0.27, 0.5, 0.22, 0.15, 0.3, "religious", 2),
    LAIR: LayoutProfile(3, 9, 5, 2, 0.35, 0.47, 0.3, 0.18, 0.22, "wild", 2),
}

_THEME_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (CAVE, ("cave", "grotto")),
    (RUIN, ("ruin", "crypt")),
    (FORTRESS, ("fort", "keep", "citadel")),
    (TOWER, ("tower", "spire")),
    (TEMPLE, ("temple", "cathedral")),
    (LAIR, ("lair", "den")),
)


def resolve_dungeon_type(theme: Optional[str]) -> str:
    """Map free text to an archetype tag; anything unrecognised is a plain dungeon."""
    if not theme:
        return DUNGEON
    norm = theme.lower()
    for archetype, keywords in _THEME_KEYWORDS:
        if any(k in norm for k in keywords):
            return archetype
    return DUNGEON


def get_layout_profile(theme: Optional[str]) -> Tuple[str, LayoutProfile]:
    archetype = resolve_dungeon_type(theme)
    return archetype, LAYOUT_PROFILES[archetype]


def corridor_style_for(profile: LayoutProfile) -> str:
    return "organic" if profile.feature_bias in ("organic", "wild") else "straight"


# Floor / wall texture tags handed to renderers. Purely descriptive.
TEXTURE_SETS: Dict[str, Dict[str, str]] = {
    DUNGEON: {"floor": "stone", "wall": "stone"},
    CAVE: {"floor": "cave", "wall": "cave"},
    RUIN: {"floor": "dirt", "wall": "rough"},
    FORTRESS: {"floor": "brick", "wall": "brick"},
    TOWER: {"floor": "wood", "wall": "smooth"},
    TEMPLE: {"floor": "temple", "wall": "smooth"},
    LAIR: {"floor": "dirt", "wall": "cave"},
}


def texture_set_for(archetype: str) -> Dict[str, str]:
    return dict(TEXTURE_SETS.get(archetype, TEXTURE_SETS[DUNGEON]))


@dataclass(frozen=True)
class ArchetypeDefinition:
    name: str
    description: str
    generation_notes: str
    typical_features: Tuple[str, ...]
    room_density: str
    corridor_density: str

    def to_dict(self) -> Dict[str, object]:
        out = asdict(self)
        out["typical_features"] = list(self.typical_features)
        return out


ARCHETYPE_DEFINITIONS: Dict[str, ArchetypeDefinition] = {
    DUNGEON: ArchetypeDefinition(
        "Dungeon",
        "Classic underground prison or complex with stone walls and corridors.",
        "Structured partitioning with rectangular rooms and straight corridors.",
        ("Cells", "Guard rooms", "Storage areas", "Torture chambers", "Barracks"),
        "high",
        "medium",
    ),
    CAVE: ArchetypeDefinition(
        "Cave",
        "Natural cavern system shaped by erosion or geological processes.",
        "Denser leaf usage with winding corridors between chambers.",
        ("Caverns", "Tunnels", "Stalactites", "Water pools", "Natural chambers"),
        "low",
        "low",
    ),
    RUIN: ArchetypeDefinition(
        "Ruin",
        "Abandoned or partially collapsed structure strewn with debris.",
        "Structured layout with moderate density and few loops.",
        ("Collapsed rooms", "Debris", "Broken walls", "Exposed foundations", "Overgrown areas"),
        "medium",
        "medium",
    ),
    FORTRESS: ArchetypeDefinition(
        "Fortress",
        "Military stronghold with thick walls and strategic chokepoints.",
        "Large minimum rooms, trap-heavy, few extra corridors.",
        ("Barracks", "Armories", "Guard towers", "Defensive positions", "Command centers"),
        "high",
        "high",
    ),
    TOWER: ArchetypeDefinition(
        "Tower",
        "Vertical structure of compact floors joined by stairs.",
        "Smaller floor plans, lower density per level.",
        ("Spiral stairs", "Circular rooms", "Vertical shafts", "Balconies", "Lookout points"),
        "medium",
        "low",
    ),
    TEMPLE: ArchetypeDefinition(
        "Temple",
        "Sacred structure with grand halls and ceremonial spaces.",
        "Large rooms biased toward altars and treasure.",
        ("Altars", "Shrines", "Ceremonial halls", "Meditation chambers", "Relic storage"),
        "medium",
        "medium",
    ),
    LAIR: ArchetypeDefinition(
        "Lair",
        "Den of a creature or band of monsters, rough and organic.",
        "Wide padding, organic corridors, encounter and lair markings.",
        ("Nests", "Bone piles", "Hoards", "Feeding grounds", "Escape tunnels"),
        "medium",
        "high",
    ),
}


def list_archetypes() -> List[Dict[str, object]]:
    return [
        {
            "type": key,
            "definition": ARCHETYPE_DEFINITIONS[key].to_dict(),
            "profile": LAYOUT_PROFILES[key].to_dict(),
            "textures": texture_set_for(key),
        }
        for key in ARCHETYPES
    ]


__all__ = [
    "ARCHETYPES",
    "ARCHETYPE_DEFINITIONS",
    "LAYOUT_PROFILES",
    "LayoutProfile",
    "corridor_style_for",
    "get_layout_profile",
    "list_archetypes",
    "resolve_dungeon_type",
    "texture_set_for",
]
