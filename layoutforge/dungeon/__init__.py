"""Public dungeon package interface.

Layout generation entry points plus the record types callers serialize.
"""

from .config import DungeonGenerationParams, coerce_seed  # noqa: F401
from .errors import DungeonGenerationError  # noqa: F401
from .pipeline import DungeonComposer, generate_dungeon, generate_single_level  # noqa: F401
from .profiles import (  # noqa: F401
    ARCHETYPES,
    LAYOUT_PROFILES,
    LayoutProfile,
    get_layout_profile,
    list_archetypes,
    resolve_dungeon_type,
)
from .records import DungeonDetail, DungeonLevel  # noqa: F401

__all__ = [
    "ARCHETYPES",
    "LAYOUT_PROFILES",
    "DungeonComposer",
    "DungeonDetail",
    "DungeonGenerationError",
    "DungeonGenerationParams",
    "DungeonLevel",
    "LayoutProfile",
    "coerce_seed",
    "generate_dungeon",
    "generate_single_level",
    "get_layout_profile",
    "list_archetypes",
    "resolve_dungeon_type",
]
