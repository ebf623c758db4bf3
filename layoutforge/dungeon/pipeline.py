"""Pipeline orchestration for dungeon generation.

``DungeonComposer`` runs the stage modules in order for every level:

    profile → BSP partition → room placement → corridors → doors → features

Each level is generated from scratch; levels never share rooms or corridors.
All randomness flows from one ``random.Random`` owned by the composer, so a
fixed seed reproduces the exact same layout and concurrent calls never share
generator state.
"""
from __future__ import annotations

import math
import random
import time
from typing import Any, Dict, List, Optional, Tuple, Union

from ..logging_utils import get_logger
from .bsp import BSPOptions, create_bsp_tree, get_leaf_nodes
from .config import DungeonGenerationParams, coerce_seed
from .corridors import build_corridors
from .doors import place_doors
from .errors import DungeonGenerationError
from .features import add_room_features
from .metrics import init_metrics
from .profiles import LayoutProfile, corridor_style_for, get_layout_profile, texture_set_for
from .records import (
    DungeonDetail,
    DungeonLevel,
    FogOfWarState,
    History,
    Identity,
    LevelRef,
    WorldIntegration,
)
from .rooms import ENTRY, EXIT, place_rooms

log = get_logger("layoutforge.dungeon")

RECOMMENDED_LEVEL = {"easy": 1, "medium": 5, "hard": 10, "deadly": 15}


def level_name(level_index: int, num_levels: int) -> str:
    if level_index == 0:
        return "Upper Level"
    if level_index == num_levels - 1:
        return "Deep Level"
    return f"Level {level_index + 1}"


def _resolve_sizes(params: DungeonGenerationParams, profile: LayoutProfile) -> Tuple[int, int, int, int]:
    min_room = max(profile.min_room_size, params.min_room_size)
    max_room = max(min_room, min(profile.max_room_size, params.max_room_size))
    tile_min = params.min_tile_span if params.min_tile_span is not None else profile.default_tile_span
    tile_min = max(1, min(tile_min, max_room))
    tile_max = params.max_tile_span if params.max_tile_span is not None else tile_min
    tile_max = max(tile_min, min(tile_max, max_room))
    return min_room, max_room, tile_min, tile_max


def target_room_count(leaf_count: int, density: float) -> int:
    base = max(1, math.floor(leaf_count * density))
    floor_count = max(1, math.floor(density * 5))
    return min(max(floor_count, base), leaf_count)


class DungeonComposer:
    def __init__(
        self,
        params: DungeonGenerationParams,
        *,
        seed: Union[int, str, None] = None,
        rng: Optional[random.Random] = None,
        enable_metrics: bool = True,
    ):
        self.params = params.normalized()
        if rng is not None:
            self.seed = None
            self.rng = rng
        else:
            self.seed = coerce_seed(seed if seed is not None else self.params.seed)
            self.rng = random.Random(self.seed)
        self.log = log.bind(seed=self.seed)
        self.enable_metrics = enable_metrics
        self.metrics: Dict[str, Any] = init_metrics() if enable_metrics else {}
        self._phase_times: Dict[str, int] = {}

    def _phase(self, label, fn, *a, **k):
        if not self.enable_metrics:
            return fn(*a, **k)
        ps = time.perf_counter()
        r = fn(*a, **k)
        self._phase_times[label] = self._phase_times.get(label, 0) + int((time.perf_counter() - ps) * 1000)
        return r

    def _count(self, key: str, n: int) -> None:
        if self.enable_metrics:
            self.metrics[key] += n

    def generate_level(self, level_index: int = 0, num_levels: int = 1) -> DungeonLevel:
        params = self.params
        rng = self.rng
        width, height = params.grid_width, params.grid_height
        archetype, profile = get_layout_profile(params.theme)
        min_room, max_room, tile_min, tile_max = _resolve_sizes(params, profile)
        density = params.room_density if params.room_density is not None else profile.room_density
        extra = (
            params.extra_connections_ratio if params.extra_connections_ratio is not None else profile.extra_connections
        )

        opts = BSPOptions(
            min_room_size=min_room,
            max_room_size=max_room,
            split_ratio=profile.split_ratio,
            min_split_size=max(profile.min_split_size, min_room * 2, tile_min * 2),
        )
        tree = self._phase("partition", create_bsp_tree, width, height, opts, rng)
        leaves = get_leaf_nodes(tree)
        selected = leaves[: target_room_count(len(leaves), density)]

        rooms = self._phase(
            "place_rooms",
            place_rooms,
            selected,
            min_room,
            max_room,
            profile.room_padding,
            tile_min,
            tile_max,
            rng,
        )
        self._count("leaves", len(leaves))
        self._count("leaves_selected", len(selected))
        self._count("rooms_skipped", len(selected) - len(rooms))
        if not rooms:
            self.log.warn(
                event="dungeon_level_failed",
                level_index=level_index,
                grid=f"{width}x{height}",
                min_room=min_room,
                leaves=len(leaves),
            )
            raise DungeonGenerationError(
                f"Failed to generate any rooms for level {level_index}: "
                f"{width}x{height} grid is too small for rooms of at least {min_room} cells",
                level_index=level_index,
                grid_size=(width, height),
                min_room_size=min_room,
            )

        rooms[0].type = ENTRY
        rooms[0].description = "The entrance to the dungeon"
        if len(rooms) > 1:
            rooms[-1].type = EXIT
            rooms[-1].description = "An exit from the dungeon"
        textures = texture_set_for(archetype)
        for room in rooms:
            room.floor_texture = textures["floor"]
            room.wall_texture = textures["wall"]

        corridors, connections = self._phase(
            "corridors", build_corridors, rooms, extra, corridor_style_for(profile), rng, (width, height)
        )
        doors, door_counts = self._phase("doors", place_doors, rooms, corridors, params.secret_door_ratio, rng)
        added = self._phase("features", add_room_features, rooms, profile, params.difficulty, rng)

        self._count("rooms", len(rooms))
        self._count("corridors", len(corridors))
        self._count("connections", len(connections))
        self._count("extra_connections", max(0, len(connections) - (len(rooms) - 1)))
        self._count("doors", len(doors))
        self._count("secret_doors", door_counts.get("secret", 0))
        self._count("features", added)
        self.log.debug(
            event="dungeon_level_generated",
            level_index=level_index,
            archetype=archetype,
            leaves=len(leaves),
            rooms=len(rooms),
            corridors=len(corridors),
            doors=len(doors),
        )

        fog = FogOfWarState(revealed_rooms=[rooms[0].id] if level_index == 0 else [])
        return DungeonLevel(
            level_index=level_index,
            name=level_name(level_index, num_levels),
            width=width,
            height=height,
            rooms=rooms,
            corridors=corridors,
            stairs=[],
            tile_type=params.tile_type,
            texture_set=archetype,
            fog_of_war=fog,
        )

    def run(self) -> DungeonDetail:
        start = time.perf_counter()
        params = self.params
        theme = params.theme or "dungeon"
        archetype, _profile = get_layout_profile(theme)

        levels: List[DungeonLevel] = []
        for i in range(params.num_levels):
            levels.append(self.generate_level(i, params.num_levels))

        entry_level = levels[0]
        exit_level = levels[-1]
        detail = DungeonDetail(
            identity=Identity(
                name=f"{theme} {self.rng.randrange(1000)}",
                type=archetype,
                theme=theme,
                difficulty=params.difficulty,
                recommended_level=RECOMMENDED_LEVEL.get(params.difficulty, 5),
            ),
            levels=levels,
            entry_point=LevelRef(
                entry_level.level_index, entry_level.entry_room_index(), "The main entrance to the dungeon"
            ),
            exit_points=[LevelRef(exit_level.level_index, exit_level.exit_room_index(), "An exit from the dungeon")],
            history=History(),
            world_integration=WorldIntegration(parent_location_id=params.world_id),
        )
        if self.enable_metrics:
            self.metrics["levels"] = len(levels)
            self.metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
            self.metrics["phase_ms"] = dict(self._phase_times)
        self.log.debug(event="dungeon_generated", archetype=archetype, levels=len(levels))
        return detail


def generate_single_level(
    params: DungeonGenerationParams,
    *,
    seed: Union[int, str, None] = None,
    rng: Optional[random.Random] = None,
) -> DungeonLevel:
    return DungeonComposer(params, seed=seed, rng=rng, enable_metrics=False).generate_level(0, 1)


def generate_dungeon(
    params: DungeonGenerationParams,
    *,
    seed: Union[int, str, None] = None,
    rng: Optional[random.Random] = None,
) -> DungeonDetail:
    """One-shot generation; raises ``DungeonGenerationError`` when a level gets no rooms."""
    return DungeonComposer(params, seed=seed, rng=rng, enable_metrics=False).run()


__all__ = ["DungeonComposer", "generate_dungeon", "generate_single_level", "level_name", "target_room_count"]
