"""Structural checks over a generated dungeon.

``analyze`` returns lists of offending ids per check so scripts and tests can
report exactly what broke. An empty list everywhere means the layout holds.
"""
from __future__ import annotations

from collections import deque
from typing import Dict, List

from .records import DungeonDetail, DungeonLevel


def _overlapping_rooms(level: DungeonLevel) -> List[str]:
    bad = []
    rooms = level.rooms
    for i in range(len(rooms)):
        for j in range(i + 1, len(rooms)):
            if rooms[i].intersects(rooms[j]):
                bad.append(f"{rooms[i].id}/{rooms[j].id}")
    return bad


def _out_of_bounds(level: DungeonLevel) -> List[str]:
    return [
        r.id
        for r in level.rooms
        if r.x < 0 or r.y < 0 or r.x + r.width > level.width or r.y + r.height > level.height
    ]


def _unreachable_rooms(level: DungeonLevel) -> List[str]:
    if not level.rooms:
        return []
    adj: Dict[str, List[str]] = {r.id: list(r.connections) for r in level.rooms}
    start = level.rooms[0].id
    seen = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        for nxt in adj.get(cur, []):
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return [r.id for r in level.rooms if r.id not in seen]


def _entry_exit_problems(level: DungeonLevel) -> List[str]:
    problems = []
    entries = [r for r in level.rooms if r.type == "entry"]
    exits = [r for r in level.rooms if r.type == "exit"]
    if len(entries) != 1:
        problems.append(f"entry_count={len(entries)}")
    if len(level.rooms) > 1 and (len(exits) != 1 or exits[0] in entries):
        problems.append(f"exit_count={len(exits)}")
    return problems


def analyze_level(level: DungeonLevel) -> Dict[str, List[str]]:
    return {
        "overlapping_rooms": _overlapping_rooms(level),
        "out_of_bounds_rooms": _out_of_bounds(level),
        "unreachable_rooms": _unreachable_rooms(level),
        "entry_exit": _entry_exit_problems(level),
    }


def analyze(detail: DungeonDetail) -> Dict[str, List[str]]:
    """Merge per-level findings; ids are prefixed with ``L<level_index>:``."""
    out: Dict[str, List[str]] = {}
    for level in detail.levels:
        for key, items in analyze_level(level).items():
            out.setdefault(key, []).extend(f"L{level.level_index}:{item}" for item in items)
    return out


__all__ = ["analyze", "analyze_level"]
