"""Structured event logging for the generator and API.

Events are printed as one line each, either ``key=value`` pairs or a compact
JSON object, so seed runs can be grepped or piped into ``jq`` without touching
stdlib logging handlers (those belong to the server, see ``server.py``).

    log = get_logger("layoutforge.dungeon").bind(seed=1234)
    log.debug(event="dungeon_level_generated", level_index=0, rooms=12)

A bound logger repeats its context on every line; per-call fields win over
bound ones. ``LAYOUTFORGE_LOG_LEVEL`` picks the threshold (debug, info, warn
or error) and ``LAYOUTFORGE_LOG_JSON=1`` switches to JSON lines. ``level``,
``ts`` and ``logger`` are reserved.
"""

from __future__ import annotations

import json
import os
import sys
import time
from typing import Any, Dict, Optional

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("LAYOUTFORGE_LOG_LEVEL", "info").lower(), LEVELS["info"])
JSON_MODE = os.getenv("LAYOUTFORGE_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def _kv(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value).replace(" ", "_")


def _format(level: str, **fields) -> str:
    ts = int(time.time())
    present = {k: v for k, v in fields.items() if v is not None}
    if JSON_MODE:
        return json.dumps({"level": level, "ts": ts, **present}, separators=(",", ":"), default=str)
    head = [f"level={level}", f"ts={ts}"]
    return " ".join(head + [f"{k}={_kv(v)}" for k, v in present.items()])


class _Logger:
    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        self.name = name
        self.context = dict(context or {})

    def bind(self, **fields) -> "_Logger":
        """Return a logger that adds ``fields`` to every event it emits."""
        return _Logger(self.name, {**self.context, **fields})

    def _emit(self, lvl: str, fields: Dict[str, Any]) -> None:
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        line = _format(lvl, **{"logger": self.name, **self.context, **fields})
        print(line, file=sys.stderr if lvl == "error" else sys.stdout)

    def debug(self, **fields):
        self._emit("debug", fields)

    def info(self, **fields):
        self._emit("info", fields)

    def warn(self, **fields):
        self._emit("warn", fields)

    def error(self, **fields):
        self._emit("error", fields)


_LOGGERS: Dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    return _LOGGERS.setdefault(name, _Logger(name))


log = get_logger("layoutforge")
