"""
project: LayoutForge
module: dungeon_api.py
License: MIT

Dungeon layout generation API routes.

Every request builds its own composer (and therefore its own random
generator), so concurrent requests never share generation state.
"""

from flask import Blueprint, current_app, jsonify, request

from layoutforge.dungeon import (
    DungeonComposer,
    DungeonGenerationError,
    DungeonGenerationParams,
    get_layout_profile,
    list_archetypes,
)
from layoutforge.dungeon.profiles import corridor_style_for, texture_set_for
from layoutforge.logging_utils import get_logger
from layoutforge.validation import generate_params_schema, validate

bp_dungeon = Blueprint("dungeon", __name__)
log = get_logger("layoutforge.api")


def _split_payload(data):
    """Return (params, seed) from either ``{"params": {...}, "seed": x}`` or a flat body."""
    if "params" in data:
        params = data.get("params") or {}
    else:
        params = {k: v for k, v in data.items() if k != "seed"}
    seed = data.get("seed")
    if seed is None and isinstance(params, dict):
        seed = params.get("seed")
    return params, seed


@bp_dungeon.route("/api/dungeon/generate", methods=["POST"])
def generate_dungeon_route():
    """Generate a dungeon layout.

    Body JSON: { "params": { grid_width, grid_height, num_levels, ... }, "seed": <int|str>? }
    Response: { "seed": <int>, "dungeon": <DungeonDetail>, "metrics": {...}? }
    """
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({"field": "__root__", "error": "payload must be an object", "code": "type"}), 400

    raw_params, raw_seed = _split_payload(data)
    ok, clean = validate(raw_params, generate_params_schema(current_app.config["DUNGEON_MAX_GRID"]))
    if not ok:
        return jsonify(clean), 400
    if raw_seed is not None and (isinstance(raw_seed, bool) or not isinstance(raw_seed, (int, str))):
        return jsonify({"field": "seed", "error": "expected int or str", "code": "type"}), 400

    enable_metrics = bool(current_app.config.get("DUNGEON_ENABLE_GENERATION_METRICS"))
    composer = DungeonComposer(
        DungeonGenerationParams.from_dict(clean),
        seed=raw_seed,
        enable_metrics=enable_metrics,
    )
    req_log = log.bind(seed=composer.seed)
    try:
        detail = composer.run()
    except DungeonGenerationError as e:
        req_log.warn(event="dungeon_generate_failed", error=e.message)
        return jsonify(e.to_dict()), 422

    body = {"seed": composer.seed, "dungeon": detail.to_dict()}
    if enable_metrics:
        body["metrics"] = composer.metrics
    req_log.info(
        event="dungeon_generate",
        archetype=detail.identity.type,
        levels=len(detail.levels),
        rooms=sum(len(lvl.rooms) for lvl in detail.levels),
    )
    return jsonify(body)


@bp_dungeon.route("/api/dungeon/archetypes")
def archetypes():
    return jsonify({"archetypes": list_archetypes()})


@bp_dungeon.route("/api/dungeon/archetypes/resolve")
def resolve_archetype():
    """Resolve free-text ``?theme=`` to its archetype and layout profile."""
    theme = request.args.get("theme", "")
    archetype, profile = get_layout_profile(theme)
    return jsonify(
        {
            "theme": theme,
            "type": archetype,
            "profile": profile.to_dict(),
            "corridor_style": corridor_style_for(profile),
            "textures": texture_set_for(archetype),
        }
    )
