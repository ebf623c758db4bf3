"""
project: LayoutForge
module: __init__.py
License: MIT

Flask application factory.

Configuration is sourced from environment variables (optionally via a local
`.env`) with reasonable defaults for development. A local `instance/`
directory holds runtime data such as the rotating server log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

__version__ = "0.3.0"

# Load .env if present so `SECRET_KEY`, `DUNGEON_MAX_GRID`, etc. can be supplied
# without exporting shell variables during development.
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def create_app(overrides=None):
    """Build a Flask app with the dungeon blueprint registered.

    ``overrides`` (a mapping) is applied to ``app.config`` last, after the
    environment defaults, so tests can flip flags without touching os.environ.
    """
    app = Flask(__name__, instance_relative_config=True)

    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only installs still serve requests; only the file log is lost
        pass

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        # Dungeon generation feature flags / limits
        DUNGEON_ENABLE_GENERATION_METRICS=_env_flag("DUNGEON_ENABLE_GENERATION_METRICS", "1"),
        DUNGEON_MAX_GRID=int(os.getenv("DUNGEON_MAX_GRID", "200")),
    )
    if overrides:
        app.config.update(overrides)

    from layoutforge.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal server error", "error_id": error_id}), 500

    return app
