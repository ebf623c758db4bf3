"""
project: LayoutForge
module: server.py
License: MIT

Server bootstrap.

Builds the Flask app, routes stdlib logging (Flask and werkzeug request lines)
to a rotating file in the instance folder plus the console, and runs the
development server.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from layoutforge import create_app
from layoutforge.logging_utils import CURRENT_LEVEL

LOG_FILENAME = "layoutforge.log"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (integration / runtime only)
    """Start the HTTP server.

    When debug=True, Flask's debugger and reloader provide verbose tracebacks.
    """
    app = create_app()
    log_path = _configure_logging(app)
    try:
        print(f"[INFO] Starting LayoutForge server on {host}:{port} (log: {log_path})")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(app, max_bytes: int = 1_000_000, backups: int = 3) -> str:
    """Send stdlib logging to the console and ``<instance>/layoutforge.log``.

    The threshold follows LAYOUTFORGE_LOG_LEVEL so both logging paths agree.
    Existing root handlers are replaced, so calling this twice is harmless.
    """
    os.makedirs(app.instance_path, exist_ok=True)
    log_path = os.path.join(app.instance_path, LOG_FILENAME)
    # the event levels share the stdlib numbering (warn == WARNING)
    level = CURRENT_LEVEL
    fmt = logging.Formatter(LOG_FORMAT)

    handlers = [
        RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"),
        logging.StreamHandler(),
    ]
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(fmt)
        root.addHandler(h)
    root.setLevel(level)
    return log_path
