"""LayoutForge CLI entry point.

Provides subcommands for running the HTTP API server and generating a dungeon
layout straight to JSON. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from layoutforge import __version__

_color_init()
_COLOR_ENABLED = True

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    if not sys.stdout.isatty():  # pragma: no cover - environment dependent
        _COLOR_ENABLED = False
except (AttributeError, ValueError):  # pragma: no cover
    _COLOR_ENABLED = False


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    LayoutForge dungeon layout generator

    Run the HTTP API server or generate a layout directly to JSON. Configuration
    can be provided via CLI flags or environment variables. If both are present,
    CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                               Bind address for the web server (default: 0.0.0.0)
          PORT                               Port for the web server (default: 5000)
          DUNGEON_MAX_GRID                   Largest accepted grid width/height (default: 200)
          DUNGEON_ENABLE_GENERATION_METRICS  Include metrics in API responses (default: 1)
          LAYOUTFORGE_LOG_LEVEL              debug|info|warn|error (default: info)
          LAYOUTFORGE_LOG_JSON               Emit JSON log lines when set to 1

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Run the server on a custom port
          python run.py server --port 8080

          # Generate a two level crypt and print it
          python run.py generate --theme "forgotten crypt" --levels 2 --seed 42

          # Write a layout to a file
          python run.py generate --width 80 --height 60 --output dungeon.json --indent 2

          # Load variables from .env then run the server
          python run.py --env-file .env server
        """
    )

    parser = argparse.ArgumentParser(
        prog="LayoutForge",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"LayoutForge {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask dungeon generation API",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a dungeon layout as JSON",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a dungeon layout and write it to stdout or a file.",
    )
    gen_parser.add_argument("--width", type=int, default=50, help="Grid width in cells (default: 50)")
    gen_parser.add_argument("--height", type=int, default=50, help="Grid height in cells (default: 50)")
    gen_parser.add_argument("--levels", type=int, default=1, help="Number of levels, 1-5 (default: 1)")
    gen_parser.add_argument("--theme", default=None, help="Free-text theme, e.g. 'flooded cave'")
    gen_parser.add_argument(
        "--difficulty",
        default="medium",
        choices=("easy", "medium", "hard", "deadly"),
        help="Difficulty tier (default: medium)",
    )
    gen_parser.add_argument("--seed", default=None, help="Integer or string seed (default: random)")
    gen_parser.add_argument("--min-room", dest="min_room", type=int, default=None, help="Minimum room side")
    gen_parser.add_argument("--max-room", dest="max_room", type=int, default=None, help="Maximum room side")
    gen_parser.add_argument("--output", "-o", default=None, help="Write JSON to this path instead of stdout")
    gen_parser.add_argument("--indent", type=int, default=None, help="JSON indent (default: compact)")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _cli_seed(raw):
    """Signed ASCII integers pass through as ints; anything else is hashed later."""
    if raw is None:
        return None
    s = raw.strip()
    digits = s[1:] if s.startswith("-") else s
    if digits.isascii() and digits.isdigit():
        return int(s)
    return raw


def _generate(args) -> int:
    from layoutforge.dungeon import DungeonComposer, DungeonGenerationError, DungeonGenerationParams
    from layoutforge.validation import ValidationError, generate_params_schema, require

    payload = {
        "grid_width": args.width,
        "grid_height": args.height,
        "num_levels": args.levels,
        "theme": args.theme,
        "difficulty": args.difficulty,
        "min_room_size": args.min_room,
        "max_room_size": args.max_room,
    }
    err_prefix = f"{Fore.RED}[ERROR]{Style.RESET_ALL}" if _COLOR_ENABLED else "[ERROR]"
    try:
        clean = require(payload, generate_params_schema(int(os.getenv("DUNGEON_MAX_GRID", "200"))))
    except ValidationError as e:
        print(f"{err_prefix} {e.field}: {e.message}", file=sys.stderr)
        return 2

    composer = DungeonComposer(DungeonGenerationParams.from_dict(clean), seed=_cli_seed(args.seed))
    try:
        detail = composer.run()
    except DungeonGenerationError as e:
        print(f"{err_prefix} {e.message}", file=sys.stderr)
        return 1

    text = json.dumps({"seed": composer.seed, "dungeon": detail.to_dict()}, indent=args.indent)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        rooms = sum(len(lvl.rooms) for lvl in detail.levels)
        print(
            f"[INFO] Wrote {detail.identity.name!r} ({len(detail.levels)} levels, {rooms} rooms, "
            f"seed {composer.seed}) to {args.output}",
            file=sys.stderr,
        )
    else:
        print(text)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if args and getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _generate(args)

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))

    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from layoutforge.logging_utils import log
    from layoutforge.server import start_server

    title = (
        f"{Fore.CYAN}{Style.BRIGHT}LayoutForge Server Bootup{Style.RESET_ALL}"
        if _COLOR_ENABLED
        else "LayoutForge Server Bootup"
    )

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Mode:'):12} {value(mode.upper())}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Max grid:'):12} {value(os.getenv('DUNGEON_MAX_GRID', '200'))}",
        f"  {label('Version:'):12} {value(__version__)}",
        divider,
        "",
    ]
    print("\n".join(lines))

    info_prefix = f"{Fore.CYAN}[INFO]{Style.RESET_ALL}" if _COLOR_ENABLED else "[INFO]"
    print(f"{info_prefix} Listening for connections... Press Ctrl+C to stop.")
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
