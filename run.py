"""BYOW World Server CLI entry point.

Provides subcommands for running the HTTP server and for generating worlds
and path queries straight from the terminal. Accepts configuration via flags
and environment variables, with optional .env loading.

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

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    BYOW World Server

    Run the HTTP world server or generate worlds and path queries from the
    terminal. Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST            Bind address for the web server (default: 0.0.0.0)
          PORT            Port for the web server (default: 8082)
          DATABASE_URL    SQLAlchemy database URI (default: sqlite:///instance/byow.db)
          BYOW_MAX_WIDTH  Largest accepted world width (default: 100)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print an ASCII render of a 40x30 world
          python run.py generate --seed 42 --width 40 --height 30

          # Dump the JSON snapshot instead
          python run.py generate --seed 42 --json

          # Shortest room path between rooms 0 and 5
          python run.py path --seed 42 0 5
        """
    )

    parser = argparse.ArgumentParser(
        prog="byow",
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
        version=f"BYOW World Server {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP world server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask world server",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 8082)")
    server_parser.add_argument(
        "--db",
        dest="db_uri",
        default=None,
        help="Database URI (default: env DATABASE_URL or sqlite:///instance/byow.db)",
    )
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    def _world_args(p):
        p.add_argument("--seed", type=int, default=0, help="World seed (default: 0)")
        p.add_argument("--width", type=int, default=80, help="World width (default: 80)")
        p.add_argument("--height", type=int, default=50, help="World height (default: 50)")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a world and print it",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    _world_args(gen_parser)
    gen_parser.add_argument("--json", action="store_true", help="Print the JSON snapshot instead of ASCII")
    gen_parser.set_defaults(command="generate")

    path_parser = subparsers.add_parser(
        "path",
        help="Print the shortest room path between two rooms",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    _world_args(path_parser)
    path_parser.add_argument("start", type=int, help="Start room id")
    path_parser.add_argument("end", type=int, help="End room id")
    path_parser.set_defaults(command="path")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def label(text: str) -> str:
    return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def value(val) -> str:
    return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)


def error(text: str) -> str:
    return f"{Fore.RED}[ERROR]{Style.RESET_ALL} {text}" if _COLOR_ENABLED else f"[ERROR] {text}"


def _cmd_generate(args) -> int:
    from byow.world import WorldConfig, WorldError, dumps_snapshot, generate, is_world_connected, render_ascii

    config = WorldConfig.from_env()
    try:
        world = generate(args.seed, args.width, args.height, config)
        if args.json:
            print(dumps_snapshot(world))
            return 0
    except WorldError as exc:
        print(error(exc.message))
        return 1
    print(render_ascii(world))
    print(
        f"{label('Seed:')} {value(world.seed)}  {label('Size:')} {value(f'{world.width}x{world.height}')}  "
        f"{label('Rooms:')} {value(world.room_count)}  {label('Corridors:')} {value(world.corridor_count)}  "
        f"{label('Connected:')} {value(is_world_connected(world))}"
    )
    return 0


def _cmd_path(args) -> int:
    from byow.world import WorldConfig, WorldError, find_shortest_path, generate

    config = WorldConfig.from_env()
    try:
        world = generate(args.seed, args.width, args.height, config)
        path = find_shortest_path(world, args.start, args.end, config.max_path_length)
    except WorldError as exc:
        print(error(exc.message))
        return 1
    print(json.dumps({"path": path, "length": len(path)}))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _cmd_generate(args)
    if mode == "path":
        return _cmd_path(args)

    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "8082"))
    env_db = os.getenv("DATABASE_URL")

    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    db_uri_cli = getattr(args, "db_uri", None)
    debug = bool(getattr(args, "debug", False))

    # Make DATABASE_URL available to the Flask app BEFORE importing it
    if db_uri_cli:
        os.environ["DATABASE_URL"] = db_uri_cli
    db_banner = db_uri_cli or env_db or "auto (instance/byow.db)"

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from byow.server import start_server

    title = f"{Fore.CYAN}{Style.BRIGHT}BYOW World Server{Style.RESET_ALL}" if _COLOR_ENABLED else "BYOW World Server"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Version:'):12} {value(__version__)}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Database:'):12} {value(db_banner)}",
        divider,
        "",
    ]
    print("\n".join(lines))

    start_server(host=host, port=port, debug=debug)
    return 0


def cli():
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
