"""Undercroft dungeon generator CLI entry point.

Provides subcommands for generating a whole multi-floor dungeon and for
building a single room with one builder. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from undercroft.dungeon import (
    BUILDER_NAMES,
    Direction,
    DungeonAssembler,
    DungeonLayoutConfig,
    DungeonRandom,
    GenerationConfig,
    RoomRequirement,
    UngeneratableRequirementError,
    Dungeon,
    make_builder,
    render_room,
)
from undercroft.logging_utils import configure_from_env, log

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def _range_arg(values) -> tuple:
    lo, hi = int(values[0]), int(values[1])
    return (lo, hi)


def _first_positional(argv: list[str]):
    """First argument that is neither a top-level option nor its value."""
    skip_value = False
    for arg in argv:
        if skip_value:
            skip_value = False
            continue
        if arg == "--env-file":
            skip_value = True
            continue
        if arg.startswith("-"):
            continue
        return arg
    return None


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Undercroft Dungeon Generator

    Generate a seeded multi-floor dungeon and print it as ASCII, or build a
    single room with one of the room builders. Configuration can be provided
    via CLI flags or environment variables. If both are present, CLI flags
    take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          DUNGEON_SEED                 Seed used when --seed is not given
          DUNGEON_FLOOR_SIZE           Rooms per floor, lo..hi (default: 3..5)
          DUNGEON_FLOORS_ABOVE         Floors above ground, lo..hi (default: 0..2)
          DUNGEON_FLOORS_BELOW         Floors below ground, lo..hi (default: 0..2)
          DUNGEON_ROOM_BUILDERS        Comma separated builder pool
          DUNGEON_MAX_ROOM_ATTEMPTS    Give up on a room after this many tries
          UNDERCROFT_LOG_LEVEL         debug | info | warn | error (default: info)
          UNDERCROFT_LOG_JSON          1 for one JSON object per log line

        Examples:
          # Generate a dungeon with a fixed seed
          python run.py generate --seed 1

          # Only print the floor layouts, three to six rooms per floor
          python run.py generate --seed 7 --floor-size 3 7 --layout-only

          # Build a single grid room with exits on top and left
          python run.py room --builder grid --exits top,left

          # Load variables from .env then generate
          python run.py --env-file .env generate
        """
    )

    parser = argparse.ArgumentParser(
        prog="undercroft",
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
        version=f"Undercroft Dungeon Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate and print a whole dungeon",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Lay out floors, build every room and print the result",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed (default: env DUNGEON_SEED or random)")
    gen_parser.add_argument(
        "--floor-size", nargs=2, metavar=("LO", "HI"), default=None, help="Rooms per floor, HI exclusive"
    )
    gen_parser.add_argument(
        "--floors-above", nargs=2, metavar=("LO", "HI"), default=None, help="Floors above ground, HI exclusive"
    )
    gen_parser.add_argument(
        "--floors-below", nargs=2, metavar=("LO", "HI"), default=None, help="Floors below ground, HI exclusive"
    )
    gen_parser.add_argument(
        "--builders",
        default=None,
        help=f"Comma separated builder pool ({', '.join(BUILDER_NAMES)})",
    )
    gen_parser.add_argument("--max-attempts", type=int, default=None, help="Per-room retry cap (default: unbounded)")
    gen_parser.add_argument("--layout-only", action="store_true", help="Print floor layouts without building rooms")
    gen_parser.add_argument("--no-color", action="store_true", help="Disable colored banner output")
    gen_parser.add_argument("--log-file", default=None, help="Also write log lines to a rotating file")
    gen_parser.set_defaults(command="generate")

    # room subcommand
    room_parser = subparsers.add_parser(
        "room",
        help="Build and print a single room",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run one room builder against an exit requirement",
    )
    room_parser.add_argument("--builder", default="automata", choices=BUILDER_NAMES, help="Room builder to use")
    room_parser.add_argument("--exits", default="", help="Comma separated exits: top,bottom,left,right")
    room_parser.add_argument("--seed", type=int, default=1, help="Seed (default: 1)")
    room_parser.add_argument("--stairs-up", action="store_true", help="Place stairs up")
    room_parser.add_argument("--stairs-down", action="store_true", help="Place stairs down")
    room_parser.add_argument("--max-attempts", type=int, default=None, help="Retry cap (default: unbounded)")
    room_parser.add_argument("--no-color", action="store_true", help="Disable colored banner output")
    room_parser.set_defaults(command="room")

    # If no subcommand provided, default to generate
    if _first_positional(argv) not in ("generate", "room"):
        argv = list(argv) + ["generate"]

    args = parser.parse_args(argv)
    return args


def _configure_file_logging(path: str) -> None:
    """Mirror structured log lines into a rotating file."""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    logger = logging.getLogger("undercroft")
    logger.setLevel(logging.DEBUG)
    # Avoid duplicate handlers if reconfigured
    for h in list(logger.handlers):
        logger.removeHandler(h)
    file_handler = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(file_handler)


def _banner(title: str, rows: list, colored: bool) -> str:
    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if colored else text

    def value(val) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if colored else str(val)

    heading = f"{Fore.CYAN}{Style.BRIGHT}{title}{Style.RESET_ALL}" if colored else title
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if colored else "=" * 40
    lines = [divider, f"  {heading}", divider]
    for key, val in rows:
        lines.append(f"  {label(key + ':'):14} {value(val)}")
    lines.append(divider)
    return "\n".join(lines)


def _error(message: str, colored: bool) -> None:
    prefix = f"{Fore.RED}[ERROR]{Style.RESET_ALL}" if colored else "[ERROR]"
    print(f"{prefix} {message}", file=sys.stderr)


def _generation_config(args) -> GenerationConfig:
    overrides = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.builders:
        overrides["builders"] = tuple(n.strip() for n in args.builders.split(",") if n.strip())
    if args.max_attempts is not None:
        overrides["max_room_attempts"] = args.max_attempts
    config = GenerationConfig.from_env(**overrides)
    ranges = {}
    for attr in ("floor_size", "floors_above", "floors_below"):
        raw = getattr(args, attr)
        if raw is not None:
            ranges[attr] = _range_arg(raw)
    if ranges:
        current = {
            "floor_size": config.layout.floor_size,
            "floors_above": config.layout.floors_above,
            "floors_below": config.layout.floors_below,
        }
        current.update(ranges)
        config.layout = DungeonLayoutConfig(**current)
    return config


def _run_generate(args, colored: bool) -> int:
    if args.log_file:
        _configure_file_logging(args.log_file)
    config = _generation_config(args)
    dungeon = Dungeon(config=config, layout_only=args.layout_only)
    layout = dungeon.layout
    print(
        _banner(
            "Undercroft Dungeon",
            [
                ("Seed", dungeon.seed),
                ("Floors", len(layout.floors)),
                ("Rooms", len(layout.coords)),
                ("Stair links", len(layout.stairs)),
                ("First room", _coord(layout.first_room)),
                ("Last room", _coord(layout.last_room)),
            ],
            colored,
        )
    )
    print(dungeon.render())
    return 0


def _run_room(args, colored: bool) -> int:
    exits = tuple(Direction.parse(name) for name in args.exits.split(",") if name.strip())
    requirement = RoomRequirement(
        floor=0, row=0, col=0, exits=exits, stair_up=args.stairs_up, stair_down=args.stairs_down
    )
    builder = make_builder(args.builder, args.max_attempts)
    arranged = DungeonAssembler([builder]).assemble_room(requirement, DungeonRandom(args.seed))
    room = arranged.room
    print(
        _banner(
            "Undercroft Room",
            [
                ("Builder", args.builder),
                ("Seed", args.seed),
                ("Size", f"{room.rows}x{room.cols}"),
                ("Exits", ",".join(str(d) for d in exits) or "-"),
            ],
            colored,
        )
    )
    print(render_room(room))
    return 0


def _coord(c) -> str:
    return f"floor {c.floor} row {c.row} col {c.col}"


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # Load .env if requested, else the default .env if present (no error if missing)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()
    # log settings may come from the .env file just loaded
    configure_from_env()

    colored = _COLOR_ENABLED and not getattr(args, "no_color", False)
    mode = (getattr(args, "command", None) or "generate").lower()
    log.debug(event="startup", mode=mode, version=__version__)
    try:
        if mode == "room":
            return _run_room(args, colored)
        return _run_generate(args, colored)
    except (ValueError, UngeneratableRequirementError) as exc:
        _error(str(exc), colored)
        return 1


def entrypoint() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    entrypoint()
