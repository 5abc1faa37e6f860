"""Public dungeon package interface.

Seeded multi-floor dungeon generation: floor layouts, room builders,
connectivity analysis and the assembly pipeline that ties them together.
"""

from .architect import (
    DungeonArchitect,
    DungeonLayout,
    StairLink,
    farthest_in_dungeon,
    farthest_on_floor,
)  # noqa: F401
from .assembler import ArrangedRoom, DungeonAssembler  # noqa: F401
from .automata import AutomataRoomBuilder  # noqa: F401
from .builders import BUILDER_NAMES, RoomBuilder, build_pool, default_builders, make_builder  # noqa: F401
from .cells import ORIGIN, Coordinate3D, Dimension, Direction, Position, Rect  # noqa: F401
from .config import DungeonLayoutConfig, GenerationConfig  # noqa: F401
from .connectivity import analyze_connectivity, connected_regions  # noqa: F401
from .drunkard import DrunkardMode, DrunkardRoomBuilder  # noqa: F401
from .errors import UngeneratableRequirementError  # noqa: F401
from .floor import FloorLayout, RoomRequirement, create_floor_layout  # noqa: F401
from .grid import GridRoomBuilder  # noqa: F401
from .pipeline import Dungeon, generate_dungeon  # noqa: F401
from .rectangles import Granularity, RectangleCorridorRoomBuilder  # noqa: F401
from .render import render_dungeon, render_floor, render_floor_layout, render_room  # noqa: F401
from .rng import DungeonRandom  # noqa: F401
from .rooms import RoomGrid  # noqa: F401
from .tiles import EXIT, FLOOR, STAIRS_DOWN, STAIRS_UP, WALL  # noqa: F401

__all__ = [
    "ArrangedRoom",
    "AutomataRoomBuilder",
    "BUILDER_NAMES",
    "Coordinate3D",
    "Dimension",
    "Direction",
    "DrunkardMode",
    "DrunkardRoomBuilder",
    "Dungeon",
    "DungeonArchitect",
    "DungeonAssembler",
    "DungeonLayout",
    "DungeonLayoutConfig",
    "DungeonRandom",
    "EXIT",
    "FLOOR",
    "FloorLayout",
    "GenerationConfig",
    "Granularity",
    "GridRoomBuilder",
    "ORIGIN",
    "Position",
    "Rect",
    "RectangleCorridorRoomBuilder",
    "RoomBuilder",
    "RoomGrid",
    "RoomRequirement",
    "STAIRS_DOWN",
    "STAIRS_UP",
    "StairLink",
    "UngeneratableRequirementError",
    "WALL",
    "analyze_connectivity",
    "build_pool",
    "connected_regions",
    "create_floor_layout",
    "default_builders",
    "farthest_in_dungeon",
    "farthest_on_floor",
    "generate_dungeon",
    "make_builder",
    "render_dungeon",
    "render_floor",
    "render_floor_layout",
    "render_room",
]
