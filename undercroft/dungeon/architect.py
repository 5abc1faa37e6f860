"""Multi-floor dungeon layout.

Phases:
    * Sample how many floors sit above and below ground.
    * Dig floor 0 from (0, 0); the walk origin becomes the dungeon's first room.
    * Pick the floor 0 room farthest from the first room as the stair room.
    * Stack floors upward: each new floor is dug from the previous stair room's
      row/col, linked to the floor below it, and nominates its own farthest
      room (from where the stairs arrived) as the next stair room.
    * Stack floors downward the same way, again starting from the floor 0 stair room.
    * Tag stair rooms, then pick the last room: the one farthest from (0, 0, 0)
      with floor distance weighted four times.

"Farthest" keeps the last maximal coordinate in iteration order. Changing that
tie-break changes layouts for existing seeds.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, NamedTuple, Tuple

from ..logging_utils import get_logger
from .cells import ORIGIN, Coordinate3D, Position
from .config import DungeonLayoutConfig
from .floor import FloorLayout, create_floor_layout
from .rng import DungeonRandom

log = get_logger("undercroft.dungeon.architect")

FLOOR_DISTANCE_WEIGHT = 4


class StairLink(NamedTuple):
    lower: Coordinate3D
    upper: Coordinate3D

    @classmethod
    def between(cls, row: int, col: int, floor_a: int, floor_b: int) -> "StairLink":
        lo, hi = min(floor_a, floor_b), max(floor_a, floor_b)
        return cls(Coordinate3D(lo, col, row), Coordinate3D(hi, col, row))


@dataclass(frozen=True)
class DungeonLayout:
    floors: Tuple[FloorLayout, ...]
    coords: Tuple[Coordinate3D, ...]
    stairs: Tuple[StairLink, ...]
    first_room: Coordinate3D
    last_room: Coordinate3D

    def floor(self, number: int) -> FloorLayout:
        for f in self.floors:
            if f.floor == number:
                return f
        raise KeyError(number)

    @property
    def floor_numbers(self) -> List[int]:
        return [f.floor for f in self.floors]


def _manhattan(a: Coordinate3D, b: Coordinate3D) -> int:
    return abs(a.row - b.row) + abs(a.col - b.col)


def farthest_on_floor(coords: Iterable[Coordinate3D], origin: Coordinate3D) -> Coordinate3D:
    best = None
    best_dist = -1
    for c in coords:
        if c.floor != origin.floor:
            continue
        d = _manhattan(c, origin)
        if d >= best_dist:
            best, best_dist = c, d
    if best is None:
        raise ValueError(f"no rooms on floor {origin.floor}")
    return best


def farthest_in_dungeon(coords: Iterable[Coordinate3D], origin: Coordinate3D = ORIGIN) -> Coordinate3D:
    best = None
    best_dist = -1
    for c in coords:
        d = _manhattan(c, origin) + abs(c.floor - origin.floor) * FLOOR_DISTANCE_WEIGHT
        if d >= best_dist:
            best, best_dist = c, d
    if best is None:
        raise ValueError("dungeon has no rooms")
    return best


class DungeonArchitect:
    def __init__(self, config: DungeonLayoutConfig | None = None):
        self.config = config or DungeonLayoutConfig()

    def create_layout(self, rng: DungeonRandom) -> DungeonLayout:
        floors_above = rng.randrange(*self.config.floors_above)
        floors_below = rng.randrange(*self.config.floors_below)

        floors: List[FloorLayout] = []
        coords: List[Coordinate3D] = []
        stairs: List[StairLink] = []

        self._layout_floor(rng, floors, coords, Position(0, 0), 0)
        first_room = coords[0]
        stair_room = farthest_on_floor(coords, first_room)

        self._layout_floors(rng, floors, coords, stairs, stair_room.position, floors_above, sign=1)
        self._layout_floors(rng, floors, coords, stairs, stair_room.position, floors_below, sign=-1)

        floors = _tag_stairs(floors, stairs)
        last_room = farthest_in_dungeon(coords, ORIGIN)
        log.debug(
            event="layout_created",
            floors_above=floors_above,
            floors_below=floors_below,
            rooms=len(coords),
            stairs=len(stairs),
            last_room=f"{last_room.floor}/{last_room.col}/{last_room.row}",
        )
        return DungeonLayout(
            floors=tuple(floors),
            coords=tuple(coords),
            stairs=tuple(stairs),
            first_room=first_room,
            last_room=last_room,
        )

    def _layout_floors(self, rng, floors, coords, stairs, start: Position, count: int, sign: int) -> None:
        floor_start = start
        floor_before = 0
        for k in range(1, count + 1):
            floor = k * sign
            stairs.append(StairLink.between(floor_start.row, floor_start.col, floor_before, floor))
            self._layout_floor(rng, floors, coords, floor_start, floor)
            arrival = Coordinate3D(floor, floor_start.col, floor_start.row)
            floor_start = farthest_on_floor(coords, arrival).position
            floor_before = floor

    def _layout_floor(self, rng, floors, coords, start: Position, floor: int) -> None:
        floor_size = rng.randrange(*self.config.floor_size)
        layout = create_floor_layout(floor_size, floor, rng, start)
        floors.append(layout)
        coords.extend(layout.coordinates())


def _tag_stairs(floors: List[FloorLayout], stairs: List[StairLink]) -> List[FloorLayout]:
    up_rooms = {s.lower for s in stairs}
    down_rooms = {s.upper for s in stairs}
    tagged = []
    for fl in floors:
        rooms = tuple(
            replace(r, stair_up=r.coordinate in up_rooms, stair_down=r.coordinate in down_rooms)
            for r in fl.rooms
        )
        tagged.append(FloorLayout(floor=fl.floor, rooms=rooms))
    return tagged


__all__ = [
    "StairLink",
    "DungeonLayout",
    "DungeonArchitect",
    "farthest_on_floor",
    "farthest_in_dungeon",
    "FLOOR_DISTANCE_WEIGHT",
]
