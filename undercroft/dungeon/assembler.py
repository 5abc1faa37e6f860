"""Turns a dungeon layout into concrete rooms.

For every room slot a builder is drawn from the pool, the generated grid's
pathing set is refreshed, and exit and stair tiles are stamped onto it. Exit
tiles go to the middle pathing tile of each requested border unless the
builder already placed its own. Stairs take the first plain floor tile found
while stepping through every second pathing index, starting a third of the
way in for stairs down and two thirds in for stairs up. A stair with no
suitable tile is left out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..logging_utils import get_logger
from .architect import DungeonLayout
from .builders import RoomBuilder, requested_borders
from .cells import Coordinate3D
from .floor import FloorLayout, RoomRequirement
from .rng import DungeonRandom
from .rooms import RoomGrid
from .tiles import EXIT, FLOOR, STAIRS_DOWN, STAIRS_UP

log = get_logger("undercroft.dungeon")


@dataclass
class ArrangedRoom:
    room: RoomGrid
    coord: Coordinate3D
    builder: str = ""

    @property
    def floor(self) -> int:
        return self.coord.floor

    @property
    def row(self) -> int:
        return self.coord.row

    @property
    def col(self) -> int:
        return self.coord.col

    @property
    def tiles(self) -> List[str]:
        return self.room.tiles


class DungeonAssembler:
    def __init__(self, builders: Sequence[RoomBuilder]):
        if not builders:
            raise ValueError("DungeonAssembler needs at least one room builder")
        self.builders = list(builders)

    def assemble(
        self, layout: DungeonLayout, rng: DungeonRandom, metrics: Optional[Dict] = None
    ) -> List[ArrangedRoom]:
        rooms: List[ArrangedRoom] = []
        for floor_layout in layout.floors:
            rooms.extend(self.assemble_floor(floor_layout, rng, metrics))
        return rooms

    def assemble_floor(
        self, floor_layout: FloorLayout, rng: DungeonRandom, metrics: Optional[Dict] = None
    ) -> List[ArrangedRoom]:
        return [self.assemble_room(req, rng, metrics) for req in floor_layout.rooms]

    def assemble_room(
        self, requirement: RoomRequirement, rng: DungeonRandom, metrics: Optional[Dict] = None
    ) -> ArrangedRoom:
        builder = self.builders[rng.randrange(0, len(self.builders))]
        name = getattr(builder, "name", type(builder).__name__)
        room = builder.generate(requirement, rng)
        room.refresh_pathing()
        exits = place_exits(room, requirement)
        placed, omitted = place_stairs(room, requirement)
        if metrics is not None:
            usage = metrics.setdefault('builder_usage', {})
            usage[name] = usage.get(name, 0) + 1
            metrics['exits'] = metrics.get('exits', 0) + exits
            metrics['stairs_placed'] = metrics.get('stairs_placed', 0) + placed
            metrics['stairs_omitted'] = metrics.get('stairs_omitted', 0) + omitted
        return ArrangedRoom(room=room, coord=requirement.coordinate, builder=name)


def place_exits(room: RoomGrid, requirement: RoomRequirement) -> int:
    """Stamp one exit per requested border; returns how many exit tiles the room carries."""
    if EXIT in room.tiles:
        return room.count(EXIT)
    placed = 0
    for direction in requested_borders(requirement):
        candidates = room.border_path_tiles(direction)
        # corners would read as exits on two sides
        inner = [i for i in candidates if not room.is_corner(room.row_of(i), room.col_of(i))]
        candidates = inner or candidates
        if not candidates:
            log.warn(event="exit_unplaceable", coord=_coord_label(requirement.coordinate), direction=direction)
            continue
        idx = candidates[len(candidates) // 2]
        room.tiles[idx] = EXIT
        room.exits.append((idx, direction))
        placed += 1
    return placed


def place_stairs(room: RoomGrid, requirement: RoomRequirement):
    """Returns ``(placed, omitted)`` stair counts."""
    third = len(room.pathing) // 3
    wanted = []
    if requirement.stair_down:
        wanted.append((STAIRS_DOWN, third))
    if requirement.stair_up:
        wanted.append((STAIRS_UP, 2 * third))
    placed = omitted = 0
    for tile, offset in wanted:
        if stamp_stair(room, tile, offset):
            placed += 1
        else:
            omitted += 1
            log.debug(event="stair_omitted", coord=_coord_label(requirement.coordinate), tile=tile)
    return placed, omitted


def stamp_stair(room: RoomGrid, tile: str, offset: int) -> bool:
    for i in range(offset, len(room.pathing), 2):
        idx = room.pathing[i]
        if room.tiles[idx] == FLOOR:
            room.tiles[idx] = tile
            return True
    return False


def _coord_label(coord: Coordinate3D) -> str:
    return f"{coord.floor}/{coord.col}/{coord.row}"


__all__ = ["ArrangedRoom", "DungeonAssembler", "place_exits", "place_stairs", "stamp_stair"]
