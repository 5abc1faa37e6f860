"""Floor layout generation: a random digger walk over a coarse room grid.

A floor is a set of occupied grid cells, one room per cell. The digger moves a
cursor one step at a time in a uniformly random direction and records each
cell the first time it is visited; revisits cost a draw but change nothing.
Exits are derived afterwards purely from which neighbours are occupied, so
they are symmetric whatever order the walk took.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .cells import Coordinate3D, Direction, Position
from .rng import DungeonRandom

# Draw order matters for reproducibility: 0 -> col+1, 1 -> col-1, 2 -> row+1, 3 -> row-1
_WALK_STEPS = ((0, 1), (0, -1), (1, 0), (-1, 0))

# Neighbour check order for exit derivation; floor rows grow downward
_EXIT_CHECKS = (
    ((0, 1), Direction.RIGHT),
    ((0, -1), Direction.LEFT),
    ((1, 0), Direction.BOTTOM),
    ((-1, 0), Direction.TOP),
)


@dataclass(frozen=True)
class RoomRequirement:
    floor: int
    row: int
    col: int
    exits: Tuple[Direction, ...] = ()
    stair_up: bool = False
    stair_down: bool = False

    @property
    def coordinate(self) -> Coordinate3D:
        return Coordinate3D(self.floor, self.col, self.row)

    @property
    def position(self) -> Position:
        return Position(self.row, self.col)


@dataclass(frozen=True)
class FloorLayout:
    floor: int
    rooms: Tuple[RoomRequirement, ...]

    def coordinates(self) -> List[Coordinate3D]:
        return [r.coordinate for r in self.rooms]

    def room_at(self, row: int, col: int) -> RoomRequirement | None:
        for room in self.rooms:
            if room.row == row and room.col == col:
                return room
        return None


def random_walk(floor_size: int, rng: DungeonRandom, start: Position = Position(0, 0)) -> List[Position]:
    """Dig from ``start`` until ``floor_size`` distinct cells have been visited.

    Returns the cells in first-visit order; ``start`` is always first.
    """
    if floor_size < 1:
        raise ValueError(f"floor_size must be at least 1, got {floor_size}")
    row, col = start
    layout = [Position(row, col)]
    seen = {layout[0]}
    while len(layout) < floor_size:
        drow, dcol = _WALK_STEPS[rng.randrange(0, 4)]
        row += drow
        col += dcol
        pos = Position(row, col)
        if pos not in seen:
            seen.add(pos)
            layout.append(pos)
    return layout


def derive_exits(positions: List[Position]) -> List[Tuple[Position, Tuple[Direction, ...]]]:
    occupied = set(positions)
    result = []
    for pos in positions:
        exits = tuple(
            direction
            for (drow, dcol), direction in _EXIT_CHECKS
            if Position(pos.row + drow, pos.col + dcol) in occupied
        )
        result.append((pos, exits))
    return result


def create_floor_layout(
    floor_size: int, floor: int, rng: DungeonRandom, start: Position = Position(0, 0)
) -> FloorLayout:
    positions = random_walk(floor_size, rng, start)
    rooms = tuple(
        RoomRequirement(floor=floor, row=pos.row, col=pos.col, exits=exits)
        for pos, exits in derive_exits(positions)
    )
    return FloorLayout(floor=floor, rooms=rooms)


__all__ = ["RoomRequirement", "FloorLayout", "random_walk", "derive_exits", "create_floor_layout"]
