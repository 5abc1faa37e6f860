from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, List, Optional, Sequence

from .builders import footprint_borders, generate_with_retries, seal_unrequested
from .cells import Direction, Position
from .floor import RoomRequirement
from .rng import DungeonRandom
from .rooms import RoomGrid
from .tiles import FLOOR, WALL

# Draw order: 0 -> row-1, 1 -> row+1, 2 -> col-1, 3 -> col+1
_STAGGER = ((-1, 0), (1, 0), (0, -1), (0, 1))


class DrunkardMode(Enum):
    FIND_EXITS = "find_exits"
    REVERSE_CENTER = "reverse_center"


@dataclass(frozen=True)
class DrunkardRoomBuilder:
    """Rooms dug by repeated bounded random walks.

    FIND_EXITS starts from solid rock and carves floor, steering each new walk
    from the carved tile closest to a border it still has to reach.
    REVERSE_CENTER starts from open floor and drops walls from the centre.
    """

    name: ClassVar[str] = "drunkard"

    rows: int = 15
    cols: int = 15
    iterations: int = 4
    steps: int = 30
    mode: DrunkardMode = DrunkardMode.FIND_EXITS
    max_attempts: Optional[int] = None

    def __post_init__(self):
        if self.rows < 3 or self.cols < 3:
            raise ValueError(f"drunkard rooms need at least 3x3 tiles, got {self.rows}x{self.cols}")
        if self.iterations < 1 or self.steps < 1:
            raise ValueError("drunkard iterations and steps must be positive")

    @property
    def center(self) -> Position:
        return Position(self.rows // 2, self.cols // 2)

    @property
    def base_tile(self) -> str:
        return WALL if self.mode is DrunkardMode.FIND_EXITS else FLOOR

    @property
    def dug_tile(self) -> str:
        return FLOOR if self.mode is DrunkardMode.FIND_EXITS else WALL

    def generate(self, requirement: RoomRequirement, rng: DungeonRandom) -> RoomGrid:
        return generate_with_retries(self.name, requirement, self.max_attempts, lambda req: self._attempt(req, rng))

    def _attempt(self, requested: Sequence[Direction], rng: DungeonRandom) -> RoomGrid:
        room = RoomGrid.filled(self.rows, self.cols, self.base_tile)
        start = self.center
        walks = 0
        while True:
            self.stagger(room, start, rng)
            walks += 1
            hit = footprint_borders(room)
            if walks >= self.iterations and all(d in hit for d in requested):
                break
            start = self.next_start(room, hit, requested)
        seal_unrequested(room, requested)
        return room

    def stagger(self, room: RoomGrid, start: Position, rng: DungeonRandom) -> None:
        """One walk: carve ``start``, then up to ``steps`` moves, stopping off-grid or on a corner."""
        row, col = start
        room.tiles[room.index(row, col)] = self.dug_tile
        for _ in range(self.steps):
            drow, dcol = _STAGGER[rng.randrange(0, 4)]
            row += drow
            col += dcol
            if not room.in_bounds(row, col) or room.is_corner(row, col):
                break
            room.tiles[room.index(row, col)] = self.dug_tile

    def next_start(self, room: RoomGrid, hit: Sequence[Direction], requested: Sequence[Direction]) -> Position:
        if self.mode is DrunkardMode.REVERSE_CENTER:
            return self.center
        missing = next((d for d in requested if d not in hit), None)
        if missing is None:
            return self.center
        floors = [i for i, t in enumerate(room.tiles) if t == FLOOR]
        if not floors:
            return self.center
        idx = extreme_tile(room, floors, missing)
        return Position(room.row_of(idx), room.col_of(idx))


def extreme_tile(room: RoomGrid, indices: List[int], direction: Direction) -> int:
    """Tile reaching furthest toward ``direction``.

    Minimum searches keep the first match, maximum searches the last one.
    """
    if direction is Direction.TOP:
        return min(indices, key=room.row_of)
    if direction is Direction.LEFT:
        return min(indices, key=room.col_of)
    key = room.row_of if direction is Direction.BOTTOM else room.col_of
    best = indices[0]
    for idx in indices:
        if key(idx) >= key(best):
            best = idx
    return best


__all__ = ["DrunkardMode", "DrunkardRoomBuilder", "extreme_tile"]
