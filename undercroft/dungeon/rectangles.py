from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, List, Sequence, Tuple

from .builders import requested_borders
from .cells import Rect
from .floor import RoomRequirement
from .rng import DungeonRandom
from .rooms import RoomGrid
from .tiles import FLOOR, WALL

PLACEMENT_RETRIES = 10


class Granularity(Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    FULL = "full"

    def size_and_number_ranges(self, rows: int, cols: int) -> Tuple[int, int, int]:
        """(min_size, max_size, count) for rectangles in a rows x cols room.

        Sizes scale with the shorter side. For every bucket but FULL,
        ``max_size`` is exclusive and kept above ``min_size`` so the size draw
        never sees an empty range.
        """
        base = min(rows, cols)
        if self is Granularity.FULL:
            return base, base, 1
        if self is Granularity.SMALL:
            lo, hi, number = base // 8, base // 5, 8
        elif self is Granularity.MEDIUM:
            lo, hi, number = base // 6, base // 4, 6
        else:
            lo, hi, number = base // 4, base // 3, 3
        lo = max(lo, 1)
        hi = max(hi, 2, lo + 1)
        return lo, hi, number


@dataclass(frozen=True)
class RectangleCorridorRoomBuilder:
    """Disjoint rectangles chained together by L-shaped corridors.

    Every requested exit adds a one-tile rectangle at the centre of its border,
    so the corridor chain reaches it like any other chamber. Rectangles are
    joined in row-major order of their centres, each to its predecessor.
    """

    name: ClassVar[str] = "rectangles"

    rows: int = 16
    cols: int = 16
    granularity: Granularity = Granularity.MEDIUM

    def __post_init__(self):
        # placement draws need room for a max-size rectangle inside the outer wall
        if self.rows < 5 or self.cols < 5:
            raise ValueError(f"rectangle rooms need at least 5x5 tiles, got {self.rows}x{self.cols}")

    def generate(self, requirement: RoomRequirement, rng: DungeonRandom) -> RoomGrid:
        rects = self.create_rects(rng)
        room = RoomGrid.filled(
            self.rows,
            self.cols,
            WALL,
            stair_up=requirement.stair_up,
            stair_down=requirement.stair_down,
        )
        for direction in requested_borders(requirement):
            side = room.side_indexes(direction)
            center = side[len(side) // 2]
            row, col = room.row_of(center), room.col_of(center)
            rects.append(Rect(row, row, col, col))

        rects.sort(key=lambda r: r.center())
        self.fill_and_connect(room, rects, rng)
        room.refresh_pathing()
        return room

    def create_rects(self, rng: DungeonRandom) -> List[Rect]:
        if self.granularity is Granularity.FULL:
            return [Rect(1, self.rows - 2, 1, self.cols - 2)]
        lo, hi, number = self.granularity.size_and_number_ranges(self.rows, self.cols)
        rects: List[Rect] = []
        failures = 0
        while len(rects) < number and failures < PLACEMENT_RETRIES:
            rect = self.random_rect(lo, hi, rng)
            if any(rect.intersect(existing) for existing in rects):
                failures += 1
                continue
            rects.append(rect)
        return rects

    def random_rect(self, lo: int, hi: int, rng: DungeonRandom) -> Rect:
        col_size = rng.randrange(lo, hi)
        row_size = rng.randrange(lo, hi)
        col = rng.randrange(1, self.cols - 1 - col_size)
        row = rng.randrange(1, self.rows - 1 - row_size)
        return Rect(row, row + row_size, col, col + col_size)

    def fill_and_connect(self, room: RoomGrid, rects: Sequence[Rect], rng: DungeonRandom) -> None:
        for i, rect in enumerate(rects):
            for row, col in rect.cells():
                room.tiles[room.index(row, col)] = FLOOR
            if i == 0:
                continue
            prev = rects[i - 1].center()
            new = rect.center()
            if rng.randrange(0, 2) == 1:
                horizontal_tunnel(room, prev.col, new.col, prev.row)
                vertical_tunnel(room, prev.row, new.row, new.col)
            else:
                vertical_tunnel(room, prev.row, new.row, prev.col)
                horizontal_tunnel(room, prev.col, new.col, new.row)


def horizontal_tunnel(room: RoomGrid, col1: int, col2: int, row: int) -> None:
    for col in range(min(col1, col2), max(col1, col2) + 1):
        room.tiles[room.index(row, col)] = FLOOR


def vertical_tunnel(room: RoomGrid, row1: int, row2: int, col: int) -> None:
    for row in range(min(row1, row2), max(row1, row2) + 1):
        room.tiles[room.index(row, col)] = FLOOR


__all__ = ["Granularity", "RectangleCorridorRoomBuilder", "horizontal_tunnel", "vertical_tunnel"]
