"""Grid rooms: equally sized chambers separated by single-tile walls.

Chambers are numbered row-major. One axis (the alignment) is the primary
axis: every neighbouring pair along it gets a doorway. Across the other axis
only one randomly picked pair per boundary is joined, which is enough to make
every chamber reachable. Any doorway may be widened into an open wall.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Sequence

from .builders import requested_borders
from .cells import Dimension, Direction, Rect
from .floor import RoomRequirement
from .rng import DungeonRandom
from .rooms import RoomGrid
from .tiles import EXIT, FLOOR, WALL


class Alignment(Enum):
    VERTICAL = 0
    HORIZONTAL = 1


@dataclass(frozen=True)
class GridRoomBuilder:
    name: ClassVar[str] = "grid"

    rect_size: Dimension = field(default_factory=lambda: Dimension(3, 3))
    rects: Dimension = field(default_factory=lambda: Dimension(3, 3))

    def __post_init__(self):
        if min(self.rect_size) < 1 or min(self.rects) < 1:
            raise ValueError(f"grid rooms need positive chamber sizes and counts, got {self.rect_size}/{self.rects}")

    @property
    def rows(self) -> int:
        return self.rect_size.vertical * self.rects.vertical + self.rects.vertical + 1

    @property
    def cols(self) -> int:
        return self.rect_size.horizontal * self.rects.horizontal + self.rects.horizontal + 1

    def generate(self, requirement: RoomRequirement, rng: DungeonRandom) -> RoomGrid:
        chambers = self.create_rects()
        room = RoomGrid.filled(
            self.rows,
            self.cols,
            WALL,
            stair_up=requirement.stair_up,
            stair_down=requirement.stair_down,
        )
        for rect in chambers:
            for row, col in rect.cells():
                room.tiles[room.index(row, col)] = FLOOR
        self.connect(room, chambers, rng)
        self.set_exits(room, requested_borders(requirement), chambers)
        room.refresh_pathing()
        return room

    def create_rects(self) -> List[Rect]:
        chambers = []
        for r in range(self.rects.vertical):
            row1 = 1 + r * (self.rect_size.vertical + 1)
            for c in range(self.rects.horizontal):
                col1 = 1 + c * (self.rect_size.horizontal + 1)
                chambers.append(
                    Rect(row1, row1 + self.rect_size.vertical - 1, col1, col1 + self.rect_size.horizontal - 1)
                )
        return chambers

    def connect(self, room: RoomGrid, chambers: Sequence[Rect], rng: DungeonRandom) -> None:
        align = Alignment(rng.randrange(0, 2))
        doorways = self.find_doorway_connections(rng, align)
        h, v = self.rects.horizontal, self.rects.vertical
        for idx, rect in enumerate(chambers):
            if (align is Alignment.HORIZONTAL and idx % h != h - 1) or (
                align is Alignment.VERTICAL and idx in doorways
            ):
                room.tiles[room.index(rect.center().row, rect.col2 + 1)] = FLOOR
                if rng.randrange(0, 2) == 0:
                    for row in rect.rows():
                        room.tiles[room.index(row, rect.col2 + 1)] = FLOOR
            if (align is Alignment.VERTICAL and idx < h * (v - 1)) or (
                align is Alignment.HORIZONTAL and idx in doorways
            ):
                room.tiles[room.index(rect.row2 + 1, rect.center().col)] = FLOOR
                if rng.randrange(0, 2) == 0:
                    for col in rect.cols():
                        room.tiles[room.index(rect.row2 + 1, col)] = FLOOR

    def find_doorway_connections(self, rng: DungeonRandom, align: Alignment) -> List[int]:
        """One chamber per secondary-axis boundary whose far wall gets a doorway."""
        if align is Alignment.VERTICAL:
            boundaries = self.rects.horizontal - 1
        else:
            boundaries = self.rects.vertical - 1
        return [rng.choice(self.possible_doorway_rects(align, i)) for i in range(boundaries)]

    def possible_doorway_rects(self, align: Alignment, boundary: int) -> List[int]:
        h, v = self.rects.horizontal, self.rects.vertical
        if align is Alignment.HORIZONTAL:
            # chambers of row ``boundary``, opening downward
            return [boundary * h + c for c in range(h)]
        # chambers of column ``boundary``, opening to the right
        return [r * h + boundary for r in range(v)]

    def set_exits(self, room: RoomGrid, exits: Sequence[Direction], chambers: Sequence[Rect]) -> None:
        for direction in exits:
            rect = self.side_center_rect(direction, chambers)
            center = rect.center()
            if direction is Direction.TOP:
                idx = room.index(rect.row1 - 1, center.col)
            elif direction is Direction.BOTTOM:
                idx = room.index(rect.row2 + 1, center.col)
            elif direction is Direction.LEFT:
                idx = room.index(center.row, rect.col1 - 1)
            else:
                idx = room.index(center.row, rect.col2 + 1)
            room.tiles[idx] = EXIT
            room.exits.append((idx, direction))

    def side_center_rect(self, direction: Direction, chambers: Sequence[Rect]) -> Rect:
        side = self.side_rects(direction, chambers)
        return side[len(side) // 2]

    def side_rects(self, direction: Direction, chambers: Sequence[Rect]) -> List[Rect]:
        if direction is Direction.TOP:
            return [r for r in chambers if r.row1 == 1]
        if direction is Direction.BOTTOM:
            return [r for r in chambers if r.row2 == self.rows - 2]
        if direction is Direction.LEFT:
            return [r for r in chambers if r.col1 == 1]
        if direction is Direction.RIGHT:
            return [r for r in chambers if r.col2 == self.cols - 2]
        return []


__all__ = ["Alignment", "GridRoomBuilder"]
