from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .cells import Direction
from .connectivity import analyze_connectivity
from .tiles import WALL

Exit = Tuple[int, Direction]


@dataclass
class RoomGrid:
    """A single room's tiles in row-major order plus its derived pathing data.

    Border naming: TOP is row 0, BOTTOM is the last row, LEFT is col 0 and
    RIGHT is the last col. ``pathing`` is kept sorted and must be refreshed
    (``refresh_pathing``) after any tile edit that can change reachability.
    """

    rows: int
    cols: int
    tiles: List[str]
    pathing: List[int] = field(default_factory=list)
    exits: List[Exit] = field(default_factory=list)
    entry: Optional[Exit] = None
    rotation: int = 0
    stair_up: bool = False
    stair_down: bool = False

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"room dimensions must be positive, got {self.rows}x{self.cols}")
        if len(self.tiles) != self.rows * self.cols:
            raise ValueError(f"expected {self.rows * self.cols} tiles, got {len(self.tiles)}")

    @classmethod
    def filled(cls, rows: int, cols: int, tile: str, **kwargs) -> "RoomGrid":
        if rows <= 0 or cols <= 0:
            raise ValueError(f"room dimensions must be positive, got {rows}x{cols}")
        return cls(rows, cols, [tile] * (rows * cols), **kwargs)

    # ------------------------------------------------------------------
    # Index helpers
    # ------------------------------------------------------------------
    def index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def row_of(self, idx: int) -> int:
        return idx // self.cols

    def col_of(self, idx: int) -> int:
        return idx % self.cols

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_corner(self, row: int, col: int) -> bool:
        return row in (0, self.rows - 1) and col in (0, self.cols - 1)

    def count(self, tile: str) -> int:
        return sum(1 for t in self.tiles if t == tile)

    # ------------------------------------------------------------------
    # Borders
    # ------------------------------------------------------------------
    def side_indexes(self, direction: Direction) -> List[int]:
        n = len(self.tiles)
        if direction is Direction.TOP:
            return list(range(0, self.cols))
        if direction is Direction.BOTTOM:
            return list(range(n - self.cols, n))
        if direction is Direction.LEFT:
            return list(range(0, n, self.cols))
        if direction is Direction.RIGHT:
            return list(range(self.cols - 1, n, self.cols))
        return []

    def borders_of(self, idx: int) -> List[Direction]:
        """Borders the tile lies on; corners lie on two."""
        row, col = self.row_of(idx), self.col_of(idx)
        found = []
        if row == 0:
            found.append(Direction.TOP)
        if row == self.rows - 1:
            found.append(Direction.BOTTOM)
        if col == 0:
            found.append(Direction.LEFT)
        if col == self.cols - 1:
            found.append(Direction.RIGHT)
        return found

    def hit_borders(self, indices: Optional[Sequence[int]] = None) -> List[Direction]:
        """Borders touched by ``indices`` (the pathing set by default), in planar order."""
        if indices is None:
            indices = self.pathing
        hit = set()
        for idx in indices:
            hit.update(self.borders_of(idx))
        return [d for d in Direction.planar() if d in hit]

    def border_path_tiles(self, direction: Direction) -> List[int]:
        """Pathing tiles on one border, in ascending index order."""
        side = set(self.side_indexes(direction))
        return [idx for idx in self.pathing if idx in side]

    def close_side(self, direction: Direction) -> bool:
        """Wall up a whole border; drops exits on it and refreshes pathing if anything changed."""
        changed = False
        for idx in self.side_indexes(direction):
            if self.tiles[idx] != WALL:
                self.tiles[idx] = WALL
                changed = True
        if changed:
            self.exits = [e for e in self.exits if e[1] is not direction and direction not in self.borders_of(e[0])]
            self.refresh_pathing()
        return changed

    # ------------------------------------------------------------------
    # Connectivity
    # ------------------------------------------------------------------
    def refresh_pathing(self) -> List[int]:
        self.pathing = analyze_connectivity(self.tiles, self.rows, self.cols).pathing
        return self.pathing


__all__ = ["RoomGrid", "Exit"]
