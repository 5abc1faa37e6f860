"""ASCII rendering helpers for rooms, floor layouts and assembled dungeons.

Debugging aids only: output is meant for terminals and test assertions.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .assembler import ArrangedRoom
from .floor import FloorLayout
from .rooms import RoomGrid


def render_tiles(rows: int, cols: int, tiles: Sequence[str], vertical_padding: int = 0, horizontal_padding: int = 0) -> str:
    width = cols + horizontal_padding * 2
    pad = " " * horizontal_padding
    lines = [" " * width] * vertical_padding
    for r in range(rows):
        lines.append(pad + "".join(tiles[r * cols:(r + 1) * cols]) + pad)
    lines.extend([" " * width] * vertical_padding)
    return "\n".join(lines)


def render_room(room: RoomGrid, vertical_padding: int = 0, horizontal_padding: int = 0) -> str:
    return render_tiles(room.rows, room.cols, room.tiles, vertical_padding, horizontal_padding)


def render_floor_layout(floor_layout: FloorLayout) -> str:
    """One ``O`` per occupied cell, top row first; trailing blanks are trimmed."""
    if not floor_layout.rooms:
        return ""
    min_row = min(r.row for r in floor_layout.rooms)
    min_col = min(r.col for r in floor_layout.rooms)
    max_row = max(r.row for r in floor_layout.rooms)
    occupied = {(r.row - min_row, r.col - min_col) for r in floor_layout.rooms}
    lines = []
    for row in range(max_row - min_row + 1):
        cols = [c for (r, c) in occupied if r == row]
        width = max(cols) + 1 if cols else 0
        lines.append("".join("O" if (row, c) in occupied else " " for c in range(width)))
    return "\n".join(lines)


class FloorGrid:
    """Tracks room sizes per grid cell so a floor can be drawn with aligned rows and columns.

    Each grid row is as tall as its tallest room and each grid column as wide
    as its widest room; smaller rooms are centred inside their cell. Empty
    cells pad by the full row height / column width.
    """

    def __init__(self, rows: int, cols: int):
        self.heights = [[0] * cols for _ in range(rows)]
        self.widths = [[0] * cols for _ in range(rows)]
        self.max_heights = [0] * rows
        self.max_widths = [0] * cols

    def insert(self, row: int, col: int, height: int, width: int) -> None:
        self.heights[row][col] = height
        self.widths[row][col] = width
        self.max_heights[row] = max(self.max_heights[row], height)
        self.max_widths[col] = max(self.max_widths[col], width)

    def top_pad(self, row: int, col: int) -> int:
        height = self.heights[row][col]
        if height == 0:
            return self.max_heights[row]
        return (self.max_heights[row] - height) // 2

    def left_pad(self, row: int, col: int) -> int:
        width = self.widths[row][col]
        if width == 0:
            return self.max_widths[col]
        return (self.max_widths[col] - width) // 2


def _cell_lines(room: RoomGrid | None, grid: FloorGrid, row: int, col: int) -> List[str]:
    height, width = grid.max_heights[row], grid.max_widths[col]
    if room is None:
        return [" " * width] * height
    top, left = grid.top_pad(row, col), grid.left_pad(row, col)
    lines = [" " * width] * top
    for r in range(room.rows):
        text = "".join(room.tiles[r * room.cols:(r + 1) * room.cols])
        lines.append((" " * left + text).ljust(width))
    lines.extend([" " * width] * (height - len(lines)))
    return lines


def render_floor(rooms: Sequence[ArrangedRoom], column_spacing: int = 1, row_spacing: int = 1) -> str:
    """Draw one floor's rooms on a common grid; rooms are placed by their row/col."""
    if not rooms:
        return ""
    min_row = min(r.row for r in rooms)
    min_col = min(r.col for r in rooms)
    n_rows = max(r.row for r in rooms) - min_row + 1
    n_cols = max(r.col for r in rooms) - min_col + 1
    grid = FloorGrid(n_rows, n_cols)
    by_cell: Dict[tuple, RoomGrid] = {}
    for arranged in rooms:
        cell = (arranged.row - min_row, arranged.col - min_col)
        by_cell[cell] = arranged.room
        grid.insert(cell[0], cell[1], arranged.room.rows, arranged.room.cols)

    sep = " " * column_spacing
    blocks = []
    for row in range(n_rows):
        columns = [_cell_lines(by_cell.get((row, col)), grid, row, col) for col in range(n_cols)]
        lines = [sep.join(parts).rstrip() for parts in zip(*columns)]
        blocks.append("\n".join(lines))
    return ("\n" * (row_spacing + 1)).join(blocks)


def render_dungeon(rooms: Iterable[ArrangedRoom]) -> str:
    by_floor: Dict[int, List[ArrangedRoom]] = {}
    for arranged in rooms:
        by_floor.setdefault(arranged.floor, []).append(arranged)
    sections = []
    for floor in sorted(by_floor, reverse=True):
        floor_rooms = by_floor[floor]
        sections.append(f"== Floor {floor} ({len(floor_rooms)} rooms) ==\n{render_floor(floor_rooms)}")
    return "\n\n".join(sections)


__all__ = [
    "render_tiles",
    "render_room",
    "render_floor_layout",
    "FloorGrid",
    "render_floor",
    "render_dungeon",
]
