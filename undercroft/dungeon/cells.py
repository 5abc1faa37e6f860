"""Coordinate, rectangle and direction value types shared by every generation phase."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Tuple


class Direction(Enum):
    TOP = "Top"
    BOTTOM = "Bottom"
    LEFT = "Left"
    RIGHT = "Right"
    UP = "Up"
    DOWN = "Down"
    NONE = "None"

    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @classmethod
    def planar(cls) -> Tuple["Direction", ...]:
        """The four border directions a room exit can face."""
        return (cls.TOP, cls.BOTTOM, cls.LEFT, cls.RIGHT)

    @classmethod
    def parse(cls, name: str) -> "Direction":
        for d in cls:
            if d.value.lower() == name.strip().lower():
                return d
        raise ValueError(f"unknown direction: {name!r}")

    def __str__(self) -> str:
        return self.value


_OPPOSITES = {
    Direction.TOP: Direction.BOTTOM,
    Direction.BOTTOM: Direction.TOP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.NONE: Direction.NONE,
}


class Position(NamedTuple):
    """Row-major 2D position; tuple ordering compares row first, then col."""

    row: int
    col: int


class Dimension(NamedTuple):
    vertical: int
    horizontal: int


class Coordinate3D(NamedTuple):
    floor: int
    col: int
    row: int

    @property
    def position(self) -> Position:
        return Position(self.row, self.col)


ORIGIN = Coordinate3D(0, 0, 0)


class Rect(NamedTuple):
    """Axis aligned rectangle over closed row/col intervals."""

    row1: int
    row2: int
    col1: int
    col2: int

    def intersect(self, other: "Rect") -> bool:
        return (
            self.row1 <= other.row2
            and self.row2 >= other.row1
            and self.col1 <= other.col2
            and self.col2 >= other.col1
        )

    def center(self) -> Position:
        return Position((self.row1 + self.row2) // 2, (self.col1 + self.col2) // 2)

    def rows(self) -> range:
        return range(self.row1, self.row2 + 1)

    def cols(self) -> range:
        return range(self.col1, self.col2 + 1)

    def cells(self):
        for row in self.rows():
            for col in self.cols():
                yield row, col


__all__ = ["Direction", "Position", "Dimension", "Coordinate3D", "ORIGIN", "Rect"]
