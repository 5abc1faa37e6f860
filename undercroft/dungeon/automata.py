from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, List, Optional, Sequence

from .builders import footprint_borders, generate_with_retries, seal_unrequested
from .cells import Direction
from .floor import RoomRequirement
from .rng import DungeonRandom
from .rooms import RoomGrid
from .tiles import FLOOR, WALL


@dataclass(frozen=True)
class AutomataRoomBuilder:
    """Cave rooms from random noise smoothed by a Moore-neighbourhood rule.

    A noise map is regenerated until its floor footprint reaches every
    requested border. Unrequested borders it happens to reach are walled off
    afterwards.
    """

    name: ClassVar[str] = "automata"

    rows: int = 16
    cols: int = 16
    wall_percent: int = 33
    iterations: int = 5
    max_attempts: Optional[int] = None

    def __post_init__(self):
        if self.rows < 3 or self.cols < 3:
            raise ValueError(f"automata rooms need at least 3x3 tiles, got {self.rows}x{self.cols}")
        if not 0 <= self.wall_percent <= 100:
            raise ValueError(f"wall_percent must be within 0..100, got {self.wall_percent}")
        if self.iterations < 0:
            raise ValueError(f"iterations must not be negative, got {self.iterations}")

    def generate(self, requirement: RoomRequirement, rng: DungeonRandom) -> RoomGrid:
        return generate_with_retries(self.name, requirement, self.max_attempts, lambda req: self._attempt(req, rng))

    def _attempt(self, requested: Sequence[Direction], rng: DungeonRandom) -> RoomGrid:
        room = self.random_room(rng)
        # a footprint that misses a requested border cannot pass; skip the sealing work
        if all(d in footprint_borders(room) for d in requested):
            seal_unrequested(room, requested)
        else:
            room.refresh_pathing()
        return room

    def random_room(self, rng: DungeonRandom) -> RoomGrid:
        room = RoomGrid(self.rows, self.cols, self.noise(rng))
        for _ in range(self.iterations):
            self.smooth(room)
        # corners border two sides at once; keep them solid
        n = len(room.tiles)
        for idx in (0, self.cols - 1, n - self.cols, n - 1):
            room.tiles[idx] = WALL
        return room

    def noise(self, rng: DungeonRandom) -> List[str]:
        return [WALL if rng.randrange(0, 100) < self.wall_percent else FLOOR for _ in range(self.rows * self.cols)]

    @staticmethod
    def wall_neighbours(room: RoomGrid, row: int, col: int) -> int:
        count = 0
        for drow in (-1, 0, 1):
            for dcol in (-1, 0, 1):
                if (drow or dcol) and room.tiles[room.index(row + drow, col + dcol)] == WALL:
                    count += 1
        return count

    def smooth(self, room: RoomGrid) -> None:
        """One automaton round over interior tiles, reading old tiles and writing new ones."""
        new_tiles = list(room.tiles)
        for row in range(1, room.rows - 1):
            for col in range(1, room.cols - 1):
                walls = self.wall_neighbours(room, row, col)
                new_tiles[room.index(row, col)] = WALL if walls > 4 or walls == 0 else FLOOR
        room.tiles = new_tiles


__all__ = ["AutomataRoomBuilder"]
