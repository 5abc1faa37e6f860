"""Pipeline orchestration for dungeon generation.

Provides the public Dungeon class: it lays out floors with the
DungeonArchitect, then hands every room slot to the DungeonAssembler, all
driven by one DungeonRandom stream seeded from ``seed``.
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from ..logging_utils import get_logger
from .architect import DungeonArchitect
from .assembler import ArrangedRoom, DungeonAssembler
from .builders import RoomBuilder, build_pool
from .cells import Coordinate3D
from .config import GenerationConfig
from .metrics import init_metrics
from .render import render_dungeon, render_floor_layout
from .rng import DungeonRandom
from .tiles import FLOOR, WALL

log = get_logger("undercroft.dungeon")


@dataclass
class Dungeon:
    seed: Optional[int] = None
    config: Optional[GenerationConfig] = None
    builders: Optional[Sequence[RoomBuilder]] = None
    layout_only: bool = False

    def __post_init__(self):
        if self.config is None:
            self.config = GenerationConfig.from_env()
        # 0 is a valid deterministic seed; None => config seed, then random
        if self.seed is None:
            self.seed = self.config.seed
        if self.seed is None:
            self.seed = random.randint(1, 1_000_000)
        if self.builders is None:
            self.builders = build_pool(self.config.builders, self.config.max_room_attempts)
        self.enable_metrics = self.config.enable_metrics
        self.metrics: Dict[str, Any] = init_metrics() if self.enable_metrics else {}
        self.rng = DungeonRandom(self.seed)
        self.rooms: List[ArrangedRoom] = []
        self._run_pipeline()

    def _run_pipeline(self):
        """Execute the generation phases with per-phase timing.

        ``phase_ms`` maps phase name -> duration (ms) when metrics are enabled.
        """
        if self.enable_metrics:
            start = time.perf_counter()
            phase_times = {}

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter()
                r = fn(*a, **k)
                phase_times[label] = int((time.perf_counter() - ps) * 1000)
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        architect = DungeonArchitect(self.config.layout)
        self.layout = _phase('layout', architect.create_layout, self.rng)
        if not self.layout_only:
            assembler = DungeonAssembler(self.builders)
            self.rooms = _phase('assemble', assembler.assemble, self.layout, self.rng,
                                self.metrics if self.enable_metrics else None)

        if self.enable_metrics:
            self._count_structure()
            self.metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
            self.metrics['phase_ms'] = phase_times
        log.info(
            event="dungeon_generated",
            seed=self.seed,
            floors=len(self.layout.floors),
            rooms=len(self.layout.coords),
            stair_links=len(self.layout.stairs),
            layout_only=self.layout_only,
            runtime_ms=self.metrics.get('runtime_ms'),
        )

    def _count_structure(self):
        self.metrics['floors'] = len(self.layout.floors)
        self.metrics['rooms'] = len(self.layout.coords)
        self.metrics['stair_links'] = len(self.layout.stairs)
        self.metrics['tiles_floor'] = sum(r.room.count(FLOOR) for r in self.rooms)
        self.metrics['tiles_wall'] = sum(r.room.count(WALL) for r in self.rooms)
        self.metrics['rng_draws'] = self.rng.draws

    @property
    def first_room(self) -> Coordinate3D:
        return self.layout.first_room

    @property
    def last_room(self) -> Coordinate3D:
        return self.layout.last_room

    def room_at(self, coord: Coordinate3D) -> Optional[ArrangedRoom]:
        for arranged in self.rooms:
            if arranged.coord == coord:
                return arranged
        return None

    def floor_rooms(self, floor: int) -> List[ArrangedRoom]:
        return [r for r in self.rooms if r.floor == floor]

    def render(self) -> str:
        if self.layout_only:
            sections = []
            for fl in sorted(self.layout.floors, key=lambda f: f.floor, reverse=True):
                sections.append(f"== Floor {fl.floor} ({len(fl.rooms)} rooms) ==\n{render_floor_layout(fl)}")
            return "\n\n".join(sections)
        return render_dungeon(self.rooms)


def generate_dungeon(seed: int, config: Optional[GenerationConfig] = None, **kwargs) -> Dungeon:
    """Convenience wrapper; explicit ``config`` skips environment overrides."""
    return Dungeon(seed=seed, config=config or GenerationConfig(), **kwargs)


__all__ = ["Dungeon", "generate_dungeon"]
