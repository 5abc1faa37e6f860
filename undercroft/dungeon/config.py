from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

IntRange = Tuple[int, int]

DEFAULT_BUILDERS = ("automata", "drunkard", "grid", "rectangles")


def parse_range(raw: str) -> IntRange:
    """Parse ``"lo..hi"`` (or ``"lo,hi"``) into an inclusive-exclusive tuple."""
    sep = ".." if ".." in raw else ","
    parts = [p.strip() for p in raw.split(sep)]
    if len(parts) != 2:
        raise ValueError(f"expected a range like 3..5, got {raw!r}")
    return int(parts[0]), int(parts[1])


def _check_range(name: str, value: IntRange, minimum: int) -> IntRange:
    lo, hi = value
    if lo < minimum:
        raise ValueError(f"{name} lower bound must be >= {minimum}, got {lo}")
    if hi <= lo:
        raise ValueError(f"{name} range {lo}..{hi} is empty")
    return (int(lo), int(hi))


@dataclass
class DungeonLayoutConfig:
    """Inclusive-exclusive ranges sampled once per dungeon (floor_size once per floor)."""

    floor_size: IntRange = (3, 5)
    floors_above: IntRange = (0, 2)
    floors_below: IntRange = (0, 2)

    def __post_init__(self):
        self.floor_size = _check_range("floor_size", tuple(self.floor_size), 1)
        self.floors_above = _check_range("floors_above", tuple(self.floors_above), 0)
        self.floors_below = _check_range("floors_below", tuple(self.floors_below), 0)


@dataclass
class GenerationConfig:
    seed: Optional[int] = None
    layout: DungeonLayoutConfig = field(default_factory=DungeonLayoutConfig)
    builders: Tuple[str, ...] = DEFAULT_BUILDERS
    # None keeps retrying until a room fits
    max_room_attempts: Optional[int] = None
    enable_metrics: bool = True

    def __post_init__(self):
        self.builders = tuple(self.builders)
        if not self.builders:
            raise ValueError("at least one room builder is required")
        if self.max_room_attempts is not None and self.max_room_attempts < 1:
            raise ValueError(f"max_room_attempts must be positive, got {self.max_room_attempts}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> "GenerationConfig":
        """Build a config from defaults, then environment, then explicit keyword overrides."""
        cfg = cls(**overrides)
        cfg.apply_env_overrides(environ, skip=set(overrides))
        return cfg

    def apply_env_overrides(self, environ: Mapping[str, str] | None = None, skip=frozenset()) -> None:
        env = os.environ if environ is None else environ
        layout_map = {
            'DUNGEON_FLOOR_SIZE': 'floor_size',
            'DUNGEON_FLOORS_ABOVE': 'floors_above',
            'DUNGEON_FLOORS_BELOW': 'floors_below',
        }
        ranges = {}
        for env_key, attr in layout_map.items():
            if env.get(env_key):
                ranges[attr] = parse_range(env[env_key])
        if ranges and 'layout' not in skip:
            current = {
                'floor_size': self.layout.floor_size,
                'floors_above': self.layout.floors_above,
                'floors_below': self.layout.floors_below,
            }
            current.update(ranges)
            self.layout = DungeonLayoutConfig(**current)
        if env.get('DUNGEON_SEED') and 'seed' not in skip:
            self.seed = int(env['DUNGEON_SEED'])
        if env.get('DUNGEON_ROOM_BUILDERS') and 'builders' not in skip:
            names = tuple(n.strip() for n in env['DUNGEON_ROOM_BUILDERS'].split(',') if n.strip())
            if not names:
                raise ValueError("DUNGEON_ROOM_BUILDERS lists no builders")
            self.builders = names
        if env.get('DUNGEON_MAX_ROOM_ATTEMPTS') and 'max_room_attempts' not in skip:
            attempts = int(env['DUNGEON_MAX_ROOM_ATTEMPTS'])
            if attempts < 1:
                raise ValueError(f"DUNGEON_MAX_ROOM_ATTEMPTS must be positive, got {attempts}")
            self.max_room_attempts = attempts
        if 'DUNGEON_ENABLE_GENERATION_METRICS' in env and 'enable_metrics' not in skip:
            val = env.get('DUNGEON_ENABLE_GENERATION_METRICS', '').lower()
            self.enable_metrics = val not in {'0', 'false', 'no', ''}


__all__ = ["IntRange", "DEFAULT_BUILDERS", "parse_range", "DungeonLayoutConfig", "GenerationConfig"]
