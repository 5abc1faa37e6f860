"""Room builder capability and the helpers the stochastic builders share.

A room builder is anything with ``rows``, ``cols`` and
``generate(requirement, rng) -> RoomGrid``. The four variants in this package
are independent frozen dataclasses; they are looked up by name through
``make_builder`` rather than sharing a base class.

Acceptance rule shared by every builder: the returned room's pathing set
touches exactly the requested planar borders. Builders that cannot guarantee
that by construction regenerate until it holds, bounded by ``max_attempts``
when one is configured.
"""

from __future__ import annotations

import itertools
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from ..logging_utils import get_logger
from .cells import Direction
from .errors import UngeneratableRequirementError
from .floor import RoomRequirement
from .rng import DungeonRandom
from .rooms import RoomGrid
from .tiles import WALL

log = get_logger("undercroft.dungeon.builders")


class RoomBuilder(Protocol):
    @property
    def rows(self) -> int: ...

    @property
    def cols(self) -> int: ...

    def generate(self, requirement: RoomRequirement, rng: DungeonRandom) -> RoomGrid: ...


def requested_borders(requirement: RoomRequirement) -> Tuple[Direction, ...]:
    """Planar exits of the requirement, first occurrence order, duplicates dropped."""
    planar = Direction.planar()
    seen: List[Direction] = []
    for d in requirement.exits:
        if d in planar and d not in seen:
            seen.append(d)
    return tuple(seen)


def footprint_borders(room: RoomGrid) -> List[Direction]:
    """Borders touched by any non-wall tile, reachable or not."""
    return room.hit_borders([i for i, t in enumerate(room.tiles) if t != WALL])


def seal_unrequested(room: RoomGrid, requested: Sequence[Direction]) -> List[Direction]:
    sealed = [d for d in footprint_borders(room) if d not in requested]
    for direction in sealed:
        room.close_side(direction)
    room.refresh_pathing()
    return sealed


def meets_requirement(room: RoomGrid, requested: Sequence[Direction]) -> bool:
    if not room.pathing:
        return False
    return set(room.hit_borders()) == set(requested)


def attempt_budget(max_attempts: Optional[int]) -> Iterable[int]:
    """Attempt numbers starting at 1; endless when ``max_attempts`` is None."""
    if max_attempts is None:
        return itertools.count(1)
    return range(1, max_attempts + 1)


def generate_with_retries(
    name: str,
    requirement: RoomRequirement,
    max_attempts: Optional[int],
    attempt: Callable[[Tuple[Direction, ...]], RoomGrid],
) -> RoomGrid:
    """Run ``attempt`` until it yields a room meeting the requirement.

    ``attempt`` receives the requested borders and returns a sealed room with
    fresh pathing. Stair flags are copied from the requirement on success.
    """
    requested = requested_borders(requirement)
    tried = 0
    for tried in attempt_budget(max_attempts):
        room = attempt(requested)
        if meets_requirement(room, requested):
            room.stair_up = requirement.stair_up
            room.stair_down = requirement.stair_down
            if tried > 1:
                log.debug(event="room_regenerated", builder=name, attempts=tried)
            return room
    log.warn(event="room_ungeneratable", builder=name, attempts=tried, exits=",".join(map(str, requested)) or "-")
    raise UngeneratableRequirementError(name, requirement, tried)


def _registry() -> Dict[str, Callable[..., RoomBuilder]]:
    # Imported lazily: the variant modules import the helpers above.
    from .automata import AutomataRoomBuilder
    from .drunkard import DrunkardMode, DrunkardRoomBuilder
    from .grid import GridRoomBuilder
    from .rectangles import RectangleCorridorRoomBuilder

    return {
        "automata": lambda max_attempts=None: AutomataRoomBuilder(max_attempts=max_attempts),
        "drunkard": lambda max_attempts=None: DrunkardRoomBuilder(max_attempts=max_attempts),
        "cavern": lambda max_attempts=None: DrunkardRoomBuilder(
            mode=DrunkardMode.REVERSE_CENTER, max_attempts=max_attempts
        ),
        "grid": lambda max_attempts=None: GridRoomBuilder(),
        "rectangles": lambda max_attempts=None: RectangleCorridorRoomBuilder(),
    }


BUILDER_NAMES = ("automata", "drunkard", "cavern", "grid", "rectangles")


def make_builder(name: str, max_attempts: Optional[int] = None) -> RoomBuilder:
    factories = _registry()
    key = name.strip().lower()
    if key not in factories:
        raise ValueError(f"unknown room builder {name!r}; expected one of {', '.join(BUILDER_NAMES)}")
    return factories[key](max_attempts=max_attempts)


def build_pool(names: Sequence[str], max_attempts: Optional[int] = None) -> List[RoomBuilder]:
    if not names:
        raise ValueError("room builder pool must not be empty")
    return [make_builder(n, max_attempts) for n in names]


def default_builders(max_attempts: Optional[int] = None) -> List[RoomBuilder]:
    return build_pool(("automata", "drunkard", "grid", "rectangles"), max_attempts)


__all__ = [
    "RoomBuilder",
    "BUILDER_NAMES",
    "requested_borders",
    "footprint_borders",
    "seal_unrequested",
    "meets_requirement",
    "attempt_budget",
    "generate_with_retries",
    "make_builder",
    "build_pool",
    "default_builders",
]
