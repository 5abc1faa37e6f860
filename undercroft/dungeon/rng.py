"""Deterministic random stream threaded through the whole generation pipeline."""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class DungeonRandom:
    """Seeded RNG handle for dungeon generation.

    Wraps a private ``random.Random`` so that nothing else in the process can
    advance the stream. Every generation step receives this handle explicitly;
    reproducing a dungeon therefore only needs the seed and the configuration.

    Usage:
        rng = DungeonRandom(1)
        step = rng.randrange(0, 4)
    """

    def __init__(self, seed: int):
        self._seed = seed
        self._rng = random.Random(seed)
        # reported as the rng_draws metric
        self.draws = 0

    @property
    def seed(self) -> int:
        return self._seed

    def randrange(self, lo: int, hi: int) -> int:
        """Return a uniform integer in ``[lo, hi)``.

        An empty range raises ``ValueError``; callers validate their ranges at
        configuration time so this only fires on programming errors.
        """
        self.draws += 1
        return self._rng.randrange(lo, hi)

    def choice(self, seq: Sequence[T]) -> T:
        """Pick one element uniformly; consumes exactly one ``randrange`` draw."""
        if not seq:
            raise ValueError("cannot choose from an empty sequence")
        return seq[self.randrange(0, len(seq))]


__all__ = ["DungeonRandom"]
