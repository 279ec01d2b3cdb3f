"""
Random number sources.

Game systems never touch the process-wide ``random`` module directly.
They take a RandomSource so outcomes can be reproduced by seeding,
or scripted outright in tests.

Usage:
    rng = SeededRandom(seed=42)
    roll = rng.next_int(0, 99)   # both bounds inclusive
"""

from __future__ import annotations

import random
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can produce an integer in a closed range."""

    def next_int(self, low: int, high: int) -> int:
        """Return a uniformly distributed integer N with low <= N <= high."""
        ...


class SeededRandom:
    """RandomSource backed by its own ``random.Random`` instance."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def next_int(self, low: int, high: int) -> int:
        return self._random.randint(low, high)


def roll_percent(rng: RandomSource, chance: int) -> bool:
    """True with ``chance`` percent probability (0-100) using any source."""
    return rng.next_int(0, 99) < chance
