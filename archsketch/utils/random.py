"""Seeded random stream and scalar helpers. No engine imports.

A RandomStream is created once per generation and threaded through the
context; nothing here holds module-level state.
"""

from __future__ import annotations

import numpy as np

# numpy seeds must be non-negative; fold any Python int into 64 bits.
_SEED_MASK = 0xFFFFFFFFFFFFFFFF


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class RandomStream:
    """Single deterministic stream of uniform draws for one generation."""

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed & _SEED_MASK)

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return float(self._rng.random())

    def chance(self, probability: float) -> bool:
        return self.random() < probability

    def uniform(self, lo: float, hi: float) -> float:
        return lerp(lo, hi, self.random())

    def integer(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi], both ends inclusive."""
        if hi <= lo:
            return lo
        return int(self._rng.integers(lo, hi, endpoint=True))
