"""Building harmony — correlated, seed-derived proportions.

Each base trait hashes (seed, key) on its own, so Harmony never touches the
shared random stream and stays identical however many draws happened before.
"""

from __future__ import annotations

from dataclasses import dataclass

from archsketch.utils.random import lerp

_MASK32 = 0xFFFFFFFF
_KEY_MULTIPLIER = 374761393
_TWO_32 = 4294967296.0

# Trait keys
_MASSIVENESS = 1
_VERTICALITY = 2
_COMPLEXITY = 3
_SYMMETRY = 4
_REGULARITY = 5
_LEFT_BIAS = 6

# Above this, placement collapses to the centre
_SYMMETRY_LOCK = 0.7


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


def trait_hash(seed: int, key: int) -> float:
    """Avalanching 32-bit hash of (seed, key) mapped into [0, 1)."""
    h = (seed + key * _KEY_MULTIPLIER) & _MASK32
    h = _imul(h ^ (h >> 15), h | 1)
    h ^= (h + _imul(h ^ (h >> 7), h | 61)) & _MASK32
    return ((h ^ (h >> 14)) & _MASK32) / _TWO_32


@dataclass(frozen=True)
class Harmony:
    # Base traits in [0, 1)
    massiveness: float
    verticality: float
    complexity: float
    symmetry: float
    regularity: float

    # Derived, used as interpolation weights against Style ranges
    wing_width: float
    wing_height: float
    tower_width: float
    tower_height: float
    left_bias: float
    window_density: float
    ornament_level: float


def create_harmony(seed: int) -> Harmony:
    massiveness = trait_hash(seed, _MASSIVENESS)
    verticality = trait_hash(seed, _VERTICALITY)
    complexity = trait_hash(seed, _COMPLEXITY)
    symmetry = trait_hash(seed, _SYMMETRY)
    regularity = trait_hash(seed, _REGULARITY)

    if symmetry > _SYMMETRY_LOCK:
        left_bias = 0.5
    else:
        left_bias = lerp(0.3, 0.7, trait_hash(seed, _LEFT_BIAS))

    return Harmony(
        massiveness=massiveness,
        verticality=verticality,
        complexity=complexity,
        symmetry=symmetry,
        regularity=regularity,
        wing_width=lerp(0.25, 0.5, massiveness),
        wing_height=lerp(0.4, 0.8, 1 - verticality),
        tower_width=lerp(0.12, 0.3, massiveness),
        tower_height=lerp(0.25, 0.6, verticality),
        left_bias=left_bias,
        window_density=lerp(0.7, 1.3, complexity),
        ornament_level=lerp(0.5, 1.5, complexity),
    )
