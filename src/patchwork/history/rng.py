"""
Seeded randomness for reproducible market decks.

The generator is mulberry32 with 32-bit wraparound arithmetic, matching the
web client bit for bit so a seed yields the same deck on every platform.
"""

from __future__ import annotations

import random
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")

_MASK = 0xFFFFFFFF
_MAX_SEED = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a * b."""
    return (a * b) & _MASK


def seeded_random(seed: int) -> Callable[[], float]:
    """Return a mulberry32 generator producing floats in [0, 1)."""
    state = seed & _MASK

    def next_float() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & _MASK
        t = state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
        return ((t ^ (t >> 14)) & _MASK) / 4294967296

    return next_float


def shuffle_with_seed(items: Sequence[T], seed: int) -> List[T]:
    """Fisher-Yates shuffle driven by mulberry32. Input is not modified."""
    result = list(items)
    rand = seeded_random(seed)
    for i in range(len(result) - 1, 0, -1):
        j = int(rand() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result


def shuffle_unseeded(items: Sequence[T], rng: random.Random | None = None) -> List[T]:
    """Fisher-Yates shuffle from an unseeded (or caller-supplied) source."""
    result = list(items)
    rng = rng or random.Random()
    for i in range(len(result) - 1, 0, -1):
        j = rng.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def generate_seed() -> int:
    """Fresh 32-bit unsigned seed."""
    return random.randrange(_MAX_SEED)
