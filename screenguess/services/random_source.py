"""Random source handling shared by every component that draws randomness.

A random source is any zero-argument callable returning a float in [0, 1),
e.g. ``random.random`` or ``random.Random(42).random``. Draws are checked on
every call; a bad draw raises ``RandomSourceError`` instead of being clamped.
"""

import math
import random
from collections.abc import Callable

from .errors import RandomSourceError, ValidationError

RandomSource = Callable[[], float]


def resolve(random_source: RandomSource | None) -> RandomSource:
    """Return the injected source, or the process-wide generator."""
    return random_source if random_source is not None else random.random


def draw(random_source: RandomSource) -> float:
    """Draw one value and check it lies in [0, 1).

    Exceptions raised by the source itself propagate unchanged.
    """
    value = random_source()
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RandomSourceError("Random source returned a non-numeric draw", value=value)
    if math.isnan(value) or not 0.0 <= value < 1.0:
        raise RandomSourceError("Random source returned a draw outside [0, 1)", value=value)
    return float(value)


def random_index(bound: int, random_source: RandomSource) -> int:
    """Uniform integer in [0, bound)."""
    if bound < 1:
        raise ValidationError("bound must be positive", field="bound", value=bound)
    return math.floor(draw(random_source) * bound)


def random_int(low: int, high: int, random_source: RandomSource) -> int:
    """Uniform integer in [low, high], both inclusive."""
    if high < low:
        raise ValidationError(
            "high must not be below low",
            field="high",
            value=high,
            constraints=[f"high >= {low}"],
        )
    return low + random_index(high - low + 1, random_source)


class Mulberry32:
    """Seeded 32-bit PRNG usable as a random source.

    Every caller with the same seed sees the same stream, which is what
    the fixed game order relies on.
    """

    def __init__(self, seed: int) -> None:
        self._state = seed & 0xFFFFFFFF

    def __call__(self) -> float:
        self._state = (self._state + 0x6D2B79F5) & 0xFFFFFFFF
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & 0xFFFFFFFF
        return ((t ^ (t >> 14)) & 0xFFFFFFFF) / 4294967296


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & 0xFFFFFFFF
