"""Unbiased random ordering (Fisher-Yates) for game pools and letter tiles.

This is the only shuffling primitive in the engine; the ordering and
anagram modules build on it.
"""

from collections.abc import Sequence
from typing import TypeVar

from .random_source import RandomSource, random_index, resolve

T = TypeVar("T")


def shuffle(items: Sequence[T], random_source: RandomSource | None = None) -> list[T]:
    """Return a uniformly random permutation of ``items``.

    Walks i from n-1 down to 1, swapping position i with a uniform j in
    [0, i]. Works on a copy; the input is never mutated.

    Args:
        items: Sequence to permute
        random_source: Callable returning floats in [0, 1) (defaults to ``random.random``)

    Returns:
        New list holding the same elements in random order

    Raises:
        RandomSourceError: If the source returns a draw outside [0, 1)
    """
    result = list(items)
    if len(result) <= 1:
        return result

    source = resolve(random_source)
    for i in range(len(result) - 1, 0, -1):
        j = random_index(i + 1, source)
        result[i], result[j] = result[j], result[i]

    return result


def shuffle_string(text: str, random_source: RandomSource | None = None) -> str:
    """Shuffle the characters of ``text`` and join them with single spaces."""
    return " ".join(shuffle(text, random_source))
