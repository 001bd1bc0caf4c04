"""
Randomness sources for dice rolls.

The interpreter never touches the global ``random`` state; it is handed
a source explicitly. Anything with ``randint(low, high)`` (inclusive on
both ends) will do, which includes ``random.Random`` itself.

Usage:
    from dicelang.expression_lang.randomness import FixedSequence, default_source

    rng = default_source(seed=42)     # reproducible pseudo-random rolls
    rng = FixedSequence([2, 3])       # scripted rolls for tests
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Uniform integer source used for dice rolls."""

    def randint(self, low: int, high: int) -> int:
        """Return an integer N with low <= N <= high."""
        ...


def default_source(seed: int | None = None) -> RandomSource:
    """A fresh, private pseudo-random generator."""
    return random.Random(seed)


class FixedSequence:
    """
    Replays a fixed list of die results in order.

    Raises RuntimeError if asked for more values than it holds, or if the
    next value does not fit the requested range.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self.values = list(values)
        self.position = 0

    def randint(self, low: int, high: int) -> int:
        if self.position >= len(self.values):
            raise RuntimeError(f"FixedSequence exhausted after {len(self.values)} values")
        value = self.values[self.position]
        if not low <= value <= high:
            raise RuntimeError(f"FixedSequence value {value} outside requested range [{low}, {high}]")
        self.position += 1
        return value

    @property
    def remaining(self) -> int:
        return len(self.values) - self.position

    def reset(self) -> None:
        """Rewind to the first value."""
        self.position = 0
