"""Shared pytest fixtures for dicelang tests."""

import pytest

from dicelang.expression_lang.evaluator import Interpreter
from dicelang.expression_lang.randomness import FixedSequence


class RecordingSource:
    """Random source that always rolls the top face and records each request."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int]] = []

    def randint(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        return high


@pytest.fixture
def recording_source() -> RecordingSource:
    """Return a random source that records the ranges it was asked for."""
    return RecordingSource()


@pytest.fixture
def interpreter() -> Interpreter:
    """Return an interpreter with no dice left to roll; fine for pure arithmetic."""
    return Interpreter(rng=FixedSequence([]))
