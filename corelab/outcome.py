"""Battle outcomes and the fitness histogram that tallies them."""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass

BUCKETS = 10
MAX_SCORE = 100


class Side(enum.Enum):
    """Which of the two warriors a result refers to."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Winner:
    """The side that won and by how many rounds; a tie has no side."""

    side: Side | None
    score: int = 0

    @classmethod
    def tie(cls) -> Winner:
        return cls(None, 0)

    @classmethod
    def left(cls, score: int) -> Winner:
        return cls(Side.LEFT, score)

    @classmethod
    def right(cls, score: int) -> Winner:
        return cls(Side.RIGHT, score)

    @property
    def is_tie(self) -> bool:
        return self.side is None

    def __add__(self, other: object) -> Winner:
        if not isinstance(other, Winner):
            return NotImplemented
        if self.side is None:
            return other
        if other.side is None:
            return self
        if self.side is other.side:
            return Winner(self.side, self.score + other.score)
        if self.score > other.score:
            return self
        if self.score < other.score:
            return other
        return Winner.tie()


def fitness_bucket(score: int) -> int:
    """Return the histogram bucket for a score: 0..10, 11..20, ..., 91..100."""
    if not 0 <= score <= MAX_SCORE:
        raise ValueError(f"score {score} outside 0..{MAX_SCORE}")
    if score <= 10:
        return 0
    return (score - 1) // 10


class FitnessHistogram:
    """Thread-safe counts of battle scores, bucketed by tens."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts = [0] * BUCKETS

    def record(self, score: int) -> None:
        bucket = fitness_bucket(score)
        with self._lock:
            self._counts[bucket] += 1

    def drain(self) -> tuple[int, ...]:
        """Return the counts gathered so far and reset them to zero."""
        with self._lock:
            counts = tuple(self._counts)
            self._counts = [0] * BUCKETS
        return counts