"""Iterators that visit every value of a fixed-width integer exactly once."""

from __future__ import annotations

from collections.abc import Iterator


def _check_bits(bits: int) -> int:
    if bits < 1:
        raise ValueError(f"bit width must be positive, got {bits}")
    return bits


class SmallUnsigned(Iterator[int]):
    """Counts 0, 1, 2, ... up to the largest unsigned value of the given width."""

    def __init__(self, bits: int) -> None:
        self.bits = _check_bits(bits)
        self._max = (1 << bits) - 1
        self._cur = 0
        self._yielded = 0
        self._done = False

    def __iter__(self) -> SmallUnsigned:
        return self

    def __next__(self) -> int:
        if self._done:
            raise StopIteration
        old = self._cur
        if old == self._max:
            self._done = True
        else:
            self._cur += 1
        self._yielded += 1
        return old

    def __length_hint__(self) -> int:
        return (1 << self.bits) - self._yielded


class SmallSigned(Iterator[int]):
    """Yields 0, -1, 1, -2, 2, ... ending at the most negative value of the width."""

    def __init__(self, bits: int) -> None:
        self.bits = _check_bits(bits)
        self._min = -(1 << (bits - 1))
        self._cur = 0
        self._yielded = 0
        self._done = False

    def __iter__(self) -> SmallSigned:
        return self

    def __next__(self) -> int:
        if self._done:
            raise StopIteration
        old = self._cur
        if old == 0 and self._min != 0:
            self._cur = -1
        elif old == self._min:
            self._done = True
        elif old > 0:
            self._cur = -old - 1
        else:
            self._cur = -old
        self._yielded += 1
        return old

    def __length_hint__(self) -> int:
        return (1 << self.bits) - self._yielded