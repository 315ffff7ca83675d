"""Bit counting over 16-bit words."""

from __future__ import annotations

from collections.abc import Iterable

WORD_BITS = 16
_WORD_MAX = (1 << WORD_BITS) - 1


def _trailing_zeros(value: int) -> int:
    if not 0 <= value <= _WORD_MAX:
        raise ValueError(f"{value} is not a 16-bit unsigned value")
    if value == 0:
        return WORD_BITS
    return (value & -value).bit_length() - 1


def tail_zero_count(values: Iterable[int]) -> int:
    """Total of the trailing zero bits of each 16-bit value; zero counts as 16."""
    return sum(_trailing_zeros(value) for value in values)