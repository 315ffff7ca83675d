import pytest
from hypothesis import given
from hypothesis import strategies as st

from corelab.bits import WORD_BITS, tail_zero_count

words = st.integers(min_value=0, max_value=0xFFFF)


def test_empty_is_zero():
    assert tail_zero_count([]) == 0


def test_zero_word_counts_full_width():
    assert tail_zero_count([0]) == WORD_BITS
    assert tail_zero_count([0, 0, 0]) == 3 * WORD_BITS


@pytest.mark.parametrize("k", range(16))
def test_powers_of_two(k):
    assert tail_zero_count([1 << k]) == k


@given(st.integers(min_value=0, max_value=0x7FFF))
def test_odd_values_have_none(n):
    assert tail_zero_count([2 * n + 1]) == 0


@given(st.lists(words), st.lists(words))
def test_sum_is_additive(left, right):
    assert tail_zero_count(left + right) == tail_zero_count(left) + tail_zero_count(
        right
    )


@given(st.integers(min_value=1, max_value=0x7FFF))
def test_doubling_adds_one(n):
    assert tail_zero_count([n * 2]) == tail_zero_count([n]) + 1


def test_accepts_generator():
    assert tail_zero_count(1 << k for k in range(4)) == tail_zero_count([1, 2, 4, 8])


@pytest.mark.parametrize("bad", [-1, 0x10000])
def test_out_of_range_rejected(bad):
    with pytest.raises(ValueError):
        tail_zero_count([bad])