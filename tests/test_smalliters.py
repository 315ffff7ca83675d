import operator

import pytest

from corelab.smalliters import SmallSigned, SmallUnsigned


@pytest.mark.parametrize("bits", [8, 16])
def test_signed_count_correct(bits):
    assert sum(1 for _ in SmallSigned(bits)) == 2**bits


@pytest.mark.parametrize("bits", [8, 16])
def test_unsigned_count_correct(bits):
    assert sum(1 for _ in SmallUnsigned(bits)) == 2**bits


def test_signed_visits_every_i8_once():
    values = list(SmallSigned(8))
    assert sorted(values) == list(range(-128, 128))
    assert values[:5] == [0, -1, 1, -2, 2]
    assert values[-1] == -128


def test_unsigned_visits_every_u8_in_order():
    assert list(SmallUnsigned(8)) == list(range(256))


def test_one_bit_widths():
    assert list(SmallSigned(1)) == [0, -1]
    assert list(SmallUnsigned(1)) == [0, 1]


@pytest.mark.parametrize("cls", [SmallSigned, SmallUnsigned])
def test_length_hint_tracks_remaining(cls):
    it = cls(8)
    assert operator.length_hint(it) == 256
    next(it)
    next(it)
    assert operator.length_hint(it) == 254
    rest = list(it)
    assert len(rest) == 254
    assert operator.length_hint(it) == 0


@pytest.mark.parametrize("cls", [SmallSigned, SmallUnsigned])
def test_exhausted_stays_exhausted(cls):
    it = cls(4)
    assert len(list(it)) == 16
    assert list(it) == []
    with pytest.raises(StopIteration):
        next(it)


@pytest.mark.parametrize("cls", [SmallSigned, SmallUnsigned])
def test_rejects_non_positive_width(cls):
    with pytest.raises(ValueError):
        cls(0)