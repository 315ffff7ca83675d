"""Redcode instructions packed into three 16-bit words for the in-process simulator.

The ``ins`` word is laid out as::

    bit    15 14 | 13 12 11 10 9 | 8 7 6    | 5 4 3  | 2 1 0
    field  flags | op-code       | modifier | b-mode | a-mode

The ``a`` and ``b`` words hold field values already reduced into the core,
so negative offsets are stored as ``core_size + offset``.
"""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass

AMODE_MASK = 0b0000_0000_0000_0111
BMODE_MASK = 0b0000_0000_0011_1000
MODIFIER_MASK = 0b0000_0001_1100_0000
OP_CODE_MASK = 0b0011_1110_0000_0000
FLAG_MASK = 0b1100_0000_0000_0000

WORD_MASK = 0xFFFF
DEFAULT_CORE_SIZE = 8000
FIELD_MIN = -128
FIELD_MAX = 127

_default_rng = random.Random()


def _shift(mask: int) -> int:
    """Number of trailing zero bits in a mask."""
    return (mask & -mask).bit_length() - 1


class Flag(enum.IntEnum):
    NORMAL = 0
    START = 1


class OpCode(enum.IntEnum):
    DAT = 0
    SPL = 1
    MOV = 2
    DJN = 3
    ADD = 4
    JMZ = 5
    SUB = 6
    SEQ = 7
    SNE = 8
    SLT = 9
    JMN = 10
    JMP = 11
    NOP = 12
    MUL = 13
    MODM = 14
    DIV = 15


OPCODE_TOTAL = len(OpCode)


class Modifier(enum.IntEnum):
    F = 0
    A = 1
    B = 2
    AB = 3
    BA = 4
    X = 5
    I = 6  # noqa: E741


class Mode(enum.IntEnum):
    DIRECT = 0
    IMMEDIATE = 1
    INDIRECT = 2
    DECREMENT = 3
    INCREMENT = 4

    @property
    def a_symbol(self) -> str:
        return _A_SYMBOLS[self]

    @property
    def b_symbol(self) -> str:
        return _B_SYMBOLS[self]


_A_SYMBOLS = {
    Mode.DIRECT: "$",
    Mode.IMMEDIATE: "#",
    Mode.INDIRECT: "*",
    Mode.DECREMENT: "{",
    Mode.INCREMENT: "}",
}

_B_SYMBOLS = {
    Mode.DIRECT: "$",
    Mode.IMMEDIATE: "#",
    Mode.INDIRECT: "@",
    Mode.DECREMENT: "<",
    Mode.INCREMENT: ">",
}


class ExhaustMode(enum.IntEnum):
    """Addressing mode numbers as the simulator understands them."""

    DIRECT = 0
    IMMEDIATE = 1
    B_INDIRECT = 2
    B_PREDEC = 3
    B_POSTINC = 4
    A_INDIRECT = 5
    A_PREDEC = 6
    A_POSTINC = 7


_A_ENCODE = {
    Mode.DIRECT: ExhaustMode.DIRECT,
    Mode.IMMEDIATE: ExhaustMode.IMMEDIATE,
    Mode.INDIRECT: ExhaustMode.A_INDIRECT,
    Mode.DECREMENT: ExhaustMode.A_PREDEC,
    Mode.INCREMENT: ExhaustMode.A_POSTINC,
}

_B_ENCODE = {
    Mode.DIRECT: ExhaustMode.DIRECT,
    Mode.IMMEDIATE: ExhaustMode.IMMEDIATE,
    Mode.INDIRECT: ExhaustMode.B_INDIRECT,
    Mode.DECREMENT: ExhaustMode.B_PREDEC,
    Mode.INCREMENT: ExhaustMode.B_POSTINC,
}

_A_DECODE = {int(v): k for k, v in _A_ENCODE.items()}
_B_DECODE = {int(v): k for k, v in _B_ENCODE.items()}


def _set_bits(word: int, mask: int, value: int) -> int:
    return (word & ~mask & WORD_MASK) | ((value << _shift(mask)) & mask)


def _get_bits(word: int, mask: int) -> int:
    return (word & mask) >> _shift(mask)


def _normalize_field(offset: int, core_size: int) -> int:
    if not FIELD_MIN <= offset <= FIELD_MAX:
        raise ValueError(f"field offset {offset} outside {FIELD_MIN}..{FIELD_MAX}")
    if offset < 0:
        return (offset + core_size) & WORD_MASK
    return offset


class InstructionBuilder:
    """Chainable builder that assembles a packed instruction."""

    def __init__(self, core_size: int = DEFAULT_CORE_SIZE) -> None:
        self.core_size = core_size
        self._ins = 0
        self._a = 0
        self._b = 0

    def modifier(self, modifier: Modifier) -> InstructionBuilder:
        self._ins = _set_bits(self._ins, MODIFIER_MASK, int(Modifier(modifier)))
        return self

    def opcode(self, opcode: OpCode) -> InstructionBuilder:
        self._ins = _set_bits(self._ins, OP_CODE_MASK, int(OpCode(opcode)))
        return self

    def a_mode(self, mode: Mode) -> InstructionBuilder:
        self._ins = _set_bits(self._ins, AMODE_MASK, int(_A_ENCODE[Mode(mode)]))
        return self

    def b_mode(self, mode: Mode) -> InstructionBuilder:
        self._ins = _set_bits(self._ins, BMODE_MASK, int(_B_ENCODE[Mode(mode)]))
        return self

    def a_field(self, offset: int) -> InstructionBuilder:
        """Set the A-field from a signed 8-bit offset."""
        self._a = _normalize_field(offset, self.core_size)
        return self

    def b_field(self, offset: int) -> InstructionBuilder:
        """Set the B-field from a signed 8-bit offset."""
        self._b = _normalize_field(offset, self.core_size)
        return self

    def freeze(self) -> Instruction:
        return Instruction(a=self._a, b=self._b, ins=self._ins)


@dataclass
class Instruction:
    """A packed instruction: the A and B field words and the ``ins`` word."""

    a: int = 0
    b: int = 0
    ins: int = 0

    def thaw(self, core_size: int = DEFAULT_CORE_SIZE) -> InstructionBuilder:
        builder = InstructionBuilder(core_size)
        builder._ins = self.ins
        builder._a = self.a
        builder._b = self.b
        return builder

    def start(self) -> None:
        """Mark this instruction as the warrior's entry point."""
        self.ins = _set_bits(self.ins, FLAG_MASK, int(Flag.START))

    def flag(self) -> Flag:
        return Flag(_get_bits(self.ins, FLAG_MASK))

    def a_mode(self) -> Mode:
        number = _get_bits(self.ins, AMODE_MASK)
        try:
            return _A_DECODE[number]
        except KeyError:
            raise ValueError(f"not an A-field mode: {number}") from None

    def b_mode(self) -> Mode:
        number = _get_bits(self.ins, BMODE_MASK)
        try:
            return _B_DECODE[number]
        except KeyError:
            raise ValueError(f"not a B-field mode: {number}") from None

    def modifier(self) -> Modifier:
        number = _get_bits(self.ins, MODIFIER_MASK)
        try:
            return Modifier(number)
        except ValueError:
            raise ValueError(f"not a modifier: {number}") from None

    def opcode(self) -> OpCode:
        number = _get_bits(self.ins, OP_CODE_MASK)
        try:
            return OpCode(number)
        except ValueError:
            raise ValueError(f"not an opcode: {number}") from None

    def to_asm(self) -> str:
        """Render as one line of Redcode, newline included."""
        return (
            f"{self.opcode().name}.{self.modifier().name} "
            f"{self.a_mode().a_symbol}{self.a}, "
            f"{self.b_mode().b_symbol}{self.b}\n"
        )

    @classmethod
    def random(
        cls,
        rng: random.Random | None = None,
        core_size: int = DEFAULT_CORE_SIZE,
    ) -> Instruction:
        rng = rng or _default_rng
        return (
            InstructionBuilder(core_size)
            .opcode(rng.choice(list(OpCode)))
            .modifier(rng.choice(list(Modifier)))
            .a_mode(rng.choice(list(Mode)))
            .a_field(rng.randint(FIELD_MIN, FIELD_MAX))
            .b_mode(rng.choice(list(Mode)))
            .b_field(rng.randint(FIELD_MIN, FIELD_MAX))
            .freeze()
        )