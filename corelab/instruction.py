"""Redcode instructions with signed offsets, as used by the pmars-based search."""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass

_default_rng = random.Random()


class OpCode(enum.Enum):
    DAT = "DAT"
    MOV = "MOV"
    ADD = "ADD"
    SUB = "SUB"
    MUL = "MUL"
    DIV = "DIV"
    MOD = "MOD"
    JMP = "JMP"
    JMZ = "JMZ"
    JMN = "JMN"
    DJN = "DJN"
    SPL = "SPL"
    CMP = "CMP"
    SLT = "SLT"

    @classmethod
    def random(cls, rng: random.Random | None = None) -> OpCode:
        return (rng or _default_rng).choice(list(cls))


OPCODE_TOTAL = len(OpCode)


class Modifier(enum.Enum):
    A = "A"
    B = "B"
    AB = "AB"
    BA = "BA"
    F = "F"
    X = "X"
    I = "I"  # noqa: E741

    @classmethod
    def random(cls, rng: random.Random | None = None) -> Modifier:
        return (rng or _default_rng).choice(list(cls))


class Mode(enum.Enum):
    """Addressing mode, valued by its (A-field, B-field) symbols."""

    IMMEDIATE = ("#", "#")
    DIRECT = ("$", "$")
    INDIRECT = ("*", "@")
    DECREMENT = ("{", "<")
    INCREMENT = ("}", ">")

    @property
    def a_symbol(self) -> str:
        return self.value[0]

    @property
    def b_symbol(self) -> str:
        return self.value[1]

    @classmethod
    def random(cls, rng: random.Random | None = None) -> Mode:
        # Increment is never drawn; indirect is drawn twice as often.
        return (rng or _default_rng).choice(_RANDOM_MODES)


_RANDOM_MODES = (
    Mode.IMMEDIATE,
    Mode.DIRECT,
    Mode.INDIRECT,
    Mode.DECREMENT,
    Mode.INDIRECT,
)


def _random_offset(limit: int, rng: random.Random) -> int:
    offset = rng.randrange(0, limit)
    return -offset if rng.random() < 0.5 else offset


@dataclass(frozen=True)
class Instruction:
    opcode: OpCode
    modifier: Modifier
    a_mode: Mode
    a_offset: int
    b_mode: Mode
    b_offset: int

    @classmethod
    def random(cls, core_size: int, rng: random.Random | None = None) -> Instruction:
        """Random instruction with offsets smaller in size than core_size // 32."""
        rng = rng or _default_rng
        limit = core_size // 32
        return cls(
            opcode=OpCode.random(rng),
            modifier=Modifier.random(rng),
            a_mode=Mode.random(rng),
            a_offset=_random_offset(limit, rng),
            b_mode=Mode.random(rng),
            b_offset=_random_offset(limit, rng),
        )

    def to_asm(self) -> str:
        """Render as one line of Redcode, newline included."""
        return (
            f"{self.opcode.value}.{self.modifier.value} "
            f"{self.a_mode.a_symbol}{self.a_offset}, "
            f"{self.b_mode.b_symbol}{self.b_offset}\n"
        )