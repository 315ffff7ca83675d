import random

import pytest

from corelab.instruction import OPCODE_TOTAL, Instruction, Mode, Modifier, OpCode


def test_random_opcode_covers_every_member():
    rng = random.Random(13)
    drawn = {OpCode.random(rng) for _ in range(3000)}
    assert len(drawn) == OPCODE_TOTAL
    assert OPCODE_TOTAL == 14


def test_to_asm_imp():
    inst = Instruction(OpCode.MOV, Modifier.I, Mode.DIRECT, 0, Mode.DIRECT, 1)
    assert inst.to_asm() == "MOV.I $0, $1\n"


def test_to_asm_field_specific_symbols():
    inst = Instruction(OpCode.JMP, Modifier.B, Mode.INDIRECT, -2, Mode.INDIRECT, 0)
    assert inst.to_asm() == "JMP.B *-2, @0\n"
    dec = Instruction(OpCode.DJN, Modifier.F, Mode.DECREMENT, 1, Mode.DECREMENT, 2)
    assert dec.to_asm().split()[1] == "{1,"
    assert dec.to_asm().split()[2] == "<2"
    inc = Instruction(OpCode.DJN, Modifier.F, Mode.INCREMENT, 1, Mode.INCREMENT, 2)
    assert inc.to_asm().split()[1].startswith("}")
    assert inc.to_asm().split()[2].startswith(">")


def test_random_members():
    rng = random.Random(1)
    for _ in range(200):
        assert OpCode.random(rng) in OpCode
        assert Modifier.random(rng) in Modifier


def test_random_mode_never_increment():
    rng = random.Random(7)
    drawn = {Mode.random(rng) for _ in range(500)}
    assert Mode.INCREMENT not in drawn
    assert drawn == {Mode.IMMEDIATE, Mode.DIRECT, Mode.INDIRECT, Mode.DECREMENT}


def test_random_instruction_offsets_bounded():
    rng = random.Random(3)
    core_size = 8000
    limit = core_size // 32
    insts = [Instruction.random(core_size, rng) for _ in range(300)]
    offsets = [o for inst in insts for o in (inst.a_offset, inst.b_offset)]
    assert max(abs(o) for o in offsets) < limit
    assert min(offsets) < 0 < max(offsets)


def test_random_instruction_reproducible():
    a = Instruction.random(8000, random.Random(42))
    b = Instruction.random(8000, random.Random(42))
    assert a == b


def test_random_instruction_tiny_core_fails():
    with pytest.raises(ValueError):
        Instruction.random(16, random.Random(0))


def test_asm_is_one_line():
    inst = Instruction.random(8000, random.Random(5))
    text = inst.to_asm()
    assert text.endswith("\n")
    assert text.count("\n") == 1
    assert text.startswith(inst.opcode.value + "." + inst.modifier.value + " ")