# corelab

corelab holds building blocks for Core War experiments: Redcode instructions
in two representations, a way to score battles and tally fitness, plus a
line-echo server with a connection-flooding client for stress testing,
exhaustive integer iterators and a trailing-zero counter.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Redcode instructions

`corelab.instruction` models an instruction with signed offsets and renders
it as a line of Redcode:

```python
import random

from corelab.instruction import Instruction, Mode, Modifier, OpCode

imp = Instruction(OpCode.MOV, Modifier.I, Mode.DIRECT, 0, Mode.DIRECT, 1)
assert imp.to_asm() == "MOV.I $0, $1\n"

rng = random.Random(7)
print(Instruction.random(8000, rng).to_asm())
```

`Instruction.random(core_size, rng)` draws offsets smaller in size than
`core_size // 32`. `OpCode.random`, `Modifier.random` and `Mode.random` draw
single parts; `Mode.random` never picks `INCREMENT` and picks `INDIRECT` twice
as often as the others.

## Packed instructions

`corelab.packed` stores an instruction as three 16-bit words: the A field, the
B field and one word packing the op-code, modifier, both addressing modes and
a start flag. Negative offsets (from -128 to 127) are folded into the core.

```python
from corelab.packed import InstructionBuilder, Mode, Modifier, OpCode

jmp = (
    InstructionBuilder(8000)
    .opcode(OpCode.JMP)
    .modifier(Modifier.B)
    .a_mode(Mode.DIRECT)
    .a_field(-2)
    .b_mode(Mode.DIRECT)
    .b_field(0)
    .freeze()
)
assert jmp.opcode() is OpCode.JMP
assert jmp.a == 7998
print(jmp.to_asm())   # JMP.B $7998, $0
```

`Instruction.thaw(core_size)` turns a packed instruction back into a builder,
`Instruction.start()` sets the start flag, and `Instruction.random(rng,
core_size)` builds a random one. `ExhaustMode` lists the mode numbers as they
are stored in the packed word.

## Scoring

```python
from corelab.outcome import FitnessHistogram, Winner, fitness_bucket

total = Winner.left(3) + Winner.right(5)
assert total == Winner.right(5)

histogram = FitnessHistogram()
histogram.record(42)
assert fitness_bucket(42) == 4
counts = histogram.drain()   # ten counts; the histogram is reset
```

`Winner` values add up round by round: a tie leaves the other side unchanged,
equal sides add their scores, and opposite sides keep the larger score (or
become a tie when the scores are equal). `FitnessHistogram` is thread-safe and
counts scores from 0 to 100 in ten buckets (0..10, 11..20, ..., 91..100);
anything outside that range raises `ValueError`.

## Echo server and flood client

```
corelab-echo-server
corelab-flood
```

`corelab-echo-server` echoes every line a client sends back to it, one thread
per connection. `--max-connections` caps how many connections it serves at
once (256 by default, 0 for no cap); connections beyond the cap are closed as
soon as they are accepted. From Python, `EchoServer(host, port,
max_connections)` is a context manager with `serve_forever()` and
`shutdown()`; `handle_client(reader, writer)` echoes one stream into another.

`corelab-flood` opens connections as fast as it can, holds them open, and logs
the total and the rate every second. `--limit` stops it after that many
attempts; `flood(host, port, limit)` does the same from Python and returns the
open sockets.

Both commands take `--host` (default `localhost`) and `--port` (default 1987).

## Small utilities

```python
from corelab.bits import tail_zero_count
from corelab.smalliters import SmallSigned, SmallUnsigned

assert tail_zero_count([8, 1]) == 3
assert sum(1 for _ in SmallUnsigned(8)) == 256
assert list(SmallSigned(8))[:5] == [0, -1, 1, -2, 2]
```

`tail_zero_count` sums the trailing zero bits of 16-bit values, counting zero
as 16. `SmallUnsigned(bits)` yields every unsigned value of that width in
order. `SmallSigned(bits)` yields every signed value, moving outward from zero
and ending at the most negative one. Both report the remaining count through
`__length_hint__`.

## What corelab does not do

corelab has no evolution loop and no command to run one: it does not build
whole warriors, breed or mutate them, run tournaments or write checkpoints.
It also contains no battle simulator; the instruction and scoring types are
pieces such a program would use, not a program that fights battles.