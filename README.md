# rvsim

rvsim is a small simulator for the RV32I base integer instruction set. It
loads a program from a hex memory image and runs it from address 0. When the
program ends with the exit instruction, rvsim prints the low byte of register
`a0`.

## Installing

```
pip install .
```

## Running a program

The `rvsim` command reads a memory image from a file, or from standard input
when no file is given:

```
rvsim program.data
rvsim < program.data
```

The image is a list of hexadecimal tokens separated by whitespace:

- `@XXXXXXXX` sets the load address to the hexadecimal value after the `@`.
- Any other token is one byte. It is stored at the current load address, and
  the address then moves forward by one.

Execution starts at address 0 and stops in one of these cases:

- It reaches the instruction `li a0, 255` (`addi x10, x0, 255`). The
  simulator then prints `a0 & 0xFF` as a decimal number on its own line.
- It reaches a word whose opcode is not one of the RV32I opcodes listed below.
  The simulator then stops without printing anything.

Memory that was never written reads as zero.

An example image:

```
@00000000
13 05 a0 02
13 05 f0 0f
```

The first instruction loads 42 into `a0` and the second is the exit
instruction, so `rvsim` prints `42`.

## Using it from Python

```python
from rvsim.cpu import CPU

cpu = CPU()
cpu.load("@00000000\n13 05 a0 02\n13 05 f0 0f\n")
result = cpu.run()   # 42
```

`CPU.run()` returns the result, or `None` if the program stopped at an unknown
opcode. `CPU.step()` runs one instruction and returns `True` once the machine
has halted. After a run, `cpu.memory.read(n)` gives register `xn` and
`cpu.memory.pc` gives the program counter.

The simulator is made of these modules:

- `rvsim.isa`: the `OpType` (encoding format) and `InsType` (instruction)
  enumerations.
- `rvsim.decoder`: `Operator.decode(word)` turns a 32-bit instruction word
  into its format, its instruction and its three operand fields. It raises
  `DecodeError`, a subclass of `ValueError`, when the function bits do not name
  a valid instruction. The `get_op_type`, `get_ins_type_*` and `get_val_*`
  functions expose the individual decoding steps.
- `rvsim.memory`: `Memory` holds the 32 registers, the program counter and a
  sparse byte-addressed memory. Values and addresses wrap to 32 bits, and
  reading or writing a register outside `x0`–`x31` raises `IndexError`.
  `fetch(address)` decodes the little-endian word at an address.
- `rvsim.alu`: `ALU` carries out each instruction on a `Memory`, either through
  `execute(operator)` or through one method per instruction (`add`, `addi`,
  `lw`, `beq`, ...; `or_` and `and_` for `OR` and `AND`). The helper
  `sext(value, bits)` sign-extends a value.
- `rvsim.cpu`: `CPU` with `load`, `step` and `run`, and `main`, the entry
  point of the `rvsim` command.

Register `x0` is reset to zero after every instruction.

## What it does not do

- Only these opcodes are understood: `LUI`, `AUIPC`, `JAL`, `JALR`, the
  branches, the loads, the stores, and the register-immediate and
  register-register arithmetic. `ECALL`, `EBREAK` and `FENCE`, like any other
  opcode outside this set, stop the program.
- No extensions (multiply/divide, atomics, floating point, compressed
  instructions) and no control and status registers.
- No system calls, memory-mapped input or output, or tracing: the only output
  is the printed result.

## Tests

```
pip install ".[test]"
pytest
```