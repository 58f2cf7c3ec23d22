"""The fetch-decode-execute loop and the command-line entry point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from rvsim.alu import ALU
from rvsim.isa import InsType, OpType
from rvsim.memory import Memory

_HALT_FIELDS = (10, 0, 255)
_JUMPS = frozenset({OpType.B, OpType.J})


class CPU:
    """A single-cycle RV32I machine.

    The program stops at an instruction with an unknown opcode, or at
    ``addi a0, x0, 255``; in the latter case the low byte of ``a0`` is
    taken as the result.
    """

    def __init__(self) -> None:
        self.memory = Memory()
        self.alu = ALU(self.memory)
        self.result: Optional[int] = None

    def load(self, text: str) -> None:
        """Load a hex image: ``@addr`` sets the address, other tokens are bytes."""
        address = 0
        for token in text.split():
            if token.startswith("@"):
                address = int(token[1:], 16)
            else:
                self.memory.write_byte(address, int(token, 16))
                address += 1

    def step(self) -> bool:
        """Execute one instruction; return True once the machine has halted."""
        op = self.memory.fetch(self.memory.pc)
        if op.op is OpType.EXIT:
            return True
        if op.ins is InsType.ADDI and op.vals == _HALT_FIELDS:
            self.result = self.memory.read(10) & 0xFF
            return True

        self.alu.execute(op)
        self.memory.write(0, 0)

        if op.op not in _JUMPS and op.ins is not InsType.JALR:
            self.memory.move(self.memory.pc + 4)
        return False

    def run(self) -> Optional[int]:
        """Run until halted and return the result, if any."""
        while not self.step():
            pass
        return self.result


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="rvsim", description="Run an RV32I hex image."
    )
    parser.add_argument(
        "program", nargs="?", help="hex image file (standard input if omitted)"
    )
    args = parser.parse_args(argv)

    text = Path(args.program).read_text() if args.program else sys.stdin.read()
    cpu = CPU()
    cpu.load(text)
    result = cpu.run()
    if result is not None:
        print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())