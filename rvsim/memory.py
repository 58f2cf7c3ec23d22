"""Register file, program counter and sparse byte-addressed memory."""

from __future__ import annotations

from rvsim.decoder import Operator

_MASK32 = 0xFFFFFFFF
_REGISTER_COUNT = 32


class Memory:
    """Machine state: 32 registers, the program counter and byte memory.

    Unwritten memory reads as zero. Addresses and register values wrap
    to 32 bits.
    """

    def __init__(self) -> None:
        self.registers = [0] * _REGISTER_COUNT
        self.pc = 0
        self._bytes: dict[int, int] = {}

    def _check(self, index: int) -> None:
        if not 0 <= index < _REGISTER_COUNT:
            raise IndexError(f"no register x{index}")

    def read(self, index: int) -> int:
        """Return the value of register *index*."""
        self._check(index)
        return self.registers[index]

    def write(self, index: int, value: int) -> None:
        """Store *value*, truncated to 32 bits, in register *index*."""
        self._check(index)
        self.registers[index] = value & _MASK32

    def move(self, address: int) -> None:
        """Set the program counter."""
        self.pc = address & _MASK32

    def fetch(self, address: int) -> Operator:
        """Decode the little-endian instruction word stored at *address*."""
        word = int.from_bytes(
            bytes(self.get_byte(address + offset) for offset in range(4)),
            "little",
        )
        return Operator.decode(word)

    def get_byte(self, address: int) -> int:
        return self._bytes.get(address & _MASK32, 0)

    def write_byte(self, address: int, value: int) -> None:
        self._bytes[address & _MASK32] = value & 0xFF