"""Arithmetic, memory access and control-flow semantics of RV32I."""

from __future__ import annotations

from typing import Callable, Dict

from rvsim.decoder import Operator
from rvsim.isa import InsType
from rvsim.memory import Memory

_MASK32 = 0xFFFFFFFF
_SHAMT = 0x1F


def _signed(value: int) -> int:
    value &= _MASK32
    return value - (1 << 32) if value & 0x80000000 else value


def sext(value: int, bits: int) -> int:
    """Sign-extend the low *bits* bits of *value* to a signed 32-bit int."""
    value &= _MASK32
    if value >> (bits - 1):
        value |= (_MASK32 << bits) & _MASK32
    return _signed(value)


class ALU:
    """Executes decoded instructions against a :class:`Memory`."""

    _TWO_OPERANDS = frozenset({InsType.JAL, InsType.LUI, InsType.AUIPC})

    def __init__(self, memory: Memory) -> None:
        self.memory = memory
        self._handlers: Dict[InsType, Callable[..., None]] = {
            InsType.ADD: self.add,
            InsType.SUB: self.sub,
            InsType.SLL: self.sll,
            InsType.SLT: self.slt,
            InsType.SLTU: self.sltu,
            InsType.XOR: self.xor,
            InsType.SRL: self.srl,
            InsType.SRA: self.sra,
            InsType.OR: self.or_,
            InsType.AND: self.and_,
            InsType.LB: self.lb,
            InsType.LH: self.lh,
            InsType.LW: self.lw,
            InsType.LBU: self.lbu,
            InsType.LHU: self.lhu,
            InsType.ADDI: self.addi,
            InsType.SLTI: self.slti,
            InsType.SLTIU: self.sltiu,
            InsType.XORI: self.xori,
            InsType.ORI: self.ori,
            InsType.ANDI: self.andi,
            InsType.SLLI: self.slli,
            InsType.SRLI: self.srli,
            InsType.SRAI: self.srai,
            InsType.JALR: self.jalr,
            InsType.SB: self.sb,
            InsType.SH: self.sh,
            InsType.SW: self.sw,
            InsType.BEQ: self.beq,
            InsType.BNE: self.bne,
            InsType.BLT: self.blt,
            InsType.BGE: self.bge,
            InsType.BLTU: self.bltu,
            InsType.BGEU: self.bgeu,
            InsType.JAL: self.jal,
            InsType.LUI: self.lui,
            InsType.AUIPC: self.auipc,
        }

    def execute(self, op: Operator) -> None:
        """Carry out the decoded instruction *op*."""
        if op.ins is None:
            raise ValueError(f"cannot execute {op.op.name} instruction")
        handler = self._handlers[op.ins]
        first, second, third = op.vals
        if op.ins in self._TWO_OPERANDS:
            handler(first, third)
        else:
            handler(first, second, third)

    # register-register

    def _reg(self, index: int) -> int:
        return self.memory.read(index)

    def _sreg(self, index: int) -> int:
        return _signed(self.memory.read(index))

    def add(self, rd: int, rs1: int, rs2: int) -> None:
        self.memory.write(rd, self._reg(rs1) + self._reg(rs2))

    def sub(self, rd: int, rs1: int, rs2: int) -> None:
        self.memory.write(rd, self._reg(rs1) - self._reg(rs2))

    def sll(self, rd: int, rs1: int, rs2: int) -> None:
        self.memory.write(rd, self._reg(rs1) << (self._reg(rs2) & _SHAMT))

    def slt(self, rd: int, rs1: int, rs2: int) -> None:
        self.memory.write(rd, int(self._sreg(rs1) < self._sreg(rs2)))

    def sltu(self, rd: int, rs1: int, rs2: int) -> None:
        self.memory.write(rd, int(self._reg(rs1) < self._reg(rs2)))

    def xor(self, rd: int, rs1: int, rs2: int) -> None:
        self.memory.write(rd, self._reg(rs1) ^ self._reg(rs2))

    def srl(self, rd: int, rs1: int, rs2: int) -> None:
        self.memory.write(rd, self._reg(rs1) >> (self._reg(rs2) & _SHAMT))

    def sra(self, rd: int, rs1: int, rs2: int) -> None:
        self.memory.write(rd, self._sreg(rs1) >> (self._reg(rs2) & _SHAMT))

    def or_(self, rd: int, rs1: int, rs2: int) -> None:
        self.memory.write(rd, self._reg(rs1) | self._reg(rs2))

    def and_(self, rd: int, rs1: int, rs2: int) -> None:
        self.memory.write(rd, self._reg(rs1) & self._reg(rs2))

    # loads

    def _address(self, rs1: int, imm: int) -> int:
        return self._reg(rs1) + sext(imm, 12)

    def _load(self, address: int, size: int) -> int:
        return int.from_bytes(
            bytes(self.memory.get_byte(address + offset) for offset in range(size)),
            "little",
        )

    def _store(self, address: int, value: int, size: int) -> None:
        data = (value & ((1 << (8 * size)) - 1)).to_bytes(size, "little")
        for offset, byte in enumerate(data):
            self.memory.write_byte(address + offset, byte)

    def lb(self, rd: int, rs1: int, imm: int) -> None:
        self.memory.write(rd, sext(self._load(self._address(rs1, imm), 1), 8))

    def lh(self, rd: int, rs1: int, imm: int) -> None:
        self.memory.write(rd, sext(self._load(self._address(rs1, imm), 2), 16))

    def lw(self, rd: int, rs1: int, imm: int) -> None:
        self.memory.write(rd, self._load(self._address(rs1, imm), 4))

    def lbu(self, rd: int, rs1: int, imm: int) -> None:
        self.memory.write(rd, self._load(self._address(rs1, imm), 1))

    def lhu(self, rd: int, rs1: int, imm: int) -> None:
        self.memory.write(rd, self._load(self._address(rs1, imm), 2))

    # register-immediate

    def addi(self, rd: int, rs1: int, imm: int) -> None:
        self.memory.write(rd, self._reg(rs1) + sext(imm, 12))

    def slti(self, rd: int, rs1: int, imm: int) -> None:
        self.memory.write(rd, int(self._sreg(rs1) < sext(imm, 12)))

    def sltiu(self, rd: int, rs1: int, imm: int) -> None:
        self.memory.write(rd, int(self._reg(rs1) < (sext(imm, 12) & _MASK32)))

    def xori(self, rd: int, rs1: int, imm: int) -> None:
        self.memory.write(rd, self._reg(rs1) ^ (sext(imm, 12) & _MASK32))

    def ori(self, rd: int, rs1: int, imm: int) -> None:
        self.memory.write(rd, self._reg(rs1) | (sext(imm, 12) & _MASK32))

    def andi(self, rd: int, rs1: int, imm: int) -> None:
        self.memory.write(rd, self._reg(rs1) & (sext(imm, 12) & _MASK32))

    def slli(self, rd: int, rs1: int, imm: int) -> None:
        self.memory.write(rd, self._reg(rs1) << (imm & _SHAMT))

    def srli(self, rd: int, rs1: int, imm: int) -> None:
        self.memory.write(rd, self._reg(rs1) >> (imm & _SHAMT))

    def srai(self, rd: int, rs1: int, imm: int) -> None:
        self.memory.write(rd, self._sreg(rs1) >> (imm & _SHAMT))

    def jalr(self, rd: int, rs1: int, imm: int) -> None:
        # The link register is written before rs1 is read.
        self.memory.write(rd, self.memory.pc + 4)
        self.memory.move(self._reg(rs1) + sext(imm, 12))

    # stores

    def sb(self, rs1: int, rs2: int, imm: int) -> None:
        self._store(self._address(rs1, imm), self._reg(rs2), 1)

    def sh(self, rs1: int, rs2: int, imm: int) -> None:
        self._store(self._address(rs1, imm), self._reg(rs2), 2)

    def sw(self, rs1: int, rs2: int, imm: int) -> None:
        self._store(self._address(rs1, imm), self._reg(rs2), 4)

    # jumps and upper immediates

    def jal(self, rd: int, imm: int) -> None:
        pc = self.memory.pc
        self.memory.write(rd, pc + 4)
        self.memory.move(pc + sext(imm, 21))

    def lui(self, rd: int, imm: int) -> None:
        self.memory.write(rd, imm)

    def auipc(self, rd: int, imm: int) -> None:
        self.memory.write(rd, self.memory.pc + sext(imm, 32))

    # branches

    def _branch(self, taken: bool, imm: int) -> None:
        pc = self.memory.pc
        self.memory.move(pc + sext(imm, 13) if taken else pc + 4)

    def beq(self, rs1: int, rs2: int, imm: int) -> None:
        self._branch(self._reg(rs1) == self._reg(rs2), imm)

    def bne(self, rs1: int, rs2: int, imm: int) -> None:
        self._branch(self._reg(rs1) != self._reg(rs2), imm)

    def blt(self, rs1: int, rs2: int, imm: int) -> None:
        self._branch(self._sreg(rs1) < self._sreg(rs2), imm)

    def bge(self, rs1: int, rs2: int, imm: int) -> None:
        self._branch(self._sreg(rs1) >= self._sreg(rs2), imm)

    def bltu(self, rs1: int, rs2: int, imm: int) -> None:
        self._branch(self._reg(rs1) < self._reg(rs2), imm)

    def bgeu(self, rs1: int, rs2: int, imm: int) -> None:
        self._branch(self._reg(rs1) >= self._reg(rs2), imm)