"""Decoding of 32-bit RV32I instruction words."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Tuple

from rvsim.isa import InsType, OpType

Fields = Tuple[int, int, int]

_MASK32 = 0xFFFFFFFF

_OPCODES = {
    0b0110011: OpType.R,
    0b0010011: OpType.IA,
    0b0000011: OpType.IM,
    0b1100111: OpType.IC,
    0b0100011: OpType.S,
    0b0010111: OpType.U,
    0b0110111: OpType.U,
    0b1101111: OpType.J,
    0b1100011: OpType.B,
}


class DecodeError(ValueError):
    """Raised when an instruction word has no valid meaning."""


def _word(word: int) -> int:
    return word & _MASK32


def _func3(word: int) -> int:
    return (word >> 12) & 0b111


def _func7(word: int) -> int:
    return _word(word) >> 25


def _select(
    word: int,
    fixed: Mapping[int, InsType],
    split: Optional[Mapping[int, Mapping[int, InsType]]] = None,
) -> InsType:
    func3 = _func3(word)
    if func3 in fixed:
        return fixed[func3]
    if split and func3 in split:
        ins = split[func3].get(_func7(word))
        if ins is not None:
            return ins
    raise DecodeError(f"invalid instruction 0x{_word(word):08x}")


def get_op_type(word: int) -> OpType:
    """Return the encoding format of *word*; unknown opcodes give EXIT."""
    return _OPCODES.get(word & 0x7F, OpType.EXIT)


def get_ins_type_r(word: int) -> InsType:
    return _select(
        word,
        {
            0b111: InsType.AND,
            0b110: InsType.OR,
            0b100: InsType.XOR,
            0b001: InsType.SLL,
            0b010: InsType.SLT,
            0b011: InsType.SLTU,
        },
        {
            0b000: {0b0000000: InsType.ADD, 0b0100000: InsType.SUB},
            0b101: {0b0000000: InsType.SRL, 0b0100000: InsType.SRA},
        },
    )


def get_ins_type_s(word: int) -> InsType:
    return _select(
        word,
        {0b000: InsType.SB, 0b001: InsType.SH, 0b010: InsType.SW},
    )


def get_ins_type_b(word: int) -> InsType:
    return _select(
        word,
        {
            0b000: InsType.BEQ,
            0b111: InsType.BGEU,
            0b110: InsType.BLTU,
            0b100: InsType.BLT,
            0b001: InsType.BNE,
            0b101: InsType.BGE,
        },
    )


def get_ins_type_ia(word: int) -> InsType:
    return _select(
        word,
        {
            0b000: InsType.ADDI,
            0b111: InsType.ANDI,
            0b110: InsType.ORI,
            0b100: InsType.XORI,
            0b001: InsType.SLLI,
            0b010: InsType.SLTI,
            0b011: InsType.SLTIU,
        },
        {0b101: {0b0000000: InsType.SRLI, 0b0100000: InsType.SRAI}},
    )


def get_ins_type_im(word: int) -> InsType:
    return _select(
        word,
        {
            0b000: InsType.LB,
            0b100: InsType.LBU,
            0b001: InsType.LH,
            0b101: InsType.LHU,
            0b010: InsType.LW,
        },
    )


def get_ins_type_ic(word: int) -> InsType:
    return InsType.JALR


def get_ins_type_j(word: int) -> InsType:
    return InsType.JAL


def get_ins_type_u(word: int) -> InsType:
    opcode = word & 0x7F
    if opcode == 0b0110111:
        return InsType.LUI
    if opcode == 0b0010111:
        return InsType.AUIPC
    raise DecodeError(f"invalid instruction 0x{_word(word):08x}")


def _rd(word: int) -> int:
    return (word >> 7) & 0x1F


def _rs1(word: int) -> int:
    return (word >> 15) & 0x1F


def _rs2(word: int) -> int:
    return (word >> 20) & 0x1F


def get_val_r(word: int) -> Fields:
    """Return (rd, rs1, rs2)."""
    return _rd(word), _rs1(word), _rs2(word)


def get_val_s(word: int) -> Fields:
    """Return (rs1, rs2, unsigned 12-bit offset)."""
    word = _word(word)
    imm = ((word >> 7) & 0x1F) + ((word & 0xFE000000) >> 20)
    return _rs1(word), _rs2(word), imm


def get_val_b(word: int) -> Fields:
    """Return (rs1, rs2, unsigned 13-bit branch offset)."""
    word = _word(word)
    imm = (
        (((word >> 7) & 1) << 11)
        + (((word >> 8) & 0xF) << 1)
        + (((word >> 25) & 0x3F) << 5)
        + (((word >> 31) & 1) << 12)
    )
    return _rs1(word), _rs2(word), imm


def get_val_i(word: int) -> Fields:
    """Return (rd, rs1, unsigned 12-bit immediate)."""
    word = _word(word)
    return _rd(word), _rs1(word), word >> 20


def get_val_j(word: int) -> Fields:
    """Return (rd, 0, unsigned 21-bit jump offset)."""
    word = _word(word)
    imm = (
        (word & 0xFF000)
        + (((word >> 20) & 1) << 11)
        + (((word >> 21) & 0x3FF) << 1)
        + ((word >> 31) << 20)
    )
    return _rd(word), 0, imm


def get_val_u(word: int) -> Fields:
    """Return (rd, 0, upper immediate with the low 12 bits cleared)."""
    word = _word(word)
    return _rd(word), 0, word & 0xFFFFF000


_DECODERS: Mapping[OpType, Tuple[Callable[[int], InsType], Callable[[int], Fields]]] = {
    OpType.R: (get_ins_type_r, get_val_r),
    OpType.S: (get_ins_type_s, get_val_s),
    OpType.IA: (get_ins_type_ia, get_val_i),
    OpType.IC: (get_ins_type_ic, get_val_i),
    OpType.IM: (get_ins_type_im, get_val_i),
    OpType.B: (get_ins_type_b, get_val_b),
    OpType.U: (get_ins_type_u, get_val_u),
    OpType.J: (get_ins_type_j, get_val_j),
}


@dataclass(frozen=True)
class Operator:
    """A decoded instruction.

    ``vals`` holds the three operand fields in the order the format uses:
    R and I: (rd, rs1, rs2/imm); S and B: (rs1, rs2, offset);
    J and U: (rd, 0, offset).
    """

    word: int
    op: OpType
    ins: Optional[InsType]
    vals: Fields

    @classmethod
    def decode(cls, word: int) -> "Operator":
        word = _word(word)
        op = get_op_type(word)
        if op is OpType.EXIT:
            return cls(word, op, None, (0, 0, 0))
        ins_of, vals_of = _DECODERS[op]
        return cls(word, op, ins_of(word), vals_of(word))