"""Instruction formats and instruction kinds understood by the simulator."""

from enum import Enum, auto


class OpType(Enum):
    """Encoding format of an instruction, derived from its opcode."""

    U = auto()
    J = auto()
    IA = auto()
    IM = auto()
    IC = auto()
    B = auto()
    S = auto()
    R = auto()
    EXIT = auto()


class InsType(Enum):
    """Concrete RV32I instruction."""

    ADD = auto()
    SUB = auto()
    SLL = auto()
    SLT = auto()
    SLTU = auto()
    XOR = auto()
    SRL = auto()
    SRA = auto()
    OR = auto()
    AND = auto()

    LB = auto()
    LH = auto()
    LW = auto()
    LBU = auto()
    LHU = auto()
    ADDI = auto()
    SLTI = auto()
    SLTIU = auto()
    XORI = auto()
    ORI = auto()
    ANDI = auto()
    SLLI = auto()
    SRLI = auto()
    SRAI = auto()
    JALR = auto()

    SB = auto()
    SH = auto()
    SW = auto()

    BEQ = auto()
    BNE = auto()
    BLT = auto()
    BGE = auto()
    BLTU = auto()
    BGEU = auto()

    JAL = auto()

    LUI = auto()
    AUIPC = auto()