import pytest

from rvsim.isa import InsType, OpType


def test_op_type_declaration_order():
    names = [OpType(member.value).name for member in OpType]
    assert names == [
        "U", "J", "IA", "IM", "IC", "B", "S", "R", "EXIT",
    ]


def test_ins_type_declaration_order():
    names = [InsType(member.value).name for member in InsType]
    assert names == [
        "ADD", "SUB", "SLL", "SLT", "SLTU", "XOR", "SRL", "SRA", "OR", "AND",
        "LB", "LH", "LW", "LBU", "LHU", "ADDI", "SLTI", "SLTIU", "XORI", "ORI",
        "ANDI", "SLLI", "SRLI", "SRAI", "JALR",
        "SB", "SH", "SW",
        "BEQ", "BNE", "BLT", "BGE", "BLTU", "BGEU",
        "JAL",
        "LUI", "AUIPC",
    ]


def test_ins_type_values_are_unique():
    looked_up = {InsType(member.value) for member in InsType}
    assert len(looked_up) == 37


@pytest.mark.parametrize("member", list(InsType))
def test_ins_type_lookup_round_trip(member):
    assert InsType[member.name] is member
    assert InsType(member.value) is member


@pytest.mark.parametrize("member", list(OpType))
def test_op_type_lookup_round_trip(member):
    assert OpType[member.name] is member
    assert OpType(member.value) is member


def test_unknown_value_raises():
    with pytest.raises(ValueError):
        InsType("MUL")