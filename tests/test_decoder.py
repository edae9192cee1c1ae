"""
Unit tests for the opcode decoder.

Usage:
  python -m pytest tests/test_decoder.py -v
"""

import pytest

from chip8.decoder import decode
from chip8.instructions import Op, Instruction


# =============================================================================
#  OPCODE TABLE
# =============================================================================

OPCODE_TABLE = [
    (0x0123, Op.SYS),
    (0x00E0, Op.CLS),
    (0x00EE, Op.RET),
    (0x1ABC, Op.JP),
    (0x2ABC, Op.CALL),
    (0x3A12, Op.SE_VX_NN),
    (0x4A12, Op.SNE_VX_NN),
    (0x5AB0, Op.SE_VX_VY),
    (0x6A12, Op.LD_VX_NN),
    (0x7A12, Op.ADD_VX_NN),
    (0x8AB0, Op.LD_VX_VY),
    (0x8AB1, Op.OR),
    (0x8AB2, Op.AND),
    (0x8AB3, Op.XOR),
    (0x8AB4, Op.ADD_VX_VY),
    (0x8AB5, Op.SUB),
    (0x8AB6, Op.SHR),
    (0x8AB7, Op.SUBN),
    (0x8ABE, Op.SHL),
    (0x9AB0, Op.SNE_VX_VY),
    (0xAABC, Op.LD_I),
    (0xBABC, Op.JP_V0),
    (0xCA12, Op.RND),
    (0xDAB5, Op.DRW),
    (0xEA9E, Op.SKP),
    (0xEAA1, Op.SKNP),
    (0xFA07, Op.LD_VX_DT),
    (0xFA0A, Op.LD_VX_K),
    (0xFA15, Op.LD_DT_VX),
    (0xFA18, Op.LD_ST_VX),
    (0xFA1E, Op.ADD_I_VX),
    (0xFA29, Op.LD_F_VX),
    (0xFA33, Op.LD_B_VX),
    (0xFA55, Op.LD_I_VX),
    (0xFA65, Op.LD_VX_I),
]


@pytest.mark.parametrize("opcode,op", OPCODE_TABLE, ids=[f"{o:04X}" for o, _ in OPCODE_TABLE])
def test_opcode_table(opcode, op):
    assert decode(opcode).op == op


def test_table_covers_every_instruction():
    """35 opcode patterns plus the catch-all no-op make 36 instructions."""
    assert len(Op) == 36
    assert {op for _, op in OPCODE_TABLE} | {Op.NOOP} == set(Op)


@pytest.mark.parametrize("opcode", [0x8008, 0x800F, 0xE000, 0xE1FF, 0xF0FF, 0xF100])
def test_unrecognized_patterns_decode_to_noop(opcode):
    assert decode(opcode).op == Op.NOOP


def test_zero_opcode_is_sys():
    assert decode(0x0000).op == Op.SYS


def test_skip_register_compare_ignores_low_nibble():
    assert decode(0x5AB3).op == Op.SE_VX_VY
    assert decode(0x9AB7).op == Op.SNE_VX_VY


# =============================================================================
#  OPERAND EXTRACTION
# =============================================================================

def test_set_register_operands():
    """0x6A3F sets register 0xA to 0x3F."""
    ins = decode(0x6A3F)
    assert ins.op == Op.LD_VX_NN
    assert ins.x == 0xA
    assert ins.byte == 0x3F
    assert ins.opcode == 0x6A3F


def test_operand_fields():
    ins = decode(0xD123)
    assert ins.x == 0x1
    assert ins.y == 0x2
    assert ins.nibble == 0x3
    assert ins.byte == 0x23
    assert ins.addr == 0x123


def test_address_operand():
    assert decode(0x1FFF).addr == 0xFFF
    assert decode(0x2200).addr == 0x200


def test_decode_is_total():
    """Every 16-bit value decodes to an instruction."""
    for opcode in range(0x10000):
        assert isinstance(decode(opcode), Instruction)


def test_decode_is_pure():
    assert decode(0x8124) == decode(0x8124)


# =============================================================================
#  MNEMONICS
# =============================================================================

@pytest.mark.parametrize("opcode,text", [
    (0x00E0, "CLS"),
    (0x6A3F, "LD VA, 0x3F"),
    (0x8124, "ADD V1, V2"),
    (0xD125, "DRW V1, V2, 5"),
    (0xA2F0, "LD I, 0x2F0"),
    (0xF355, "LD [I], V3"),
    (0x8008, "DW 0x8008"),
])
def test_mnemonic(opcode, text):
    assert str(decode(opcode)) == text
