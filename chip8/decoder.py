"""
CHIP-8 Instruction Decoder
Maps a 16-bit opcode to an Instruction. Pure and total.
"""

from .instructions import Op, Instruction


# Families dispatched on the low byte
_SYSTEM_OPS = {
    0xE0: Op.CLS,
    0xEE: Op.RET,
}

_KEY_OPS = {
    0x9E: Op.SKP,
    0xA1: Op.SKNP,
}

_MISC_OPS = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I_VX,
    0x29: Op.LD_F_VX,
    0x33: Op.LD_B_VX,
    0x55: Op.LD_I_VX,
    0x65: Op.LD_VX_I,
}

# 8XY_ family, dispatched on the low nibble
_ALU_OPS = {
    0x0: Op.LD_VX_VY,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_VX_VY,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

# Families identified by the top nibble alone
_SIMPLE_OPS = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_VX_NN,
    0x4: Op.SNE_VX_NN,
    0x5: Op.SE_VX_VY,
    0x6: Op.LD_VX_NN,
    0x7: Op.ADD_VX_NN,
    0x9: Op.SNE_VX_VY,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}


def decode(opcode: int) -> Instruction:
    """Decode a 16-bit opcode. Unrecognized patterns decode to NOOP."""
    opcode &= 0xFFFF
    family = opcode >> 12
    low_byte = opcode & 0x00FF
    low_nibble = opcode & 0x000F

    if family == 0x0:
        if opcode & 0x0F00:
            op = Op.SYS
        else:
            op = _SYSTEM_OPS.get(low_byte, Op.SYS)
    elif family == 0x8:
        op = _ALU_OPS.get(low_nibble, Op.NOOP)
    elif family == 0xE:
        op = _KEY_OPS.get(low_byte, Op.NOOP)
    elif family == 0xF:
        op = _MISC_OPS.get(low_byte, Op.NOOP)
    else:
        op = _SIMPLE_OPS[family]

    return Instruction(
        op=op,
        opcode=opcode,
        x=(opcode >> 8) & 0x0F,
        y=(opcode >> 4) & 0x0F,
        addr=opcode & 0x0FFF,
        byte=low_byte,
        nibble=low_nibble,
    )
