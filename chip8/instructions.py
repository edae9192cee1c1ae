"""
CHIP-8 Instruction Set
The closed set of decoded instructions and their assembler mnemonics.
"""

from dataclasses import dataclass
from enum import Enum, auto


class Op(Enum):
    """Every instruction the decoder can produce."""
    SYS = auto()        # 0NNN
    CLS = auto()        # 00E0
    RET = auto()        # 00EE
    JP = auto()         # 1NNN
    CALL = auto()       # 2NNN
    SE_VX_NN = auto()   # 3XNN
    SNE_VX_NN = auto()  # 4XNN
    SE_VX_VY = auto()   # 5XY0
    LD_VX_NN = auto()   # 6XNN
    ADD_VX_NN = auto()  # 7XNN
    LD_VX_VY = auto()   # 8XY0
    OR = auto()         # 8XY1
    AND = auto()        # 8XY2
    XOR = auto()        # 8XY3
    ADD_VX_VY = auto()  # 8XY4
    SUB = auto()        # 8XY5
    SHR = auto()        # 8XY6
    SUBN = auto()       # 8XY7
    SHL = auto()        # 8XYE
    SNE_VX_VY = auto()  # 9XY0
    LD_I = auto()       # ANNN
    JP_V0 = auto()      # BNNN
    RND = auto()        # CXNN
    DRW = auto()        # DXYN
    SKP = auto()        # EX9E
    SKNP = auto()       # EXA1
    LD_VX_DT = auto()   # FX07
    LD_VX_K = auto()    # FX0A
    LD_DT_VX = auto()   # FX15
    LD_ST_VX = auto()   # FX18
    ADD_I_VX = auto()   # FX1E
    LD_F_VX = auto()    # FX29
    LD_B_VX = auto()    # FX33
    LD_I_VX = auto()    # FX55
    LD_VX_I = auto()    # FX65
    NOOP = auto()       # anything else


# Assembler text per op; fields are filled from the instruction
MNEMONICS = {
    Op.SYS: "SYS 0x{addr:03X}",
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP 0x{addr:03X}",
    Op.CALL: "CALL 0x{addr:03X}",
    Op.SE_VX_NN: "SE V{x:X}, 0x{byte:02X}",
    Op.SNE_VX_NN: "SNE V{x:X}, 0x{byte:02X}",
    Op.SE_VX_VY: "SE V{x:X}, V{y:X}",
    Op.LD_VX_NN: "LD V{x:X}, 0x{byte:02X}",
    Op.ADD_VX_NN: "ADD V{x:X}, 0x{byte:02X}",
    Op.LD_VX_VY: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD_VX_VY: "ADD V{x:X}, V{y:X}",
    Op.SUB: "SUB V{x:X}, V{y:X}",
    Op.SHR: "SHR V{x:X}",
    Op.SUBN: "SUBN V{x:X}, V{y:X}",
    Op.SHL: "SHL V{x:X}",
    Op.SNE_VX_VY: "SNE V{x:X}, V{y:X}",
    Op.LD_I: "LD I, 0x{addr:03X}",
    Op.JP_V0: "JP V0, 0x{addr:03X}",
    Op.RND: "RND V{x:X}, 0x{byte:02X}",
    Op.DRW: "DRW V{x:X}, V{y:X}, {nibble}",
    Op.SKP: "SKP V{x:X}",
    Op.SKNP: "SKNP V{x:X}",
    Op.LD_VX_DT: "LD V{x:X}, DT",
    Op.LD_VX_K: "LD V{x:X}, K",
    Op.LD_DT_VX: "LD DT, V{x:X}",
    Op.LD_ST_VX: "LD ST, V{x:X}",
    Op.ADD_I_VX: "ADD I, V{x:X}",
    Op.LD_F_VX: "LD F, V{x:X}",
    Op.LD_B_VX: "LD B, V{x:X}",
    Op.LD_I_VX: "LD [I], V{x:X}",
    Op.LD_VX_I: "LD V{x:X}, [I]",
    Op.NOOP: "DW 0x{opcode:04X}",
}


@dataclass(frozen=True)
class Instruction:
    """
    A decoded instruction.

    All operand fields are extracted for every opcode; each op reads only
    the ones it uses.
    """
    op: Op
    opcode: int = 0
    x: int = 0       # bits 8-11
    y: int = 0       # bits 4-7
    addr: int = 0    # NNN, bits 0-11
    byte: int = 0    # NN, bits 0-7
    nibble: int = 0  # N, bits 0-3

    def __str__(self) -> str:
        return MNEMONICS[self.op].format(
            opcode=self.opcode, x=self.x, y=self.y,
            addr=self.addr, byte=self.byte, nibble=self.nibble,
        )
