"""
CHIP-8 CPU
Applies decoded instructions to the machine state.
"""

import logging
import random
from typing import Callable, Dict, Optional

from .config import Config
from .decoder import decode
from .errors import ExecutionError, MachineFault
from .instructions import Op, Instruction
from .state import MachineState

logger = logging.getLogger(__name__)


class CPU:
    """
    CHIP-8 instruction executor.

    Every instruction is 2 bytes. Instructions that do not transfer control
    advance the PC by 2; skips advance by 4 when taken. LD Vx, K holds the
    PC in place until a key is down, so the same instruction is re-executed
    each cycle without blocking the host.
    """

    def __init__(self, state: MachineState, config: Optional[Config] = None,
                 rng: Optional[random.Random] = None):
        self.state = state
        self.config = config or Config()
        self.rng = rng or random.Random()

        self.waiting_for_key = False
        self.last_instruction: Optional[Instruction] = None
        self.total_instructions = 0

        self._build_handler_table()

    def step(self) -> Instruction:
        """Fetch, decode and execute one instruction."""
        pc = self.state.pc
        opcode = None
        instruction = None
        try:
            opcode = self.state.memory.read_word(pc)
            instruction = decode(opcode)
            if self.config.trace:
                logger.debug("%03X: %04X  %s", pc, opcode, instruction)
            self.execute(instruction)
        except MachineFault as e:
            raise ExecutionError(pc, opcode, e, str(instruction) if instruction else "") from e

        self.last_instruction = instruction
        self.total_instructions += 1
        return instruction

    def execute(self, instruction: Instruction):
        """Apply a decoded instruction to the machine state."""
        self.handlers[instruction.op](instruction)

    # =========================================================================
    # HANDLER TABLE
    # =========================================================================

    def _build_handler_table(self):
        """Map every Op to its implementation."""
        self.handlers: Dict[Op, Callable[[Instruction], None]] = {
            Op.SYS: self._sys,
            Op.CLS: self._cls,
            Op.RET: self._ret,
            Op.JP: self._jp,
            Op.CALL: self._call,

            # Conditional skips
            Op.SE_VX_NN: lambda i: self._skip_if(self._v(i.x) == i.byte),
            Op.SNE_VX_NN: lambda i: self._skip_if(self._v(i.x) != i.byte),
            Op.SE_VX_VY: lambda i: self._skip_if(self._v(i.x) == self._v(i.y)),
            Op.SNE_VX_VY: lambda i: self._skip_if(self._v(i.x) != self._v(i.y)),
            Op.SKP: lambda i: self._skip_if(self.state.is_key_pressed(self._v(i.x))),
            Op.SKNP: lambda i: self._skip_if(not self.state.is_key_pressed(self._v(i.x))),

            # Register loads and arithmetic
            Op.LD_VX_NN: lambda i: self._set_vx(i.x, i.byte),
            Op.ADD_VX_NN: lambda i: self._set_vx(i.x, self._v(i.x) + i.byte),
            Op.LD_VX_VY: lambda i: self._set_vx(i.x, self._v(i.y)),
            Op.OR: lambda i: self._set_vx(i.x, self._v(i.x) | self._v(i.y)),
            Op.AND: lambda i: self._set_vx(i.x, self._v(i.x) & self._v(i.y)),
            Op.XOR: lambda i: self._set_vx(i.x, self._v(i.x) ^ self._v(i.y)),
            Op.ADD_VX_VY: self._add_vx_vy,
            Op.SUB: self._sub,
            Op.SHR: self._shr,
            Op.SUBN: self._subn,
            Op.SHL: self._shl,
            Op.RND: lambda i: self._set_vx(i.x, self.rng.randint(0, 0xFF) & i.byte),

            # Index register
            Op.LD_I: self._ld_i,
            Op.JP_V0: self._jp_v0,
            Op.ADD_I_VX: self._add_i_vx,
            Op.LD_F_VX: self._ld_f_vx,

            Op.DRW: self._drw,

            # Timers and keypad
            Op.LD_VX_DT: lambda i: self._set_vx(i.x, self.state.timers.delay),
            Op.LD_VX_K: self._ld_vx_k,
            Op.LD_DT_VX: self._ld_dt_vx,
            Op.LD_ST_VX: self._ld_st_vx,

            # Memory transfers
            Op.LD_B_VX: self._ld_b_vx,
            Op.LD_I_VX: self._ld_i_vx,
            Op.LD_VX_I: self._ld_vx_i,

            Op.NOOP: self._noop,
        }

        missing = [op.name for op in Op if op not in self.handlers]
        if missing:
            raise RuntimeError(f"No handler for: {', '.join(missing)}")

    # Register helpers
    def _v(self, reg: int) -> int:
        return int(self.state.registers[reg])

    def _set_vx(self, reg: int, value: int):
        """Write a register and advance to the next instruction."""
        self.state.registers[reg] = value & 0xFF
        self.state.pc += 2

    def _skip_if(self, condition: bool):
        self.state.pc += 4 if condition else 2

    # =========================================================================
    # OPCODE IMPLEMENTATIONS
    # =========================================================================

    def _sys(self, ins: Instruction):
        # Native machine-code routines are not emulated
        self.state.pc += 2

    def _noop(self, ins: Instruction):
        logger.debug("Unknown opcode 0x%04X at PC=0x%03X, ignored", ins.opcode, self.state.pc)
        self.state.pc += 2

    def _cls(self, ins: Instruction):
        self.state.display.clear()
        self.state.pc += 2

    def _ret(self, ins: Instruction):
        self.state.pc = self.state.pop()

    def _jp(self, ins: Instruction):
        self.state.pc = ins.addr

    def _call(self, ins: Instruction):
        self.state.push(self.state.pc + 2)
        self.state.pc = ins.addr

    def _add_vx_vy(self, ins: Instruction):
        total = self._v(ins.x) + self._v(ins.y)
        self._set_vx(ins.x, total)
        self.state.flag = total > 0xFF

    def _sub(self, ins: Instruction):
        vx, vy = self._v(ins.x), self._v(ins.y)
        self._set_vx(ins.x, vx - vy)
        self.state.flag = vx >= vy  # 1 = no borrow

    def _subn(self, ins: Instruction):
        vx, vy = self._v(ins.x), self._v(ins.y)
        self._set_vx(ins.x, vy - vx)
        self.state.flag = vy >= vx

    def _shr(self, ins: Instruction):
        vx = self._v(ins.x)
        self._set_vx(ins.x, vx >> 1)
        self.state.flag = vx & 0x01

    def _shl(self, ins: Instruction):
        vx = self._v(ins.x)
        self._set_vx(ins.x, vx << 1)
        self.state.flag = vx >> 7

    def _ld_i(self, ins: Instruction):
        self.state.index = ins.addr
        self.state.pc += 2

    def _jp_v0(self, ins: Instruction):
        # Not masked to 12 bits; an out-of-range target faults on the next fetch
        self.state.pc = ins.addr + self._v(0)

    def _add_i_vx(self, ins: Instruction):
        self.state.index += self._v(ins.x)
        if self.config.index_overflow_flag:
            self.state.flag = self.state.index > 0x0FFF
        self.state.pc += 2

    def _ld_f_vx(self, ins: Instruction):
        self.state.index = self.state.memory.glyph_address(self._v(ins.x))
        self.state.pc += 2

    def _drw(self, ins: Instruction):
        state = self.state
        sprite = state.memory.read_block(state.index, ins.nibble)
        x = self._v(ins.x) % state.display.WIDTH
        y = self._v(ins.y) % state.display.HEIGHT
        state.flag = state.display.draw(x, y, sprite)
        state.pc += 2

    def _ld_vx_k(self, ins: Instruction):
        key = self.state.first_pressed_key()
        if key is None:
            if not self.waiting_for_key:
                logger.debug("Waiting for key press into V%X", ins.x)
            self.waiting_for_key = True
            return

        self.waiting_for_key = False
        self._set_vx(ins.x, key)

    def _ld_dt_vx(self, ins: Instruction):
        self.state.timers.set_delay(self._v(ins.x))
        self.state.pc += 2

    def _ld_st_vx(self, ins: Instruction):
        self.state.timers.set_sound(self._v(ins.x))
        self.state.pc += 2

    def _ld_b_vx(self, ins: Instruction):
        vx = self._v(ins.x)
        self.state.memory.write_block(self.state.index, [vx // 100, (vx // 10) % 10, vx % 10])
        self.state.pc += 2

    def _ld_i_vx(self, ins: Instruction):
        self.state.memory.write_block(self.state.index, self.state.registers[:ins.x + 1])
        self.state.pc += 2

    def _ld_vx_i(self, ins: Instruction):
        self.state.registers[:ins.x + 1] = self.state.memory.read_block(self.state.index, ins.x + 1)
        self.state.pc += 2
