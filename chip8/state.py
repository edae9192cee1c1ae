"""
CHIP-8 Machine State
The single mutable data model threaded through the executor.
"""

import numpy as np
from typing import List

from .memory import Memory
from .display import Display
from .timers import Timers
from .errors import StackOverflowError, StackUnderflowError


class MachineState:
    """
    Complete interpreter state.

    - memory: 4 KiB address space
    - registers: V0-VF (VF doubles as carry/borrow/collision flag)
    - index: I register
    - pc: program counter
    - call_stack: return addresses, bounded
    - keypad: 16 key-down flags, written by the input collaborator
    - timers: delay and sound countdowns
    - display: 64x32 framebuffer
    """

    NUM_REGISTERS = 16
    NUM_KEYS = 16
    FLAG = 0xF

    def __init__(self, stack_depth: int = 16):
        self.stack_depth = stack_depth

        self.memory = Memory()
        self.display = Display()
        self.timers = Timers()

        self.registers = np.zeros(self.NUM_REGISTERS, dtype=np.uint8)
        self.index = 0
        self.pc = Memory.PROGRAM_START
        self.call_stack: List[int] = []
        self.keypad = np.zeros(self.NUM_KEYS, dtype=np.bool_)

    def reset(self):
        """Return to power-on state, keeping memory contents (the loaded ROM)."""
        self.registers.fill(0)
        self.index = 0
        self.pc = Memory.PROGRAM_START
        self.call_stack.clear()
        self.keypad.fill(False)
        self.timers.reset()
        self.display.clear()

    # Register access
    def get_register(self, reg: int) -> int:
        return int(self.registers[reg])

    def set_register(self, reg: int, value: int):
        self.registers[reg] = value & 0xFF

    @property
    def flag(self) -> int:
        return int(self.registers[self.FLAG])

    @flag.setter
    def flag(self, value: int):
        self.registers[self.FLAG] = 1 if value else 0

    # Stack operations
    def push(self, address: int):
        if len(self.call_stack) >= self.stack_depth:
            raise StackOverflowError(f"Call stack overflow ({self.stack_depth} entries)")
        self.call_stack.append(address)

    def pop(self) -> int:
        if not self.call_stack:
            raise StackUnderflowError("Return with empty call stack")
        return self.call_stack.pop()

    # Keypad
    def set_key(self, key: int, pressed: bool):
        self.keypad[key & 0x0F] = pressed

    def is_key_pressed(self, key: int) -> bool:
        return bool(self.keypad[key & 0x0F])

    def first_pressed_key(self):
        """Lowest-indexed key currently down, or None."""
        pressed = np.flatnonzero(self.keypad)
        if len(pressed):
            return int(pressed[0])
        return None
