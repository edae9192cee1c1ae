"""
CHIP-8 Interpreter
Fetch-decode-execute engine for the CHIP-8 virtual machine.
"""

from .config import Config
from .decoder import decode
from .emulator import Emulator
from .errors import (
    Chip8Error, RomLoadError, RomTooLargeError, MachineFault,
    MemoryAccessError, StackOverflowError, StackUnderflowError, ExecutionError,
)
from .instructions import Op, Instruction
from .state import MachineState

__all__ = [
    'Config', 'decode', 'Emulator', 'Op', 'Instruction', 'MachineState',
    'Chip8Error', 'RomLoadError', 'RomTooLargeError', 'MachineFault',
    'MemoryAccessError', 'StackOverflowError', 'StackUnderflowError', 'ExecutionError',
]
