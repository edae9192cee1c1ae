"""
CHIP-8 Interpreter Errors
Configuration failures and fatal machine faults.
"""

from typing import Optional


class Chip8Error(RuntimeError):
    """Base class for all interpreter errors."""


# ROM loading (fatal, raised before the cycle loop starts)

class RomLoadError(Chip8Error):
    """ROM file missing, unreadable or empty."""


class RomTooLargeError(RomLoadError):
    """ROM does not fit in program memory."""

    def __init__(self, size: int, capacity: int):
        super().__init__(f"ROM is {size} bytes, only {capacity} bytes of program memory available")
        self.size = size
        self.capacity = capacity


# Machine faults (fatal, raised while executing)

class MachineFault(Chip8Error):
    """A state-machine violation caused by a malformed program."""


class MemoryAccessError(MachineFault):
    """Read or write outside the 4 KiB address space."""

    def __init__(self, address: int, length: int = 1):
        if length > 1:
            message = f"Memory access out of range: 0x{address:04X}..0x{address + length - 1:04X}"
        else:
            message = f"Memory access out of range: 0x{address:04X}"
        super().__init__(message)
        self.address = address
        self.length = length


class StackOverflowError(MachineFault):
    """CALL with a full call stack."""


class StackUnderflowError(MachineFault):
    """RET with an empty call stack."""


class ExecutionError(Chip8Error):
    """A machine fault annotated with the instruction that caused it."""

    def __init__(self, pc: int, opcode: Optional[int], cause: MachineFault, mnemonic: str = ""):
        where = f"PC=0x{pc:04X}"
        if opcode is not None:
            where += f" opcode=0x{opcode:04X}"
        if mnemonic:
            where += f" ({mnemonic})"
        super().__init__(f"{cause} at {where}")
        self.pc = pc
        self.opcode = opcode
        self.cause = cause
        self.mnemonic = mnemonic
