"""
CHIP-8 Memory
4 KiB flat address space with the hex font and program area.
"""

import logging
import numpy as np

from .errors import MemoryAccessError, RomTooLargeError

logger = logging.getLogger(__name__)


class Memory:
    """
    CHIP-8 address space.

    Memory map:
    - 0x000-0x1FF: Interpreter area (font glyphs at 0x050-0x09F)
    - 0x200-0xFFF: Program ROM and work RAM

    Every access is bounds-checked; addresses never wrap.
    """

    SIZE = 0x1000
    PROGRAM_START = 0x200
    FONT_START = 0x050
    GLYPH_SIZE = 5

    # Hex digit glyphs 0-F, 4 pixels wide, 5 rows each
    FONT = np.array([
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ], dtype=np.uint8)

    def __init__(self):
        self.ram = np.zeros(self.SIZE, dtype=np.uint8)
        self.rom_size = 0
        self.load_font()

    def load_font(self):
        """Copy the hex font into the interpreter area."""
        self.ram[self.FONT_START:self.FONT_START + len(self.FONT)] = self.FONT

    def glyph_address(self, digit: int) -> int:
        """Address of the glyph for a hex digit. Values above 0xF are not masked."""
        return self.FONT_START + self.GLYPH_SIZE * digit

    def load_rom(self, rom_data: bytes):
        """Copy a program verbatim to 0x200."""
        capacity = self.SIZE - self.PROGRAM_START
        if len(rom_data) > capacity:
            raise RomTooLargeError(len(rom_data), capacity)

        self.ram[self.PROGRAM_START:] = 0
        rom = np.frombuffer(rom_data, dtype=np.uint8)
        self.ram[self.PROGRAM_START:self.PROGRAM_START + len(rom)] = rom
        self.rom_size = len(rom)
        logger.debug("Loaded %d bytes at 0x%03X", self.rom_size, self.PROGRAM_START)

    def clear(self):
        """Zero all memory and reload the font."""
        self.ram.fill(0)
        self.rom_size = 0
        self.load_font()

    def _check(self, addr: int, length: int = 1):
        if addr < 0 or addr + length > self.SIZE:
            raise MemoryAccessError(addr, length)

    def read(self, addr: int) -> int:
        self._check(addr)
        return int(self.ram[addr])

    def write(self, addr: int, value: int):
        self._check(addr)
        self.ram[addr] = value & 0xFF

    def read_word(self, addr: int) -> int:
        """Read a big-endian 16-bit word (opcode fetch)."""
        self._check(addr, 2)
        return (int(self.ram[addr]) << 8) | int(self.ram[addr + 1])

    def read_block(self, addr: int, length: int) -> np.ndarray:
        """Return a copy of `length` bytes starting at `addr`."""
        if length == 0:
            return np.zeros(0, dtype=np.uint8)
        self._check(addr, length)
        return self.ram[addr:addr + length].copy()

    def write_block(self, addr: int, data) -> None:
        length = len(data)
        if length == 0:
            return
        self._check(addr, length)
        self.ram[addr:addr + length] = np.asarray(data, dtype=np.uint8)
