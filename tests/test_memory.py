"""
Unit tests for the memory map and machine state.

Usage:
  python -m pytest tests/test_memory.py -v
"""

import pytest

from chip8.errors import (
    MemoryAccessError, RomTooLargeError, StackOverflowError, StackUnderflowError,
)
from chip8.memory import Memory
from chip8.state import MachineState


# =============================================================================
#  FONT AND ROM
# =============================================================================

def test_font_loaded_at_0x050():
    memory = Memory()
    assert list(memory.read_block(0x050, 5)) == [0xF0, 0x90, 0x90, 0x90, 0xF0]
    assert list(memory.read_block(memory.glyph_address(0xF), 5)) == [0xF0, 0x80, 0xF0, 0x80, 0x80]
    assert memory.read(0x0A0) == 0
    assert memory.read(0x04F) == 0


def test_rom_copied_verbatim_to_0x200():
    memory = Memory()
    memory.load_rom(bytes([0x12, 0x34, 0xAB]))
    assert memory.read_word(0x200) == 0x1234
    assert memory.read(0x202) == 0xAB
    assert memory.rom_size == 3


def test_rom_filling_program_area_fits():
    memory = Memory()
    memory.load_rom(bytes([0x01]) * (0x1000 - 0x200))
    assert memory.read(0xFFF) == 0x01


def test_rom_too_large():
    memory = Memory()
    with pytest.raises(RomTooLargeError) as excinfo:
        memory.load_rom(bytes(0x1000 - 0x200 + 1))
    assert excinfo.value.capacity == 0xE00


def test_clear_keeps_font():
    memory = Memory()
    memory.load_rom(b"\xFF\xFF")
    memory.clear()
    assert memory.read(0x200) == 0
    assert memory.read(0x050) == 0xF0


# =============================================================================
#  BOUNDS
# =============================================================================

@pytest.mark.parametrize("addr", [-1, 0x1000, 0x10FE])
def test_out_of_range_read(addr):
    with pytest.raises(MemoryAccessError):
        Memory().read(addr)


def test_out_of_range_write():
    with pytest.raises(MemoryAccessError):
        Memory().write(0x1000, 1)


def test_word_straddling_end_is_out_of_range():
    memory = Memory()
    memory.read_word(0xFFE)
    with pytest.raises(MemoryAccessError):
        memory.read_word(0xFFF)


def test_block_bounds():
    memory = Memory()
    memory.write_block(0xFFD, [1, 2, 3])
    with pytest.raises(MemoryAccessError) as excinfo:
        memory.write_block(0xFFE, [1, 2, 3])
    assert excinfo.value.address == 0xFFE
    assert excinfo.value.length == 3


def test_write_masks_to_byte():
    memory = Memory()
    memory.write(0x300, 0x1FF)
    assert memory.read(0x300) == 0xFF


# =============================================================================
#  MACHINE STATE
# =============================================================================

def test_initial_state():
    state = MachineState()
    assert state.pc == 0x200
    assert state.index == 0
    assert state.call_stack == []
    assert not state.registers.any()
    assert not state.keypad.any()
    assert state.timers.delay == 0 and state.timers.sound == 0
    assert not state.display.pixels.any()


def test_stack_limits():
    state = MachineState(stack_depth=2)
    state.push(0x202)
    state.push(0x304)
    with pytest.raises(StackOverflowError):
        state.push(0x406)
    assert state.pop() == 0x304
    assert state.pop() == 0x202
    with pytest.raises(StackUnderflowError):
        state.pop()


def test_first_pressed_key_is_lowest():
    state = MachineState()
    assert state.first_pressed_key() is None
    state.set_key(0xC, True)
    state.set_key(0x3, True)
    assert state.first_pressed_key() == 0x3


def test_reset_keeps_memory():
    state = MachineState()
    state.memory.load_rom(b"\x12\x34")
    state.pc = 0x400
    state.index = 0x123
    state.set_register(5, 9)
    state.push(0x202)
    state.reset()
    assert state.pc == 0x200
    assert state.index == 0
    assert state.get_register(5) == 0
    assert state.call_stack == []
    assert state.memory.read_word(0x200) == 0x1234
