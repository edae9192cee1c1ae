"""
CHIP-8 Emulator Core
Integrates machine state, CPU and timers into the fetch-decode-execute loop.
"""

import logging
import os
import random
import time
from typing import Optional, Callable
import numpy as np

from .config import Config
from .cpu import CPU
from .errors import RomLoadError
from .state import MachineState

logger = logging.getLogger(__name__)


class Emulator:
    """
    CHIP-8 Emulator - main loop and component integration.

    One tick = `cycles_per_tick` instructions followed by one decrement of
    the delay and sound timers. Ticks run at `tick_rate` (60 Hz), so timer
    speed is independent of instruction throughput.
    """

    def __init__(self, config: Optional[Config] = None, rng: Optional[random.Random] = None):
        self.config = config or Config()
        self.state = MachineState(stack_depth=self.config.stack_depth)
        self.cpu = CPU(self.state, self.config, rng=rng)

        # State
        self.running = False
        self._paused = False
        self._resume_pc: Optional[int] = None  # Breakpoint skipped once after resume

        # Timing
        self.total_ticks = 0

        # Callbacks
        self.on_frame: Optional[Callable[[np.ndarray], None]] = None

        # Debug
        self.debug_enabled = False
        self.breakpoints = set()

        # ROM info
        self.rom_title = ""
        self.rom_loaded = False
        self._rom_data = b""

    @property
    def paused(self) -> bool:
        return self._paused

    @paused.setter
    def paused(self, value: bool):
        if self._paused and not value:
            self._resume_pc = self.state.pc
        self._paused = value

    # Convenience accessors for collaborators
    @property
    def display(self):
        return self.state.display

    @property
    def timers(self):
        return self.state.timers

    @property
    def memory(self):
        return self.state.memory

    def load_rom(self, filepath: str):
        """Load a ROM file. Raises RomLoadError if it cannot be used."""
        if not os.path.isfile(filepath):
            raise RomLoadError(f"ROM file not found: {filepath}")

        try:
            with open(filepath, 'rb') as f:
                rom_data = f.read()
        except OSError as e:
            raise RomLoadError(f"Cannot read ROM {filepath}: {e}") from e

        self.load_rom_bytes(rom_data, title=os.path.splitext(os.path.basename(filepath))[0])

    def load_rom_bytes(self, rom_data: bytes, title: str = ""):
        """Copy a program into memory at 0x200 and restart the machine."""
        if not rom_data:
            raise RomLoadError("ROM is empty")

        self.memory.clear()
        self.memory.load_rom(rom_data)
        self._rom_data = bytes(rom_data)
        self.rom_title = title
        self.rom_loaded = True
        self._restart()

        logger.info("Loaded ROM %r (%d bytes)", title or "<memory>", len(rom_data))

    def reset(self):
        """Reset the machine and reload the current ROM."""
        self.memory.clear()
        if self._rom_data:
            self.memory.load_rom(self._rom_data)
        self._restart()
        logger.info("Reset")

    def _restart(self):
        self.state.reset()
        self.cpu.waiting_for_key = False
        self.cpu.last_instruction = None
        self.total_ticks = 0
        self._paused = False
        self._resume_pc = None

    def step(self):
        """Execute one instruction (ignores breakpoints)."""
        self._resume_pc = None
        return self.cpu.step()

    def tick(self) -> bool:
        """
        Run one tick: the configured number of cycles, then the timers.
        Returns True if the display changed.
        """
        display = self.state.display
        version = display.version
        resume_pc, self._resume_pc = self._resume_pc, None

        for cycle in range(self.config.cycles_per_tick):
            if cycle == 0 and self.state.pc == resume_pc:
                pass  # Leaving the breakpoint we stopped at
            elif self.debug_enabled and self.state.pc in self.breakpoints:
                self.paused = True
                logger.info("Breakpoint at 0x%03X", self.state.pc)
                break
            self.cpu.step()

        self.state.timers.tick()
        self.total_ticks += 1

        return display.version != version

    def run_frame(self) -> np.ndarray:
        """Run one tick. Returns a copy of the display buffer."""
        self.tick()
        return self.state.display.get_frame()

    def run(self):
        """Headless main loop, paced to the tick rate."""
        self.running = True
        frame_time = 1.0 / self.config.tick_rate

        while self.running:
            start = time.perf_counter()

            if not self.paused:
                frame = self.run_frame()

                if self.on_frame:
                    self.on_frame(frame)

            # Frame timing
            elapsed = time.perf_counter() - start
            sleep_time = frame_time - elapsed
            if sleep_time > 0:
                time.sleep(sleep_time)

    # Input handling
    def press_key(self, key: int):
        """Mark keypad key 0x0-0xF as down."""
        self.state.set_key(key, True)

    def release_key(self, key: int):
        self.state.set_key(key, False)

    # Debug methods
    def get_cpu_state(self) -> dict:
        """Get current CPU state for debugging."""
        state = self.state
        return {
            'V': [int(v) for v in state.registers],
            'I': state.index,
            'PC': state.pc,
            'SP': len(state.call_stack),
            'Stack': list(state.call_stack),
            'DT': state.timers.delay,
            'ST': state.timers.sound,
            'Waiting': self.cpu.waiting_for_key,
            'Instruction': str(self.cpu.last_instruction) if self.cpu.last_instruction else "",
        }

    def toggle_breakpoint(self, address: int) -> bool:
        """Set or clear a breakpoint. Returns True if it is now set."""
        if address in self.breakpoints:
            self.breakpoints.discard(address)
            logger.info("Breakpoint cleared at 0x%03X", address)
        else:
            self.breakpoints.add(address)
            logger.info("Breakpoint set at 0x%03X", address)
        self.debug_enabled = bool(self.breakpoints)
        return address in self.breakpoints

    def get_memory_dump(self, start: int, length: int) -> bytes:
        """Dump memory region."""
        return bytes(self.memory.read_block(start, length))
