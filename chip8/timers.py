"""
CHIP-8 Timer Driver
Delay and sound countdown timers, decremented once per tick.
"""

import logging
from typing import Optional, Callable

logger = logging.getLogger(__name__)


class Timers:
    """
    Two independent 8-bit countdowns.

    Both decrement at the tick rate (60 Hz) while non-zero and stop at 0.
    The tone is audible while the sound timer is non-zero; `on_sound_change`
    is called with the new state on each transition.
    """

    def __init__(self):
        self.delay = 0
        self.sound = 0

        # Callbacks
        self.on_sound_change: Optional[Callable[[bool], None]] = None

    @property
    def sound_active(self) -> bool:
        return self.sound > 0

    def set_delay(self, value: int):
        self.delay = value & 0xFF

    def set_sound(self, value: int):
        was_active = self.sound_active
        self.sound = value & 0xFF
        if self.sound_active != was_active:
            self._sound_changed()

    def tick(self):
        """Advance both timers by one tick."""
        if self.delay > 0:
            self.delay -= 1

        if self.sound > 0:
            self.sound -= 1
            if self.sound == 0:
                self._sound_changed()

    def reset(self):
        was_active = self.sound_active
        self.delay = 0
        self.sound = 0
        if was_active:
            self._sound_changed()

    def _sound_changed(self):
        logger.debug("Sound %s", "on" if self.sound_active else "off")
        if self.on_sound_change:
            self.on_sound_change(self.sound_active)
