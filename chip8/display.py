"""
CHIP-8 Display Buffer
64x32 monochrome framebuffer with a JIT-compiled XOR sprite blitter.
"""

import numpy as np
from numba import njit
from typing import Optional, Callable


SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SPRITE_WIDTH = 8


@njit(cache=True)
def blit_sprite(pixels, sprite, x, y):
    """
    XOR a sprite onto the framebuffer with wrap-around at the edges.

    Each sprite byte is one row, most significant bit leftmost. Only set
    sprite bits toggle pixels. Returns True if any set pixel was turned off.
    """
    height = pixels.shape[0]
    width = pixels.shape[1]
    collision = False

    for row in range(sprite.shape[0]):
        bits = sprite[row]
        ty = (y + row) % height
        for col in range(SPRITE_WIDTH):
            if bits & (0x80 >> col):
                tx = (x + col) % width
                if pixels[ty, tx]:
                    collision = True
                    pixels[ty, tx] = False
                else:
                    pixels[ty, tx] = True

    return collision


class Display:
    """
    Monochrome display buffer, indexed [row, column].

    Mutated only by Clear-Screen and Draw. `dirty` is raised on every
    mutation and lowered by whoever presents the frame.
    """

    WIDTH = SCREEN_WIDTH
    HEIGHT = SCREEN_HEIGHT

    def __init__(self):
        self.pixels = np.zeros((self.HEIGHT, self.WIDTH), dtype=np.bool_)
        self.dirty = True
        self.version = 0  # Bumped on every mutation

        # Called after every mutation
        self.on_change: Optional[Callable] = None

    def clear(self):
        self.pixels.fill(False)
        self._changed()

    def draw(self, x: int, y: int, sprite: np.ndarray) -> bool:
        """Draw a sprite at (x, y). Returns the collision flag."""
        collision = blit_sprite(self.pixels, sprite, x, y)
        self._changed()
        return bool(collision)

    def _changed(self):
        self.dirty = True
        self.version += 1
        if self.on_change:
            self.on_change()

    def get_pixel(self, x: int, y: int) -> bool:
        return bool(self.pixels[y % self.HEIGHT, x % self.WIDTH])

    def get_frame(self) -> np.ndarray:
        """Copy of the framebuffer for presentation."""
        return self.pixels.copy()

    def to_rgb(self, foreground=(255, 255, 255), background=(0, 0, 0)) -> np.ndarray:
        """Render the buffer as a (HEIGHT, WIDTH, 3) RGB image."""
        frame = np.empty((self.HEIGHT, self.WIDTH, 3), dtype=np.uint8)
        frame[:] = background
        frame[self.pixels] = foreground
        return frame
