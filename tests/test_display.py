"""
Unit tests for the display buffer and sprite blitter.

Usage:
  python -m pytest tests/test_display.py -v
"""

import numpy as np

from chip8.display import Display, blit_sprite


def sprite(*rows):
    return np.array(rows, dtype=np.uint8)


def lit(display):
    """Set of (x, y) pixels that are on."""
    ys, xs = np.nonzero(display.pixels)
    return set(zip(xs.tolist(), ys.tolist()))


# =============================================================================
#  XOR BLIT
# =============================================================================

def test_draw_msb_is_leftmost():
    display = Display()
    display.draw(0, 0, sprite(0b10100000))
    assert lit(display) == {(0, 0), (2, 0)}


def test_double_draw_restores_and_collides():
    display = Display()
    display.draw(10, 5, sprite(0b11000011))
    before = display.pixels.copy()

    shape = sprite(0xF0, 0x90, 0xF0)
    assert display.draw(20, 10, shape) is False
    assert display.draw(20, 10, shape) is True
    assert (display.pixels == before).all()


def test_zero_bits_never_toggle_or_collide():
    display = Display()
    display.draw(1, 0, sprite(0x80))
    collision = display.draw(0, 0, sprite(0x80))
    assert collision is False
    assert lit(display) == {(0, 0), (1, 0)}


def test_collision_when_any_pixel_turns_off():
    display = Display()
    display.draw(0, 0, sprite(0x80))
    assert display.draw(0, 0, sprite(0xC0)) is True
    assert lit(display) == {(1, 0)}


def test_empty_sprite_draws_nothing():
    display = Display()
    assert display.draw(0, 0, np.zeros(0, dtype=np.uint8)) is False
    assert not display.pixels.any()


# =============================================================================
#  WRAP-AROUND
# =============================================================================

def test_horizontal_wrap():
    display = Display()
    display.draw(60, 0, sprite(0xFF))
    assert lit(display) == {(60, 0), (61, 0), (62, 0), (63, 0),
                            (0, 0), (1, 0), (2, 0), (3, 0)}


def test_vertical_wrap():
    display = Display()
    display.draw(0, 30, sprite(0x80, 0x80, 0x80, 0x80))
    assert lit(display) == {(0, 30), (0, 31), (0, 0), (0, 1)}


def test_blit_kernel_on_raw_array():
    pixels = np.zeros((32, 64), dtype=np.bool_)
    assert not blit_sprite(pixels, sprite(0x01), 63, 31)
    assert pixels[31, 6]


# =============================================================================
#  CHANGE SIGNAL
# =============================================================================

def test_mutations_raise_change_signal():
    display = Display()
    calls = []
    display.on_change = lambda: calls.append(True)
    display.dirty = False

    display.draw(0, 0, sprite(0x80))
    assert display.dirty
    assert display.version == 1

    display.clear()
    assert display.version == 2
    assert len(calls) == 2
    assert not display.pixels.any()


def test_to_rgb():
    display = Display()
    display.draw(0, 0, sprite(0x80))
    frame = display.to_rgb((255, 255, 255), (0, 0, 0))
    assert frame.shape == (32, 64, 3)
    assert tuple(frame[0, 0]) == (255, 255, 255)
    assert tuple(frame[0, 1]) == (0, 0, 0)


def test_get_frame_is_a_copy():
    display = Display()
    frame = display.get_frame()
    frame[0, 0] = True
    assert not display.pixels[0, 0]
