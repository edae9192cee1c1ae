#!/usr/bin/env python3
"""
CHIP-8 Emulator
Runs a CHIP-8 program in a pygame window.

Usage:
    python main.py <rom_file>
"""

import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

logger = logging.getLogger("chip8")


def show_loading_screen():
    """Show a loading screen while the sprite blitter JIT-compiles."""
    import pygame
    pygame.init()

    screen = pygame.display.set_mode((400, 160))
    pygame.display.set_caption("CHIP-8 - Loading...")

    # Colors
    BG_COLOR = (20, 25, 35)
    BAR_BG = (40, 45, 55)
    BAR_FG = (100, 180, 100)
    TEXT_COLOR = (200, 200, 200)

    font = pygame.font.Font(None, 24)
    small_font = pygame.font.Font(None, 18)

    def update_progress(progress: float, message: str):
        """Update the loading screen."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit()
                sys.exit(0)

        screen.fill(BG_COLOR)

        title = font.render("CHIP-8", True, TEXT_COLOR)
        screen.blit(title, (400//2 - title.get_width()//2, 30))

        status = small_font.render(message, True, (150, 150, 150))
        screen.blit(status, (400//2 - status.get_width()//2, 65))

        # Progress bar
        bar_x, bar_y = 50, 100
        bar_w, bar_h = 300, 20
        pygame.draw.rect(screen, BAR_BG, (bar_x, bar_y, bar_w, bar_h))
        fill_w = int(bar_w * progress)
        if fill_w > 0:
            pygame.draw.rect(screen, BAR_FG, (bar_x, bar_y, fill_w, bar_h))
        pygame.draw.rect(screen, (80, 85, 95), (bar_x, bar_y, bar_w, bar_h), 2)

        pygame.display.flip()

    return update_progress


def main():
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")

    if len(sys.argv) < 2:
        print("Usage: python main.py <rom_file>")
        return 1

    rom_path = sys.argv[1]

    from chip8 import Config, Emulator, RomLoadError, ExecutionError

    config = Config()
    emulator = Emulator(config)

    # Fatal configuration errors are reported before any window opens
    try:
        emulator.load_rom(rom_path)
    except RomLoadError as e:
        print(f"Failed to load ROM: {e}")
        return 1

    update_progress = show_loading_screen()
    update_progress(0.2, "Compiling sprite blitter...")

    # First call triggers Numba compilation
    import numpy as np
    from chip8.display import blit_sprite
    blit_sprite(np.zeros((1, 1), dtype=np.bool_), np.zeros(0, dtype=np.uint8), 0, 0)

    update_progress(0.8, "Loading GUI system...")
    from chip8.gui import EmulatorGUI

    update_progress(1.0, "Ready!")

    import pygame
    pygame.time.wait(200)
    pygame.quit()

    # Print controls to console
    print("=" * 60)
    print(f"  CHIP-8 - {emulator.rom_title}")
    print("=" * 60)
    print("\nKeypad: 1234 / QWER / ASDF / ZXCV")
    print("SPACE=Pause, N=Step, B=Breakpoint, BACKSPACE=Reset, TAB=Turbo, F1=Debug, ESC=Quit")
    print()

    try:
        gui = EmulatorGUI(emulator, config)
        gui.run()
    except ExecutionError as e:
        logger.error("Program halted: %s", e)
        pygame.quit()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
