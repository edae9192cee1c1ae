"""
CHIP-8 Emulator GUI
Pygame host: game display, keypad input, buzzer tone and debug panel.
"""

import logging
import pygame
import numpy as np
from typing import Optional

from .config import Config

logger = logging.getLogger(__name__)


def square_wave(tone_hz: int, sample_rate: int, volume: float, channels: int = 1) -> np.ndarray:
    """One second of a signed 16-bit square wave, shaped for pygame.sndarray."""
    t = np.arange(sample_rate)
    amplitude = int(32767 * volume)
    phase = (t * tone_hz / sample_rate) % 1.0
    wave = np.where(phase < 0.5, amplitude, -amplitude).astype(np.int16)
    if channels > 1:
        wave = np.repeat(wave[:, np.newaxis], channels, axis=1)
    return wave


class Buzzer:
    """
    Looping tone gated by the sound timer and the pause state.

    The tone plays only while the sound timer is active and the emulator is
    running. `sound` may be None when no audio device is available.
    """

    def __init__(self, sound=None):
        self.sound = sound
        self.sound_on = False
        self.paused = False
        self.playing = False

    def set_sound(self, active: bool):
        self.sound_on = active
        self._update()

    def set_paused(self, paused: bool):
        self.paused = paused
        self._update()

    def stop(self):
        self.sound_on = False
        self._update()

    def _update(self):
        should_play = self.sound_on and not self.paused
        if should_play == self.playing:
            return
        self.playing = should_play
        if self.sound is None:
            return
        if should_play:
            self.sound.play(loops=-1)
        else:
            self.sound.stop()


class EmulatorGUI:
    """
    Pygame-based GUI for the CHIP-8 emulator.

    Features:
    - Scaled 64x32 game display
    - QWERTY keypad mapping
    - Square-wave buzzer driven by the sound timer
    - Debug panel with registers, timers and current instruction
    """

    # Colors
    BG_COLOR = (18, 20, 28)
    TEXT_COLOR = (200, 210, 220)
    HIGHLIGHT_COLOR = (80, 140, 200)
    BORDER_COLOR = (50, 55, 65)

    def __init__(self, emulator, config: Optional[Config] = None):
        self.emulator = emulator
        self.config = config or emulator.config
        self.scale = self.config.scale

        display = emulator.display

        # Window dimensions
        self.game_width = display.WIDTH * self.scale
        self.game_height = display.HEIGHT * self.scale
        self.debug_panel_width = 260
        self.show_debug = True

        # Initialize Pygame
        pygame.init()
        self._resize_window()

        pygame.display.set_caption(f"CHIP-8 - {emulator.rom_title or 'No ROM'}")
        self.clock = pygame.time.Clock()

        # Fonts
        pygame.font.init()
        self.font = pygame.font.SysFont('Consolas', 14)
        self.font_small = pygame.font.SysFont('Consolas', 12)
        self.font_title = pygame.font.SysFont('Consolas', 16, bold=True)

        # Surfaces
        self.game_surface = pygame.Surface((display.WIDTH, display.HEIGHT))

        # Audio
        self.buzzer = Buzzer(self._init_audio())
        self.buzzer.set_sound(emulator.timers.sound_active)
        emulator.timers.on_sound_change = self.buzzer.set_sound

        # State
        self.running = True
        self.turbo_mode = False

        # Key mapping (host key -> keypad index)
        self.key_map = {
            pygame.key.key_code(name): key
            for name, key in self.config.key_map.items()
        }

        # FPS tracking
        self.fps_samples = []
        self.last_fps = 0

    def _resize_window(self):
        width = self.game_width + 20
        if self.show_debug:
            width += self.debug_panel_width + 10
        height = max(self.game_height + 60, 380)
        self.screen = pygame.display.set_mode((width, height))

    def _init_audio(self) -> Optional[pygame.mixer.Sound]:
        """Build a one-second looping square wave for the buzzer."""
        try:
            pygame.mixer.init(frequency=self.config.sample_rate, size=-16, channels=1)
        except pygame.error as e:
            logger.warning("Audio unavailable: %s", e)
            return None

        frequency, _, channels = pygame.mixer.get_init()
        wave = square_wave(self.config.tone_hz, frequency, self.config.volume, channels)
        return pygame.sndarray.make_sound(wave)

    def run(self):
        """Main GUI loop."""
        self.running = True

        while self.running:
            self._handle_events()

            if not self.emulator.paused:
                ticks = 4 if self.turbo_mode else 1
                for _ in range(ticks):
                    self.emulator.tick()

            # Breakpoints pause from inside tick(), so sync every frame
            self.buzzer.set_paused(self.emulator.paused)

            self._draw()

            # Frame limiting (unlimited in turbo mode)
            self.clock.tick(0 if self.turbo_mode else self.config.tick_rate)

            # Track FPS
            self.fps_samples.append(self.clock.get_fps())
            if len(self.fps_samples) > 30:
                self.fps_samples.pop(0)
                self.last_fps = sum(self.fps_samples) / len(self.fps_samples)

        # Cleanup
        self.buzzer.stop()
        pygame.quit()

    def _handle_events(self):
        """Handle input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                self.emulator.running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                    self.emulator.running = False

                elif event.key == pygame.K_SPACE:
                    self.emulator.paused = not self.emulator.paused

                elif event.key == pygame.K_BACKSPACE:
                    self.emulator.reset()

                elif event.key == pygame.K_F1:
                    self.show_debug = not self.show_debug
                    self._resize_window()

                elif event.key == pygame.K_TAB:
                    self.turbo_mode = not self.turbo_mode

                elif event.key == pygame.K_n and self.emulator.paused:
                    # Step one instruction
                    self.emulator.step()

                elif event.key == pygame.K_b:
                    self.emulator.toggle_breakpoint(self.emulator.state.pc)

                elif event.key in self.key_map:
                    self.emulator.press_key(self.key_map[event.key])

            elif event.type == pygame.KEYUP:
                if event.key in self.key_map:
                    self.emulator.release_key(self.key_map[event.key])

    def _update_game_surface(self):
        """Copy the display buffer into the game surface."""
        display = self.emulator.display
        frame = display.to_rgb(self.config.foreground, self.config.background)
        pygame.surfarray.blit_array(self.game_surface, frame.swapaxes(0, 1))
        display.dirty = False

    def _draw(self):
        """Draw all GUI elements."""
        if self.emulator.display.dirty:
            self._update_game_surface()

        self.screen.fill(self.BG_COLOR)
        self._draw_game_display()

        if self.show_debug:
            self._draw_debug_panel()

        self._draw_help()
        pygame.display.flip()

    def _draw_game_display(self):
        """Draw the main game display."""
        x, y = 10, 10

        # Border
        pygame.draw.rect(self.screen, self.BORDER_COLOR,
                         (x - 2, y - 2, self.game_width + 4, self.game_height + 4), 2)

        # Scaled game display (nearest neighbour keeps pixels square)
        scaled = pygame.transform.scale(self.game_surface, (self.game_width, self.game_height))
        self.screen.blit(scaled, (x, y))

        # Pause indicator
        if self.emulator.paused:
            pause_text = self.font_title.render("PAUSED", True, (255, 100, 100))
            pause_rect = pause_text.get_rect(center=(x + self.game_width // 2, y + self.game_height // 2))
            pygame.draw.rect(self.screen, (0, 0, 0), pause_rect.inflate(20, 10))
            self.screen.blit(pause_text, pause_rect)

        # FPS
        turbo = "  TURBO" if self.turbo_mode else ""
        fps_text = self.font_small.render(f"FPS: {self.last_fps:.1f}{turbo}", True, self.TEXT_COLOR)
        self.screen.blit(fps_text, (x, y + self.game_height + 5))

    def _draw_debug_panel(self):
        """Draw registers, timers and the current instruction."""
        x = self.game_width + 30
        y = 10

        title = self.font_title.render("CPU Registers", True, self.HIGHLIGHT_COLOR)
        self.screen.blit(title, (x, y))
        y += 22

        state = self.emulator.get_cpu_state()

        # V0-VF in four columns
        col_width = 62
        for i, value in enumerate(state['V']):
            col = i % 4
            row = i // 4
            text = self.font.render(f"V{i:X}:{value:02X}", True, self.TEXT_COLOR)
            self.screen.blit(text, (x + col * col_width, y + row * 18))
        y += 4 * 18 + 8

        lines = [
            f"I:  {state['I']:04X}   PC: {state['PC']:04X}",
            f"SP: {state['SP']:<2d}     DT: {state['DT']:02X}  ST: {state['ST']:02X}",
            f"Key wait: {'yes' if state['Waiting'] else 'no'}",
            f"[I]: {self._format_dump(state['I'])}",
            f"Breaks: {self._format_breakpoints()}",
        ]
        for line in lines:
            text = self.font.render(line, True, self.TEXT_COLOR)
            self.screen.blit(text, (x, y))
            y += 18

        y += 8
        title = self.font_title.render("Last Instruction", True, self.HIGHLIGHT_COLOR)
        self.screen.blit(title, (x, y))
        y += 22
        text = self.font.render(state['Instruction'] or "-", True, self.TEXT_COLOR)
        self.screen.blit(text, (x, y))

    def _format_dump(self, address: int, length: int = 8) -> str:
        """Bytes at I, as DXYN and FX55/FX65 would see them."""
        if address + length > self.emulator.memory.SIZE:
            return "--"
        return " ".join(f"{b:02X}" for b in self.emulator.get_memory_dump(address, length))

    def _format_breakpoints(self) -> str:
        if not self.emulator.breakpoints:
            return "none"
        return " ".join(f"{addr:03X}" for addr in sorted(self.emulator.breakpoints)[:4])

    def _draw_help(self):
        """Draw the controls line."""
        help_text = "ESC quit  SPACE pause  N step  B break  BKSP reset  TAB turbo  F1 debug"
        text = self.font_small.render(help_text, True, (120, 125, 135))
        self.screen.blit(text, (10, self.screen.get_height() - 18))
