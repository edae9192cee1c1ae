"""
CHIP-8 Interpreter Configuration
"""


class Config:
    """Configuration for interpreter and host behavior."""

    def __init__(self):
        # Timing
        self.tick_rate = 60  # Timer ticks (and frames) per second
        self.cycles_per_tick = 10  # Instructions executed per tick (~600 Hz)

        # Instruction quirks
        self.index_overflow_flag = True  # FX1E sets VF when I passes 0xFFF

        # Machine limits
        self.stack_depth = 16

        # Debug
        self.trace = False  # Log every executed instruction at DEBUG

        # Display
        self.scale = 10  # Host pixels per CHIP-8 pixel
        self.foreground = (255, 255, 255)
        self.background = (0, 0, 0)

        # Audio
        self.tone_hz = 440
        self.volume = 0.25
        self.sample_rate = 44100

        # Keypad             QWERTY
        # 1 2 3 C            1 2 3 4
        # 4 5 6 D     <=     Q W E R
        # 7 8 9 E            A S D F
        # A 0 B F            Z X C V
        self.key_map = {
            '1': 0x1, '2': 0x2, '3': 0x3, '4': 0xC,
            'q': 0x4, 'w': 0x5, 'e': 0x6, 'r': 0xD,
            'a': 0x7, 's': 0x8, 'd': 0x9, 'f': 0xE,
            'z': 0xA, 'x': 0x0, 'c': 0xB, 'v': 0xF,
        }
