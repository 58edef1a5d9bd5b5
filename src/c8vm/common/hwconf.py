MEMORY_SIZE      = 0x1000
ADDRESS_MASK     = MEMORY_SIZE - 1
FONT_BASE        = 0x000
GLYPH_SIZE       = 5                                    # bytes per hex digit glyph
PROGRAM_START    = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START

REGISTERS     = 16
FLAG_REGISTER = 0xF

STACK_MAX = 128             # Larger than the classic 16 levels

DISPLAY_WIDTH   = 64
DISPLAY_HEIGHT  = 32
MAX_SPRITE_ROWS = 15

KEYS = 16

TICK_RATE                 = 60                          # Timer ticks per second
TICK_INTERVAL             = 1 / TICK_RATE
TICK_EPSILON              = 1e-9                        # Float slack when comparing against TICK_INTERVAL
DEFAULT_CYCLES_PER_SECOND = 1000

FONT = bytes([
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
])
