MEMORY_SIZE      = 0x1000
FONT_BASE        = 0x0000
GLYPH_SIZE       = 5
PROGRAM_START    = 0x0200                               # programs load here
PROGRAM_MAX_SIZE = MEMORY_SIZE - PROGRAM_START

REGISTERS        = 16
FLAG_REGISTER    = 0xF
STACK_DEPTH      = 16
WORD_SIZE        = 2

GRID_WIDTH       = 64
GRID_HEIGHT      = 32

TIMER_HZ         = 60
TICK_HZ          = 720          # instructions per second of the host loop

# 16 glyphs, one per hex digit, 5 rows each (bit 7 = leftmost pixel)
FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,   # 0
    0x20, 0x60, 0x20, 0x20, 0x70,   # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,   # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,   # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,   # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,   # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,   # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,   # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,   # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,   # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,   # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,   # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,   # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,   # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,   # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,   # F
])
