import time
import logging as lg
from typing import Iterator

from chip8.common.hwconf import (
    MEMORY_SIZE, FONT_BASE, FONT, PROGRAM_START, PROGRAM_MAX_SIZE,
    REGISTERS, GRID_WIDTH, GRID_HEIGHT
)
from chip8.runtime.timers import Timers, Clock


class State():
    memory: bytearray
    v: list[int]                # General purpose registers, VF is the flag
    i: int                      # Index register
    pc: int                     # Program counter
    stack: list[int]            # Return addresses
    grid: list[bool]            # Framebuffer, row-major
    timers: Timers
    waiting: int | None         # Register awaiting a key press
    drawn: bool                 # Framebuffer changed since the last render

    def __init__(self, program: bytes = b'', clock: Clock = time.monotonic):
        if len(program) > PROGRAM_MAX_SIZE:
            raise ValueError(f'Program of {len(program)} bytes does not fit into memory')

        self.memory = bytearray(MEMORY_SIZE)
        self.memory[FONT_BASE:FONT_BASE + len(FONT)] = FONT
        self.memory[PROGRAM_START:PROGRAM_START + len(program)] = program

        self.v = [0] * REGISTERS
        self.i = 0
        self.pc = PROGRAM_START
        self.stack = []
        self.grid = [False] * (GRID_WIDTH * GRID_HEIGHT)
        self.timers = Timers(clock)
        self.waiting = None
        self.drawn = False

    # - Framebuffer - #

    def pixel(self, x: int, y: int) -> bool:
        return self.grid[(y % GRID_HEIGHT) * GRID_WIDTH + (x % GRID_WIDTH)]

    def flip(self, x: int, y: int) -> bool:
        ''' XORs one cell on, returns True if it was switched off '''
        inx = (y % GRID_HEIGHT) * GRID_WIDTH + (x % GRID_WIDTH)
        was_on = self.grid[inx]
        self.grid[inx] = not was_on
        return was_on

    def clear(self):
        self.grid[:] = [False] * (GRID_WIDTH * GRID_HEIGHT)

    def rows(self) -> Iterator[list[bool]]:
        for y in range(GRID_HEIGHT):
            yield self.grid[y * GRID_WIDTH:(y + 1) * GRID_WIDTH]

    # - Memory - #

    def read(self, offset: int) -> int:
        return self.memory[(self.i + offset) % MEMORY_SIZE]

    def write(self, offset: int, value: int):
        self.memory[(self.i + offset) % MEMORY_SIZE] = value & 0xFF

    # - Helpers - #

    def debug_dump(self):
        state = [f'{k}:{v:X}' for k, v in {
            'PC': self.pc,
            'I': self.i,
            'DT': self.timers.delay.value,
            'ST': self.timers.sound.value
        }.items()]

        state.extend([f'V{i:X}:{self.v[i]:X}' for i in range(len(self.v))])

        lg.debug(' '.join(state))
