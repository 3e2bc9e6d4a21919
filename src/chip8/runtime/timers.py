import time
import logging as lg
from typing import Callable, TypeAlias

from chip8.common.hwconf import TIMER_HZ


Clock: TypeAlias = Callable[[], float]

PERIOD = 1.0 / TIMER_HZ


class Countdown:
    ''' 8-bit counter decremented once per timer period while nonzero '''
    value: int
    reference: float

    def __init__(self, name: str, now: float = 0.0):
        self.name = name
        self.value = 0
        self.reference = now

    def set(self, value: int, now: float):
        self.value = value & 0xFF
        self.reference = now

    def advance(self, now: float):
        if self.value == 0:
            return

        if now - self.reference >= PERIOD:
            self.value -= 1
            self.reference = now
            lg.debug(f'{self.name} timer -> {self.value}')


class Timers:
    delay: Countdown
    sound: Countdown

    def __init__(self, clock: Clock = time.monotonic):
        self.clock = clock
        now = clock()
        self.delay = Countdown('Delay', now)
        self.sound = Countdown('Sound', now)

    def set_delay(self, value: int):
        self.delay.set(value, self.clock())

    def set_sound(self, value: int):
        self.sound.set(value, self.clock())

    def advance(self):
        now = self.clock()
        self.delay.advance(now)
        self.sound.advance(now)
