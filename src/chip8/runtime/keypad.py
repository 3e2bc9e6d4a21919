import logging as lg
from enum import IntEnum
from typing import Callable, Protocol


class Key(IntEnum):
    KEY_0 = 0x0
    KEY_1 = 0x1
    KEY_2 = 0x2
    KEY_3 = 0x3
    KEY_4 = 0x4
    KEY_5 = 0x5
    KEY_6 = 0x6
    KEY_7 = 0x7
    KEY_8 = 0x8
    KEY_9 = 0x9
    KEY_A = 0xA
    KEY_B = 0xB
    KEY_C = 0xC
    KEY_D = 0xD
    KEY_E = 0xE
    KEY_F = 0xF

    @classmethod
    def parse(cls, symbol: str) -> 'Key':
        return cls(int(symbol, 16))

    def __str__(self) -> str:
        return f'{self.value:X}'


class KeyState(Protocol):
    ''' Host capability: is the key currently held '''

    def is_key_down(self, key: Key) -> bool:
        ...


class NoKeys:
    def is_key_down(self, key: Key) -> bool:
        return False


class CallbackKeyState:
    def __init__(self, callback: Callable[[Key], bool]):
        self.callback = callback

    def is_key_down(self, key: Key) -> bool:
        return self.callback(key)


class Keypad:
    ''' Answers key queries from the host state plus presses seen this tick '''
    pressed: set[Key]

    def __init__(self, host: KeyState | None = None):
        self.host = host if host is not None else NoKeys()
        self.pressed = set()

    def press(self, key: Key):
        lg.debug(f'Key {key} pressed')
        self.pressed.add(key)

    def is_held(self, code: int) -> bool:
        key = Key(code & 0xF)
        return key in self.pressed or self.host.is_key_down(key)

    def end_tick(self):
        self.pressed.clear()
