''' Outward events produced by the machine for its host '''

from dataclasses import dataclass
from typing import TypeAlias

from chip8.common.hwconf import TIMER_HZ


@dataclass(frozen=True)
class ToneRequest:
    duration_ms: int

    @classmethod
    def for_ticks(cls, ticks: int) -> 'ToneRequest':
        return cls(ticks * 1000 // TIMER_HZ)


@dataclass(frozen=True)
class InvalidOpcode:
    address: int
    word: int

    def __str__(self) -> str:
        return f'Invalid opcode {self.word:04X} at 0x{self.address:03X}'


Event: TypeAlias = ToneRequest | InvalidOpcode
