# type: ignore
import pytest

import chip8.runtime.cpu as cpu
from chip8.runtime.state import State


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    yield FakeClock()


@pytest.fixture
def proc(clock):
    yield cpu.CPU(State(clock=clock))
