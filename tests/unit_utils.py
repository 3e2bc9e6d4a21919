from pathlib import Path

import chip8.sasm.asm as asm
import chip8.runtime.cpu as cpu
from chip8.runtime.state import State
from chip8.runtime.keypad import KeyState


def find_file(filename: str) -> Path:
    return Path(__file__).parent / filename


def load_file(filename: str) -> str:
    return find_file(filename).read_text()


def assemble_testdata(name: str) -> bytes:
    return asm.assemble(load_file(f'testdata/{name}.s8'), name)


def machine(source: str = '', keys: KeyState | None = None, **kwargs) -> cpu.CPU:
    state = State(asm.assemble(source), **kwargs)
    return cpu.CPU(state, keys)


def run_ticks(proc: cpu.CPU, ticks: int):
    for _ in range(ticks):
        proc.tick()
