import sys
import time
import logging as lg
import traceback
from pathlib import Path
from typing import TextIO

import click

from chip8.common.hwconf import TICK_HZ
from chip8.runtime.events import InvalidOpcode, ToneRequest
from chip8.runtime.keypad import Key, KeyState
from chip8.runtime.peripheral import Speaker, start_pp, stop_pp
from chip8.runtime.state import State
import chip8.runtime.cpu as cpu


EXIT_HALT = 0
EXIT_MACHINE_ERROR = 2
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


class RunSettings:
    hz: int             # Ticks per second, 0 runs unthrottled
    max_ticks: int      # 0 runs forever
    spin_halts: bool
    render: bool
    bell: bool
    presses: dict[int, list[Key]]   # Scripted key presses by tick number

    def __init__(self):
        self.hz = TICK_HZ
        self.max_ticks = 0
        self.spin_halts = False
        self.render = True
        self.bell = False
        self.presses = {}

    def update(
        self,
        hz: int | None = None,
        max_ticks: int | None = None,
        spin_halts: bool | None = None,
        render: bool | None = None,
        bell: bool | None = None,
        presses: dict[int, list[Key]] | None = None
    ):
        if hz is not None:
            self.hz = hz

        if max_ticks is not None:
            self.max_ticks = max_ticks

        if spin_halts is not None:
            self.spin_halts = spin_halts

        if render is not None:
            self.render = render

        if bell is not None:
            self.bell = bell

        if presses is not None:
            self.presses = presses

        return self


def parse_press(value: str) -> tuple[int, Key]:
    ''' Reads KEY@TICK, e.g. "A@120" presses key A before tick 120 '''
    symbol, _, tick = value.partition('@')
    key = Key.parse(symbol)
    return (int(tick), key)


def collect_presses(ctx, param, values: tuple[str, ...]) -> dict[int, list[Key]]:
    presses: dict[int, list[Key]] = {}

    for value in values:
        try:
            tick, key = parse_press(value)
        except ValueError:
            raise click.BadParameter(f'{value!r} is not KEY@TICK')

        presses.setdefault(tick, []).append(key)

    return presses


def render(state: State, out: TextIO):
    lines = [''.join('#' if on else '.' for on in row) for row in state.rows()]
    out.write('\n'.join(lines) + '\n\n')
    out.flush()


def dispatch_events(proc: cpu.CPU, speaker: Speaker):
    for event in proc.drain_events():
        if isinstance(event, ToneRequest):
            speaker.play(event)

        if isinstance(event, InvalidOpcode):
            proc.state.debug_dump()


def execute(
    rom: bytes,
    settings: RunSettings | None = None,
    keys: KeyState | None = None,
    out: TextIO = sys.stdout
) -> cpu.CPU:
    if settings is None:
        settings = RunSettings()

    state = State(rom)
    proc = cpu.CPU(state, keys, spin_halts=settings.spin_halts)
    speaker = Speaker(settings.bell)
    pp = [speaker]

    period = 1.0 / settings.hz if settings.hz else 0.0
    ticks = 0

    start_pp(pp)

    try:
        next_tick = time.monotonic()

        while settings.max_ticks == 0 or ticks < settings.max_ticks:
            now = time.monotonic()

            if now < next_tick:
                time.sleep(next_tick - now)
                continue

            next_tick = max(next_tick + period, now)

            for key in settings.presses.get(ticks, []):
                proc.on_key_pressed(key)

            proc.tick()
            ticks += 1

            dispatch_events(proc, speaker)

            if proc.has_drawn() and settings.render:
                render(state, out)

    finally:
        lg.info(f'Executed {ticks} ticks')
        stop_pp(pp)

    return proc


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--hz', type=int, default=TICK_HZ, help='Ticks per second, 0 for unthrottled')
@click.option('--max-ticks', type=int, default=0, help='Stop after this many ticks')
@click.option('--spin-halts', is_flag=True, help='Stop when the program jumps to itself')
@click.option('--no-render', is_flag=True, help='Do not print the framebuffer')
@click.option('--bell', is_flag=True, help='Ring the terminal bell on tones')
@click.option('--press', multiple=True, callback=collect_presses, metavar='KEY@TICK',
              help='Press a hex key before the given tick, repeatable')
@click.argument('rom_filename', type=Path)
def run(
    verbose: bool,
    hz: int,
    max_ticks: int,
    spin_halts: bool,
    no_render: bool,
    bell: bool,
    press: dict[int, list[Key]],
    rom_filename: Path
):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("CHIP-8")

    settings = RunSettings().update(
        hz=hz,
        max_ticks=max_ticks,
        spin_halts=spin_halts,
        render=not no_render,
        bell=bell,
        presses=press
    )

    try:
        rom = rom_filename.read_bytes()
        execute(rom, settings)
        sys.exit(EXIT_HALT)

    except cpu.Halt:
        lg.info('Execution halted gracefully')
        sys.exit(EXIT_HALT)

    except cpu.MachineError as e:
        lg.error(f'Execution halted on machine error: {e}')
        sys.exit(EXIT_MACHINE_ERROR)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
