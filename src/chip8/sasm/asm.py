import struct
import logging as lg
from pathlib import Path
from typing import Callable, Tuple

import click
import pyparsing as pp

import chip8.common.ops as ops
import chip8.sasm.grammar as grammar
from chip8.sasm.fpp import FPP, AsmError


class CompilationItem:
    modulename: str
    contents: str

    def namespace(self) -> str:
        return self.modulename


def field(value: int, limit: int, what: str) -> int:
    if not 0 <= value <= limit:
        raise AsmError(f'{what} {value} out of range 0..{limit}')

    return value


def nnn(base: int, address: int) -> int:
    return base | field(address, 0xFFF, 'Address')


def xnn(base: int, x: int, value: int) -> int:
    return base | field(x, 0xF, 'Register') << 8 | field(value, 0xFF, 'Byte')


def xy(base: int, x: int, y: int) -> int:
    return base | field(x, 0xF, 'Register') << 8 | field(y, 0xF, 'Register') << 4


def x(base: int, r: int) -> int:
    return base | field(r, 0xF, 'Register') << 8


# 00E0 and 00EE are CLS and RET, not routine calls
RESERVED_SYS = (0x0E0, 0x0EE)


def sys_call(address: int) -> int:
    if address in RESERVED_SYS:
        raise AsmError(f'SYS 0x{address:03X} collides with CLS / RET')

    return nnn(0x0000, address)


ENCODERS: dict[type, Callable] = {
    ops.Invalid: lambda op: op.word,
    ops.CallRca: lambda op: sys_call(op.address),
    ops.Clear: lambda op: 0x00E0,
    ops.Return: lambda op: 0x00EE,
    ops.Goto: lambda op: nnn(0x1000, op.address),
    ops.CallSubroutine: lambda op: nnn(0x2000, op.address),
    ops.CondEq: lambda op: xnn(0x3000, op.r, op.value),
    ops.CondNe: lambda op: xnn(0x4000, op.r, op.value),
    ops.CondRegEq: lambda op: xy(0x5000, op.r1, op.r2),
    ops.Set: lambda op: xnn(0x6000, op.r, op.value),
    ops.Add: lambda op: xnn(0x7000, op.r, op.value),
    ops.Assign: lambda op: xy(0x8000, op.dst, op.src),
    ops.Or: lambda op: xy(0x8001, op.r1, op.r2),
    ops.And: lambda op: xy(0x8002, op.r1, op.r2),
    ops.Xor: lambda op: xy(0x8003, op.r1, op.r2),
    ops.Increment: lambda op: xy(0x8004, op.r1, op.r2),
    ops.Sub: lambda op: xy(0x8005, op.r1, op.r2),
    ops.ShiftRight: lambda op: x(0x8006, op.r),
    ops.SubReverse: lambda op: xy(0x8007, op.r1, op.r2),
    ops.ShiftLeft: lambda op: x(0x800E, op.r),
    ops.CondRegNe: lambda op: xy(0x9000, op.r1, op.r2),
    ops.SetAddress: lambda op: nnn(0xA000, op.value),
    ops.Jump: lambda op: nnn(0xB000, op.offset),
    ops.SetRand: lambda op: xnn(0xC000, op.r, op.mask),
    ops.DrawSprite: lambda op: xy(0xD000, op.rx, op.ry) | field(op.n, 0xF, 'Height'),
    ops.CondKeyPressed: lambda op: x(0xE09E, op.r),
    ops.CondKeyReleased: lambda op: x(0xE0A1, op.r),
    ops.GetDelayTimer: lambda op: x(0xF007, op.r),
    ops.WaitKeyPressed: lambda op: x(0xF00A, op.r),
    ops.SetDelayTimer: lambda op: x(0xF015, op.r),
    ops.SetSoundTimer: lambda op: x(0xF018, op.r),
    ops.AddAddress: lambda op: x(0xF01E, op.r),
    ops.SetSprite: lambda op: x(0xF029, op.r),
    ops.SetBCD: lambda op: x(0xF033, op.r),
    ops.StoreRegisters: lambda op: x(0xF055, op.r),
    ops.LoadRegisters: lambda op: x(0xF065, op.r),
}


def encode(op: ops.Op) -> int:
    return ENCODERS[type(op)](op)


def compile_items(compile_items: list[CompilationItem]) -> bytes:
    # First pass
    first_pass = FPP()

    for compile_item in compile_items:
        lg.info("Processing {0}".format(compile_item.namespace()))
        first_pass.namespace = compile_item.namespace()

        for line_no, line in enumerate(compile_item.contents.splitlines(), start=1):
            first_pass.line = line_no

            try:
                actions = grammar.statement.parse_string(line, parse_all=True)
            except pp.ParseException as e:
                raise AsmError(f'{first_pass.namespace}:{line_no}: unknown statement {line.strip()!r}') from e

            for (func, arg) in actions:  # type: ignore
                func(first_pass, arg)

    # Second pass
    bytestr = bytearray()

    for (t, d) in first_pass.cmd_list:
        if t == 'bytes':
            bytestr += d

        if t == 'op':
            (line_no, factory, operands) = d
            try:
                op = factory(*[first_pass.resolve(o) for o in operands])
                bytestr += struct.pack('>H', encode(op))
            except AsmError as e:
                raise AsmError(f'line {line_no}: {e}') from e

    # Dumping results
    return bytes(bytestr)


def assemble(source: str, modulename: str = '<source>') -> bytes:
    item = CompilationItem()
    item.modulename = modulename
    item.contents = source
    return compile_items([item])


def collect_file(filepath: str | Path) -> CompilationItem:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Collecting file {filepath}')
    item = CompilationItem()
    item.contents = filepath.read_text()
    item.modulename = filepath.stem
    return item


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('sources', nargs=-1, type=Path)
@click.argument('binary', type=Path)
def compile(verbose: bool, sources: Tuple[Path], binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("CHIP-8 ASM")

    items = [collect_file(path) for path in sources]
    bytestr = compile_items(items)
    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(bytestr)
    lg.info(f'{len(bytestr)} bytes written to {binary}')


if __name__ == "__main__":
    compile()
