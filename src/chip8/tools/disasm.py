import logging as lg
from pathlib import Path
from typing import Callable, Iterator, Tuple

import click

import chip8.common.ops as ops
from chip8.common.hwconf import PROGRAM_START, WORD_SIZE
from chip8.runtime.decoder import decode


def v(r: int) -> str:
    return f'V{r:X}'


def hex_byte(value: int) -> str:
    return f'0x{value:02X}'


def hex_addr(address: int) -> str:
    return f'0x{address:03X}'


FORMATS: dict[type, Callable] = {
    ops.Invalid: lambda op: f'DB {hex_byte(op.word >> 8)}, {hex_byte(op.word & 0xFF)}',
    ops.CallRca: lambda op: f'SYS {hex_addr(op.address)}',
    ops.Clear: lambda op: 'CLS',
    ops.Return: lambda op: 'RET',
    ops.Goto: lambda op: f'JP {hex_addr(op.address)}',
    ops.CallSubroutine: lambda op: f'CALL {hex_addr(op.address)}',
    ops.CondEq: lambda op: f'SE {v(op.r)}, {hex_byte(op.value)}',
    ops.CondNe: lambda op: f'SNE {v(op.r)}, {hex_byte(op.value)}',
    ops.CondRegEq: lambda op: f'SE {v(op.r1)}, {v(op.r2)}',
    ops.Set: lambda op: f'LD {v(op.r)}, {hex_byte(op.value)}',
    ops.Add: lambda op: f'ADD {v(op.r)}, {hex_byte(op.value)}',
    ops.Assign: lambda op: f'LD {v(op.dst)}, {v(op.src)}',
    ops.Or: lambda op: f'OR {v(op.r1)}, {v(op.r2)}',
    ops.And: lambda op: f'AND {v(op.r1)}, {v(op.r2)}',
    ops.Xor: lambda op: f'XOR {v(op.r1)}, {v(op.r2)}',
    ops.Increment: lambda op: f'ADD {v(op.r1)}, {v(op.r2)}',
    ops.Sub: lambda op: f'SUB {v(op.r1)}, {v(op.r2)}',
    ops.ShiftRight: lambda op: f'SHR {v(op.r)}',
    ops.SubReverse: lambda op: f'SUBN {v(op.r1)}, {v(op.r2)}',
    ops.ShiftLeft: lambda op: f'SHL {v(op.r)}',
    ops.CondRegNe: lambda op: f'SNE {v(op.r1)}, {v(op.r2)}',
    ops.SetAddress: lambda op: f'LD I, {hex_addr(op.value)}',
    ops.Jump: lambda op: f'JP V0, {hex_addr(op.offset)}',
    ops.SetRand: lambda op: f'RND {v(op.r)}, {hex_byte(op.mask)}',
    ops.DrawSprite: lambda op: f'DRW {v(op.rx)}, {v(op.ry)}, {op.n}',
    ops.CondKeyPressed: lambda op: f'SKP {v(op.r)}',
    ops.CondKeyReleased: lambda op: f'SKNP {v(op.r)}',
    ops.GetDelayTimer: lambda op: f'LD {v(op.r)}, DT',
    ops.WaitKeyPressed: lambda op: f'LD {v(op.r)}, K',
    ops.SetDelayTimer: lambda op: f'LD DT, {v(op.r)}',
    ops.SetSoundTimer: lambda op: f'LD ST, {v(op.r)}',
    ops.AddAddress: lambda op: f'ADD I, {v(op.r)}',
    ops.SetSprite: lambda op: f'LD F, {v(op.r)}',
    ops.SetBCD: lambda op: f'LD B, {v(op.r)}',
    ops.StoreRegisters: lambda op: f'LD [I], {v(op.r)}',
    ops.LoadRegisters: lambda op: f'LD {v(op.r)}, [I]',
}


def format_op(op: ops.Op) -> str:
    return FORMATS[type(op)](op)


def disassemble(rom: bytes, base: int = PROGRAM_START) -> Iterator[Tuple[int, int, str]]:
    ''' Yields (address, word, text); a trailing odd byte becomes DB '''
    for offset in range(0, len(rom) - 1, WORD_SIZE):
        word = (rom[offset] << 8) | rom[offset + 1]
        yield (base + offset, word, format_op(decode(word)))

    if len(rom) % WORD_SIZE:
        last = rom[-1]
        yield (base + len(rom) - 1, last, f'DB {hex_byte(last)}')


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--base', type=lambda s: int(s, 0), default=PROGRAM_START, help='Load address')
@click.argument('rom_filename', type=Path)
def disasm(verbose: bool, base: int, rom_filename: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)

    rom = rom_filename.read_bytes()

    for (address, word, text) in disassemble(rom, base):
        click.echo(f'{hex_addr(address)}: {word:04X}  {text}')


if __name__ == '__main__':
    disasm()
