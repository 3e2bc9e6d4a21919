import pytest

import chip8.common.ops as ops
from chip8.runtime.decoder import decode, fetch


@pytest.mark.parametrize('word, op', [
    (0x00E0, ops.Clear()),
    (0x00EE, ops.Return()),
    (0x0123, ops.CallRca(0x123)),
    (0x1ABC, ops.Goto(0xABC)),
    (0x2F00, ops.CallSubroutine(0xF00)),
    (0x3A42, ops.CondEq(0xA, 0x42)),
    (0x4B07, ops.CondNe(0xB, 0x07)),
    (0x5120, ops.CondRegEq(1, 2)),
    (0x6CFF, ops.Set(0xC, 0xFF)),
    (0x7D01, ops.Add(0xD, 0x01)),
    (0x8120, ops.Assign(dst=1, src=2)),
    (0x8341, ops.Or(3, 4)),
    (0x8562, ops.And(5, 6)),
    (0x8783, ops.Xor(7, 8)),
    (0x89A4, ops.Increment(9, 0xA)),
    (0x8BC5, ops.Sub(0xB, 0xC)),
    (0x8DE6, ops.ShiftRight(0xD)),
    (0x8F07, ops.SubReverse(0xF, 0)),
    (0x812E, ops.ShiftLeft(1)),
    (0x9340, ops.CondRegNe(3, 4)),
    (0xA2F0, ops.SetAddress(0x2F0)),
    (0xB300, ops.Jump(0x300)),
    (0xC50F, ops.SetRand(5, 0x0F)),
    (0xD125, ops.DrawSprite(1, 2, 5)),
    (0xE69E, ops.CondKeyPressed(6)),
    (0xE7A1, ops.CondKeyReleased(7)),
    (0xF807, ops.GetDelayTimer(8)),
    (0xF90A, ops.WaitKeyPressed(9)),
    (0xFA15, ops.SetDelayTimer(0xA)),
    (0xFB18, ops.SetSoundTimer(0xB)),
    (0xFC1E, ops.AddAddress(0xC)),
    (0xFD29, ops.SetSprite(0xD)),
    (0xFE33, ops.SetBCD(0xE)),
    (0xFF55, ops.StoreRegisters(0xF)),
    (0xF065, ops.LoadRegisters(0)),
])
def test_documented_words(word, op):
    assert decode(word) == op


@pytest.mark.parametrize('word', [
    0x5121, 0x512F, 0x8008, 0x800D, 0x800F,
    0x9001, 0xE000, 0xE19F, 0xF000, 0xF0FF, 0xF166,
])
def test_unknown_words_are_invalid(word):
    assert decode(word) == ops.Invalid(word)


def test_shift_takes_register_from_second_nibble():
    assert decode(0x8A06) == ops.ShiftRight(0xA)
    assert decode(0x8A0E) == ops.ShiftLeft(0xA)


def test_decoding_is_total():
    kinds = set(ops.INSTRUCTIONS) | {ops.Invalid}
    seen = set()

    for word in range(0x10000):
        op = decode(word)
        assert type(op) in kinds
        seen.add(type(op))

    assert seen == kinds
    assert len(ops.INSTRUCTIONS) == 35


def test_fetch_is_big_endian():
    memory = bytearray(0x1000)
    memory[0x200:0x202] = b'\x61\x2A'
    assert fetch(memory, 0x200) == 0x612A


def test_fetch_wraps_at_memory_end():
    memory = bytearray(0x1000)
    memory[0xFFF] = 0x00
    memory[0x000] = 0xE0
    assert fetch(memory, 0xFFF) == 0x00E0
