''' Instruction decoder: 16-bit word -> operation '''

import chip8.common.ops as ops
from chip8.common.hwconf import MEMORY_SIZE


def fetch(memory: bytearray, pc: int) -> int:
    hi = memory[pc % MEMORY_SIZE]
    lo = memory[(pc + 1) % MEMORY_SIZE]
    return (hi << 8) | lo


def decode_system(word: int) -> ops.Op:
    if word == 0x00E0:
        return ops.Clear()

    if word == 0x00EE:
        return ops.Return()

    return ops.CallRca(word & 0x0FFF)


def decode_alu(word: int) -> ops.Op:
    x = (word & 0x0F00) >> 8
    y = (word & 0x00F0) >> 4

    match word & 0x000F:
        case 0x0:
            return ops.Assign(dst=x, src=y)
        case 0x1:
            return ops.Or(x, y)
        case 0x2:
            return ops.And(x, y)
        case 0x3:
            return ops.Xor(x, y)
        case 0x4:
            return ops.Increment(x, y)
        case 0x5:
            return ops.Sub(x, y)
        case 0x6:
            return ops.ShiftRight(x)
        case 0x7:
            return ops.SubReverse(x, y)
        case 0xE:
            return ops.ShiftLeft(x)
        case _:
            return ops.Invalid(word)


def decode_keys(word: int) -> ops.Op:
    x = (word & 0x0F00) >> 8

    match word & 0x00FF:
        case 0x9E:
            return ops.CondKeyPressed(x)
        case 0xA1:
            return ops.CondKeyReleased(x)
        case _:
            return ops.Invalid(word)


# FX families keyed by low byte
MISC = {
    0x07: ops.GetDelayTimer,
    0x0A: ops.WaitKeyPressed,
    0x15: ops.SetDelayTimer,
    0x18: ops.SetSoundTimer,
    0x1E: ops.AddAddress,
    0x29: ops.SetSprite,
    0x33: ops.SetBCD,
    0x55: ops.StoreRegisters,
    0x65: ops.LoadRegisters,
}


def decode_misc(word: int) -> ops.Op:
    factory = MISC.get(word & 0x00FF)

    if factory is None:
        return ops.Invalid(word)

    return factory((word & 0x0F00) >> 8)


def decode(word: int) -> ops.Op:
    ''' Total decoding: unknown patterns become ops.Invalid '''
    word &= 0xFFFF

    x = (word & 0x0F00) >> 8
    y = (word & 0x00F0) >> 4
    n = word & 0x000F
    nn = word & 0x00FF
    nnn = word & 0x0FFF

    match word >> 12:
        case 0x0:
            return decode_system(word)
        case 0x1:
            return ops.Goto(nnn)
        case 0x2:
            return ops.CallSubroutine(nnn)
        case 0x3:
            return ops.CondEq(x, nn)
        case 0x4:
            return ops.CondNe(x, nn)
        case 0x5:
            return ops.CondRegEq(x, y) if n == 0 else ops.Invalid(word)
        case 0x6:
            return ops.Set(x, nn)
        case 0x7:
            return ops.Add(x, nn)
        case 0x8:
            return decode_alu(word)
        case 0x9:
            return ops.CondRegNe(x, y) if n == 0 else ops.Invalid(word)
        case 0xA:
            return ops.SetAddress(nnn)
        case 0xB:
            return ops.Jump(nnn)
        case 0xC:
            return ops.SetRand(x, nn)
        case 0xD:
            return ops.DrawSprite(x, y, n)
        case 0xE:
            return decode_keys(word)
        case _:
            return decode_misc(word)
