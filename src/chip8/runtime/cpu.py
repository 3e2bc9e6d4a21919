import random
import logging as lg
from collections import deque

import chip8.common.ops as ops
from chip8.common.hwconf import (
    FLAG_REGISTER, FONT_BASE, GLYPH_SIZE, MEMORY_SIZE, STACK_DEPTH, WORD_SIZE
)
from chip8.runtime.decoder import decode, fetch
from chip8.runtime.events import Event, InvalidOpcode, ToneRequest
from chip8.runtime.keypad import Key, Keypad, KeyState
from chip8.runtime.state import State


NEXT = WORD_SIZE        # Normal advance
SKIP = 2 * WORD_SIZE    # Condition held, skip the following instruction
STAY = 0                # Counter was set explicitly


class Halt(Exception):
    pass


class MachineError(Exception):
    def __init__(self, pc: int, message: str):
        super().__init__(f'{message} at 0x{pc:03X}')
        self.pc = pc


class StackUnderflow(MachineError):
    def __init__(self, pc: int):
        super().__init__(pc, 'Return with an empty call stack')


class StackOverflow(MachineError):
    def __init__(self, pc: int):
        super().__init__(pc, f'Call stack deeper than {STACK_DEPTH}')


class CPU():
    state: State
    keypad: Keypad
    events: deque[Event]

    def __init__(
        self,
        state: State,
        keys: KeyState | None = None,
        rng: random.Random | None = None,
        spin_halts: bool = False
    ):
        self.state = state
        self.keypad = Keypad(keys)
        self.rng = rng if rng is not None else random.Random()
        self.spin_halts = spin_halts    # Jump-to-self ends the program
        self.events = deque()

    # - Helpers - #

    def set_flag(self, flag: bool):
        self.state.v[FLAG_REGISTER] = int(flag)

    def skip_if(self, condition: bool) -> int:
        return SKIP if condition else NEXT

    def emit(self, event: Event):
        self.events.append(event)

    # - Host interface - #

    def waiting(self) -> bool:
        return self.state.waiting is not None

    def has_drawn(self) -> bool:
        drawn = self.state.drawn
        self.state.drawn = False
        return drawn

    def drain_events(self) -> list[Event]:
        events = list(self.events)
        self.events.clear()
        return events

    def on_key_pressed(self, key: Key):
        r = self.state.waiting

        if r is None:
            self.keypad.press(key)
            return

        lg.debug(f'Key {key} -> V{r:X}, resuming')
        self.state.v[r] = int(key)
        self.state.waiting = None

    # - Operations - #

    def invalid(self, op: ops.Invalid) -> int:
        event = InvalidOpcode(self.state.pc, op.word)
        lg.warning(str(event))
        self.emit(event)
        return NEXT

    def sys(self, op: ops.CallRca) -> int:
        lg.debug(f'Ignoring machine code routine at 0x{op.address:03X}')
        return NEXT

    def cls(self, op: ops.Clear) -> int:
        self.state.clear()
        self.state.drawn = True
        return NEXT

    def ret(self, op: ops.Return) -> int:
        s = self.state

        if not s.stack:
            raise StackUnderflow(s.pc)

        s.pc = s.stack.pop()
        return STAY

    def jp(self, op: ops.Goto) -> int:
        if self.spin_halts and op.address == self.state.pc:
            raise Halt()

        self.state.pc = op.address
        return STAY

    def call(self, op: ops.CallSubroutine) -> int:
        s = self.state

        if len(s.stack) >= STACK_DEPTH:
            raise StackOverflow(s.pc)

        s.stack.append((s.pc + WORD_SIZE) % MEMORY_SIZE)
        s.pc = op.address
        return STAY

    def se(self, op: ops.CondEq) -> int:
        return self.skip_if(self.state.v[op.r] == op.value)

    def sne(self, op: ops.CondNe) -> int:
        return self.skip_if(self.state.v[op.r] != op.value)

    def se_reg(self, op: ops.CondRegEq) -> int:
        v = self.state.v
        return self.skip_if(v[op.r1] == v[op.r2])

    def sne_reg(self, op: ops.CondRegNe) -> int:
        v = self.state.v
        return self.skip_if(v[op.r1] != v[op.r2])

    def ld(self, op: ops.Set) -> int:
        self.state.v[op.r] = op.value
        return NEXT

    def add(self, op: ops.Add) -> int:
        v = self.state.v
        v[op.r] = (v[op.r] + op.value) & 0xFF
        return NEXT

    def ld_reg(self, op: ops.Assign) -> int:
        v = self.state.v
        v[op.dst] = v[op.src]
        return NEXT

    # - Arithmetic - #

    def bor(self, op: ops.Or) -> int:
        v = self.state.v
        v[op.r1] |= v[op.r2]
        return NEXT

    def band(self, op: ops.And) -> int:
        v = self.state.v
        v[op.r1] &= v[op.r2]
        return NEXT

    def xor(self, op: ops.Xor) -> int:
        v = self.state.v
        v[op.r1] ^= v[op.r2]
        return NEXT

    def add_reg(self, op: ops.Increment) -> int:
        v = self.state.v
        total = v[op.r1] + v[op.r2]
        v[op.r1] = total & 0xFF
        self.set_flag(total > 0xFF)
        return NEXT

    def sub(self, op: ops.Sub) -> int:
        v = self.state.v
        a, b = v[op.r1], v[op.r2]
        v[op.r1] = (a - b) & 0xFF
        self.set_flag(a >= b)
        return NEXT

    def subn(self, op: ops.SubReverse) -> int:
        v = self.state.v
        a, b = v[op.r1], v[op.r2]
        v[op.r1] = (b - a) & 0xFF
        self.set_flag(b >= a)
        return NEXT

    def shr(self, op: ops.ShiftRight) -> int:
        v = self.state.v
        value = v[op.r]
        v[op.r] = value >> 1
        self.set_flag(bool(value & 0x01))
        return NEXT

    def shl(self, op: ops.ShiftLeft) -> int:
        v = self.state.v
        value = v[op.r]
        v[op.r] = (value << 1) & 0xFF
        self.set_flag(bool(value & 0x80))
        return NEXT

    # - Memory and index - #

    def ld_i(self, op: ops.SetAddress) -> int:
        self.state.i = op.value
        return NEXT

    def jp_v0(self, op: ops.Jump) -> int:
        s = self.state
        s.pc = (op.offset + s.v[0]) & 0x0FFF
        return STAY

    def rnd(self, op: ops.SetRand) -> int:
        self.state.v[op.r] = self.rng.randint(0, 0xFF) & op.mask
        return NEXT

    def add_i(self, op: ops.AddAddress) -> int:
        s = self.state
        s.i = (s.i + s.v[op.r]) & 0xFFFF
        return NEXT

    def ld_f(self, op: ops.SetSprite) -> int:
        s = self.state
        s.i = FONT_BASE + (s.v[op.r] & 0xF) * GLYPH_SIZE
        return NEXT

    def ld_b(self, op: ops.SetBCD) -> int:
        s = self.state
        value = s.v[op.r]
        s.write(0, value // 100)
        s.write(1, value // 10 % 10)
        s.write(2, value % 10)
        return NEXT

    def store(self, op: ops.StoreRegisters) -> int:
        s = self.state

        for r in range(op.r + 1):
            s.write(r, s.v[r])

        return NEXT

    def load(self, op: ops.LoadRegisters) -> int:
        s = self.state

        for r in range(op.r + 1):
            s.v[r] = s.read(r)

        return NEXT

    # - Display - #

    def drw(self, op: ops.DrawSprite) -> int:
        s = self.state
        x0, y0 = s.v[op.rx], s.v[op.ry]
        collision = False

        for row in range(op.n):
            line = s.read(row)

            for col in range(8):
                if line & (0x80 >> col):
                    collision |= s.flip(x0 + col, y0 + row)

        self.set_flag(collision)
        s.drawn = True
        return NEXT

    # - Timers and keys - #

    def skp(self, op: ops.CondKeyPressed) -> int:
        return self.skip_if(self.keypad.is_held(self.state.v[op.r]))

    def sknp(self, op: ops.CondKeyReleased) -> int:
        return self.skip_if(not self.keypad.is_held(self.state.v[op.r]))

    def ld_vx_dt(self, op: ops.GetDelayTimer) -> int:
        s = self.state
        s.v[op.r] = s.timers.delay.value
        return NEXT

    def ld_vx_k(self, op: ops.WaitKeyPressed) -> int:
        lg.debug(f'Waiting for a key into V{op.r:X}')
        self.state.waiting = op.r
        return NEXT

    def ld_dt(self, op: ops.SetDelayTimer) -> int:
        s = self.state
        s.timers.set_delay(s.v[op.r])
        return NEXT

    def ld_st(self, op: ops.SetSoundTimer) -> int:
        s = self.state
        value = s.v[op.r]
        s.timers.set_sound(value)

        if value > 0:
            self.emit(ToneRequest.for_ticks(value))

        return NEXT

    HANDLERS = {
        ops.Invalid: invalid,
        ops.CallRca: sys,
        ops.Clear: cls,
        ops.Return: ret,
        ops.Goto: jp,
        ops.CallSubroutine: call,
        ops.CondEq: se,
        ops.CondNe: sne,
        ops.CondRegEq: se_reg,
        ops.Set: ld,
        ops.Add: add,
        ops.Assign: ld_reg,

        ops.Or: bor,
        ops.And: band,
        ops.Xor: xor,
        ops.Increment: add_reg,
        ops.Sub: sub,
        ops.ShiftRight: shr,
        ops.SubReverse: subn,
        ops.ShiftLeft: shl,

        ops.CondRegNe: sne_reg,
        ops.SetAddress: ld_i,
        ops.Jump: jp_v0,
        ops.SetRand: rnd,
        ops.DrawSprite: drw,

        ops.CondKeyPressed: skp,
        ops.CondKeyReleased: sknp,
        ops.GetDelayTimer: ld_vx_dt,
        ops.WaitKeyPressed: ld_vx_k,
        ops.SetDelayTimer: ld_dt,
        ops.SetSoundTimer: ld_st,
        ops.AddAddress: add_i,
        ops.SetSprite: ld_f,
        ops.SetBCD: ld_b,
        ops.StoreRegisters: store,
        ops.LoadRegisters: load,
    }

    # -- Implementation -- #

    def execute(self, op: ops.Op) -> int:
        ''' Applies a decoded operation, returns the counter delta '''
        handler = self.HANDLERS[type(op)]
        return handler(self, op)

    def tick(self):
        s = self.state
        s.timers.advance()

        op = decode(fetch(s.memory, s.pc))

        if s.waiting is not None:
            lg.debug(f'0x{s.pc:03X}: {op} (waiting for a key)')
            return

        lg.debug(f'0x{s.pc:03X}: {op}')

        try:
            delta = self.execute(op)
            s.pc = (s.pc + delta) % MEMORY_SIZE
        finally:
            self.keypad.end_tick()
