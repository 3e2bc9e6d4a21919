''' Decoded operations, one frozen dataclass per instruction '''

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class Invalid:
    word: int           # raw instruction, for diagnostics


@dataclass(frozen=True)
class CallRca:
    address: int        # SYS addr - 0NNN


@dataclass(frozen=True)
class Clear:
    pass                # CLS - 00E0


@dataclass(frozen=True)
class Return:
    pass                # RET - 00EE


@dataclass(frozen=True)
class Goto:
    address: int        # JP addr - 1NNN


@dataclass(frozen=True)
class CallSubroutine:
    address: int        # CALL addr - 2NNN


@dataclass(frozen=True)
class CondEq:
    r: int              # SE Vx, byte - 3XNN
    value: int


@dataclass(frozen=True)
class CondNe:
    r: int              # SNE Vx, byte - 4XNN
    value: int


@dataclass(frozen=True)
class CondRegEq:
    r1: int             # SE Vx, Vy - 5XY0
    r2: int


@dataclass(frozen=True)
class Set:
    r: int              # LD Vx, byte - 6XNN
    value: int


@dataclass(frozen=True)
class Add:
    r: int              # ADD Vx, byte - 7XNN
    value: int


@dataclass(frozen=True)
class Assign:
    dst: int            # LD Vx, Vy - 8XY0
    src: int


@dataclass(frozen=True)
class Or:
    r1: int             # OR Vx, Vy - 8XY1
    r2: int


@dataclass(frozen=True)
class And:
    r1: int             # AND Vx, Vy - 8XY2
    r2: int


@dataclass(frozen=True)
class Xor:
    r1: int             # XOR Vx, Vy - 8XY3
    r2: int


@dataclass(frozen=True)
class Increment:
    r1: int             # ADD Vx, Vy - 8XY4
    r2: int


@dataclass(frozen=True)
class Sub:
    r1: int             # SUB Vx, Vy - 8XY5
    r2: int


@dataclass(frozen=True)
class ShiftRight:
    r: int              # SHR Vx - 8XY6


@dataclass(frozen=True)
class SubReverse:
    r1: int             # SUBN Vx, Vy - 8XY7
    r2: int


@dataclass(frozen=True)
class ShiftLeft:
    r: int              # SHL Vx - 8XYE


@dataclass(frozen=True)
class CondRegNe:
    r1: int             # SNE Vx, Vy - 9XY0
    r2: int


@dataclass(frozen=True)
class SetAddress:
    value: int          # LD I, addr - ANNN


@dataclass(frozen=True)
class Jump:
    offset: int         # JP V0, addr - BNNN


@dataclass(frozen=True)
class SetRand:
    r: int              # RND Vx, byte - CXNN
    mask: int


@dataclass(frozen=True)
class DrawSprite:
    rx: int             # DRW Vx, Vy, nibble - DXYN
    ry: int
    n: int


@dataclass(frozen=True)
class CondKeyPressed:
    r: int              # SKP Vx - EX9E


@dataclass(frozen=True)
class CondKeyReleased:
    r: int              # SKNP Vx - EXA1


@dataclass(frozen=True)
class GetDelayTimer:
    r: int              # LD Vx, DT - FX07


@dataclass(frozen=True)
class WaitKeyPressed:
    r: int              # LD Vx, K - FX0A


@dataclass(frozen=True)
class SetDelayTimer:
    r: int              # LD DT, Vx - FX15


@dataclass(frozen=True)
class SetSoundTimer:
    r: int              # LD ST, Vx - FX18


@dataclass(frozen=True)
class AddAddress:
    r: int              # ADD I, Vx - FX1E


@dataclass(frozen=True)
class SetSprite:
    r: int              # LD F, Vx - FX29


@dataclass(frozen=True)
class SetBCD:
    r: int              # LD B, Vx - FX33


@dataclass(frozen=True)
class StoreRegisters:
    r: int              # LD [I], Vx - FX55


@dataclass(frozen=True)
class LoadRegisters:
    r: int              # LD Vx, [I] - FX65


Op: TypeAlias = (
    Invalid | CallRca | Clear | Return | Goto | CallSubroutine
    | CondEq | CondNe | CondRegEq | Set | Add | Assign
    | Or | And | Xor | Increment | Sub | ShiftRight | SubReverse | ShiftLeft
    | CondRegNe | SetAddress | Jump | SetRand | DrawSprite
    | CondKeyPressed | CondKeyReleased
    | GetDelayTimer | WaitKeyPressed | SetDelayTimer | SetSoundTimer
    | AddAddress | SetSprite | SetBCD | StoreRegisters | LoadRegisters
)

# Every documented instruction, Invalid excluded
INSTRUCTIONS = (
    CallRca, Clear, Return, Goto, CallSubroutine,
    CondEq, CondNe, CondRegEq, Set, Add, Assign,
    Or, And, Xor, Increment, Sub, ShiftRight, SubReverse, ShiftLeft,
    CondRegNe, SetAddress, Jump, SetRand, DrawSprite,
    CondKeyPressed, CondKeyReleased,
    GetDelayTimer, WaitKeyPressed, SetDelayTimer, SetSoundTimer,
    AddAddress, SetSprite, SetBCD, StoreRegisters, LoadRegisters,
)
