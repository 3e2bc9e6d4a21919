import logging as lg
from typing import Any, Callable, Dict, List, Tuple

import chip8.common.ops as ops
from chip8.common.hwconf import PROGRAM_START, WORD_SIZE

Tokens = List[Any]
Factory = Callable[..., ops.Op]


class AsmError(Exception):
    pass


class FPP:
    ''' First pass processor '''
    cmd_list: List[Tuple[str, Any]]
    label_dict: Dict[str, int]

    def __init__(self, origin: int = PROGRAM_START):
        self.cmd_list = list()
        self.origin = origin
        self.offset = 0
        self.namespace = "<global>"
        self.line = 0
        self.label_dict = dict()

    def address(self) -> int:
        return self.origin + self.offset

    # Handlers
    def issue_op(self, cmd: Tuple[Factory, Tokens]):
        (factory, operands) = cmd
        lg.debug(f'Issuing {factory.__name__} {operands} @ 0x{self.address():03X}')
        self.cmd_list.append(('op', (self.line, factory, operands)))
        self.offset += WORD_SIZE

    def issue_bytes(self, values: Tokens):
        for value in values:
            if not 0 <= value <= 0xFF:
                raise AsmError(f'{self.namespace}:{self.line}: byte {value} out of range')

        self.cmd_list.append(('bytes', bytes(values)))
        self.offset += len(values)

    def on_label(self, name: str):
        if name in self.label_dict:
            raise AsmError(f'{self.namespace}:{self.line}: duplicate label {name}')

        self.label_dict[name] = self.address()
        lg.debug(f'Label {name} @ 0x{self.address():03X}')

    def resolve(self, operand: int | str) -> int:
        if isinstance(operand, int):
            return operand

        if operand not in self.label_dict:
            raise AsmError(f'Unknown label {operand}')

        return self.label_dict[operand]

