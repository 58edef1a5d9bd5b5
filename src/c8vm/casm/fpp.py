''' First-pass processor '''

import logging as lg
import struct
from typing import Any

from c8vm.common.hwconf import PROGRAM_START


Tokens = Any


class AsmError(Exception):
    pass


class Ref:
    ''' Label reference, resolved in the second pass '''

    def __init__(self, tokens: Tokens):
        self.tokens = list(tokens)  # [name] or [namespace, name]

    def __repr__(self):
        return f'Ref({"::".join(self.tokens)})'


class FPP:
    cmd_list: list[tuple[str, Any]]
    offset: int
    namespace: str
    label_dict: dict[str, int]

    def __init__(self):
        self.cmd_list = list()
        self.offset = 0
        self.namespace = '<global>'
        self.label_dict = dict()

    def get_qualified_name(self, name: str, namespace: str | None = None) -> str:
        if namespace is None:
            namespace = self.namespace

        return f'{namespace}::{name}'

    def resolve_name(self, tokens: Tokens) -> str:
        if len(tokens) == 1:
            # Unqualified
            return self.get_qualified_name(tokens[0])

        # Qualified
        return self.get_qualified_name(tokens[1], tokens[0])

    def address(self) -> int:
        return PROGRAM_START + self.offset

    # Handlers
    def issue_bytes(self, data: bytes):
        self.cmd_list.append(('bytes', data))
        self.offset += len(data)

    def issue_word(self, word: int):
        self.issue_bytes(struct.pack('>H', word))

    def issue_ref(self, base: int, mask: int, ref: Ref):
        labelname = self.resolve_name(ref.tokens)
        lg.debug(f'Ref {labelname} @ 0x{self.address():03X}')
        self.cmd_list.append(('ref', (base, mask, labelname)))
        self.offset += 2  # placeholder-bytes

    def on_label(self, tokens: Tokens):
        qlabelname = self.get_qualified_name(tokens[0])

        if qlabelname in self.label_dict:
            raise AsmError(f'Duplicate label {qlabelname}')

        self.label_dict[qlabelname] = self.address()
        lg.debug(f'Label {qlabelname} @ 0x{self.address():03X}')

    # (op, [((shift, limit), value), ...])
    def issue_instruction(self, tokens: Tokens):
        op, fields = tokens
        word = op
        ref = None

        for (shift, limit), value in fields:
            if isinstance(value, Ref):
                ref = value
                continue

            if not 0 <= value <= limit:
                raise AsmError(f'Operand {value:#x} out of range for {op:04X} (max {limit:#x})')

            word |= value << shift

        lg.debug(f'Issuing {word:04X}')

        if ref is not None:
            self.issue_ref(word, 0x0FFF, ref)
        else:
            self.issue_word(word)

    # DB <byte>[, <byte>...]
    def issue_db(self, tokens: Tokens):
        for value in tokens:
            if not 0 <= value <= 0xFF:
                raise AsmError(f'Byte {value:#x} out of range')

        self.issue_bytes(bytes(tokens))

    # DW <word> | DW &<label>
    def issue_dw(self, tokens: Tokens):
        value = tokens[0]

        if isinstance(value, Ref):
            self.issue_ref(0x0000, 0xFFFF, value)
            return

        if not 0 <= value <= 0xFFFF:
            raise AsmError(f'Word {value:#x} out of range')

        self.issue_word(value)

    def on_fail(self, tokens: Tokens):
        raise AsmError(f'Unknown statement in {self.namespace}: {tokens[0]}')
