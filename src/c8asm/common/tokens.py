''' Token vocabulary shared by the lexer and the encoder '''

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TypeAlias


class Mnemonic(Enum):
    ADD = 'add'
    AND = 'and'
    CALL = 'call'
    CLS = 'cls'
    DRW = 'drw'
    JP = 'jp'
    LD = 'ld'
    OR = 'or'
    RET = 'ret'
    RND = 'rnd'
    SE = 'se'
    SHL = 'shl'
    SHR = 'shr'
    SKNP = 'sknp'
    SKP = 'skp'
    SNE = 'sne'
    SUB = 'sub'
    SUBN = 'subn'
    SYS = 'sys'
    XOR = 'xor'


class Register(IntEnum):
    V0 = 0x0
    V1 = 0x1
    V2 = 0x2
    V3 = 0x3
    V4 = 0x4
    V5 = 0x5
    V6 = 0x6
    V7 = 0x7
    V8 = 0x8
    V9 = 0x9
    VA = 0xA
    VB = 0xB
    VC = 0xC
    VD = 0xD
    VE = 0xE
    VF = 0xF

    def spelling(self) -> str:
        return f'v{self.value:x}'


class Kind(Enum):
    ''' Token kinds, pseudo-operands carry their source spelling '''
    OPCODE = 'opcode'
    REG = 'reg'
    IMM = 'imm'
    F = 'f'
    B = 'b'
    K = 'k'
    I = 'i'  # noqa: E741
    ST = 'st'
    DT = 'dt'
    IVAL = '[i]'
    COMMENT = ';'


PSEUDO_OPERANDS = (Kind.F, Kind.B, Kind.K, Kind.I, Kind.ST, Kind.DT, Kind.IVAL)


@dataclass(frozen=True)
class Token:
    kind: Kind
    line: int
    value: Mnemonic | Register | int | None = None

    def __str__(self) -> str:
        if self.kind == Kind.OPCODE:
            assert isinstance(self.value, Mnemonic)
            return self.value.value

        if self.kind == Kind.REG:
            assert isinstance(self.value, Register)
            return self.value.spelling()

        if self.kind == Kind.IMM:
            return f'0x{self.value:X}'

        return self.kind.value


Tokens: TypeAlias = list[Token]
