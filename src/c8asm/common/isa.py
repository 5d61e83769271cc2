''' Instruction formats keyed by (mnemonic, operand shape) '''

from dataclasses import dataclass
from typing import Dict, List, Sequence, TypeAlias

from c8asm.common.tokens import Mnemonic, Kind, Token, Register

WORD_SIZE = 2  # bytes
WORD_MASK = 0xFFFF
IMM_MASK = 0xFFFF
NIBBLE_MASK = 0xF

# Immediate field -> mask
FIELD_MASKS = {
    'byte': 0xFF,
    'addr': 0xFFF,
    'nibble': 0xF,
}

# Register field -> shift
REGISTER_SHIFTS = {
    'Vx': 8,
    'Vy': 4,
}

# Operand pattern -> accepted token kind
PATTERN_KINDS = {
    'Vx': Kind.REG,
    'Vy': Kind.REG,
    'V0': Kind.REG,
    'byte': Kind.IMM,
    'addr': Kind.IMM,
    'nibble': Kind.IMM,
    'F': Kind.F,
    'B': Kind.B,
    'K': Kind.K,
    'I': Kind.I,
    'ST': Kind.ST,
    'DT': Kind.DT,
    '[I]': Kind.IVAL,
}

Shape: TypeAlias = tuple[str, ...]


def pattern_accepts(pattern: str, token: Token) -> bool:
    if PATTERN_KINDS[pattern] != token.kind:
        return False

    if pattern == 'V0':
        return token.value == Register.V0

    return True


@dataclass(frozen=True)
class Format:
    ''' One row of the instruction table

    The template spells the word as four hex nibbles, most significant
    first. Letters mark operand fields: x and y are register numbers,
    k an 8-bit byte, n a 12-bit address or a 4-bit nibble.
    '''
    mnemonic: Mnemonic
    shape: Shape
    template: str

    @property
    def arity(self) -> int:
        return len(self.shape)

    @property
    def base(self) -> int:
        fixed = ''.join(c if c in '0123456789ABCDEF' else '0' for c in self.template)
        return int(fixed, 16)

    def accepts(self, operands: Sequence[Token]) -> bool:
        ''' True if operands are a (possibly partial) match of the shape '''
        if len(operands) > self.arity:
            return False

        return all(pattern_accepts(p, t) for p, t in zip(self.shape, operands))

    def complete(self, operands: Sequence[Token]) -> bool:
        return len(operands) == self.arity and self.accepts(operands)

    def encode(self, operands: Sequence[Token]) -> int:
        word = self.base

        for pattern, token in zip(self.shape, operands):
            if pattern in REGISTER_SHIFTS:
                word |= (int(token.value) & NIBBLE_MASK) << REGISTER_SHIFTS[pattern]  # type: ignore
            elif pattern in FIELD_MASKS:
                word |= int(token.value) & FIELD_MASKS[pattern]  # type: ignore

        return word & WORD_MASK

    def __str__(self) -> str:
        return f'{self.mnemonic.value} {", ".join(self.shape)}'.rstrip()


M = Mnemonic

FORMATS = [
    Format(M.CLS, (), '00E0'),
    Format(M.RET, (), '00EE'),
    Format(M.CALL, ('addr',), '2nnn'),
    Format(M.JP, ('addr',), '1nnn'),
    Format(M.JP, ('V0', 'addr'), 'Bnnn'),
    Format(M.SE, ('Vx', 'Vy'), '5xy0'),
    Format(M.SE, ('Vx', 'byte'), '3xkk'),
    Format(M.SNE, ('Vx', 'Vy'), '9xy0'),
    Format(M.SNE, ('Vx', 'byte'), '4xkk'),
    Format(M.SKP, ('Vx',), 'Ex9E'),
    Format(M.SKNP, ('Vx',), 'ExA1'),
    Format(M.ADD, ('Vx', 'Vy'), '8xy4'),
    Format(M.ADD, ('Vx', 'byte'), '7xkk'),
    Format(M.ADD, ('I', 'Vx'), 'Fx1E'),
    Format(M.SUB, ('Vx', 'Vy'), '8xy5'),
    Format(M.SUBN, ('Vx', 'Vy'), '8xy7'),
    Format(M.OR, ('Vx', 'Vy'), '8xy1'),
    Format(M.AND, ('Vx', 'Vy'), '8xy2'),
    Format(M.XOR, ('Vx', 'Vy'), '8xy3'),
    Format(M.SHR, ('Vx', 'Vy'), '8xy6'),
    Format(M.SHL, ('Vx', 'Vy'), '8xyE'),
    Format(M.RND, ('Vx', 'byte'), 'Cxkk'),
    Format(M.DRW, ('Vx', 'Vy', 'nibble'), 'Dxyn'),
    Format(M.LD, ('Vx', 'Vy'), '8xy0'),
    Format(M.LD, ('Vx', 'byte'), '6xkk'),
    Format(M.LD, ('I', 'addr'), 'Annn'),
    Format(M.LD, ('ST', 'Vx'), 'Fx18'),
    Format(M.LD, ('DT', 'Vx'), 'Fx15'),
    Format(M.LD, ('Vx', 'DT'), 'Fx07'),
    Format(M.LD, ('F', 'Vx'), 'Fx29'),
    Format(M.LD, ('B', 'Vx'), 'Fx33'),
    Format(M.LD, ('Vx', 'K'), 'Fx0A'),
    Format(M.LD, ('[I]', 'Vx'), 'Fx55'),
    Format(M.LD, ('Vx', '[I]'), 'Fx65'),
]


def build_table(formats: List[Format]) -> Dict[Mnemonic, List[Format]]:
    table: Dict[Mnemonic, List[Format]] = {m: [] for m in Mnemonic}

    for fmt in formats:
        table[fmt.mnemonic].append(fmt)

    return table


# SYS has no rows, every operand after it is illegal
TABLE = build_table(FORMATS)
