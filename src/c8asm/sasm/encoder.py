''' Token stream to instruction words '''

import logging as lg
from typing import Iterable

from c8asm.common.tokens import Kind, Mnemonic, Token, Tokens
from c8asm.common.isa import TABLE, Format
from c8asm.sasm.errors import IllegalToken, UnterminatedInstruction, UnknownIdentifier


class Encoder:
    ''' Single pass instruction encoder

    At most one mnemonic is open at a time. Operand tokens accumulate
    until they complete a row of the instruction table, then the word
    is issued and the state cleared. A token that cannot extend any row
    of the open mnemonic fails the run; words issued before it are kept.
    '''
    words: list[int]
    opcode: Token | None
    operands: Tokens

    def __init__(self, table: dict[Mnemonic, list[Format]] = TABLE):
        self.table = table
        self.words = []
        self.opcode = None
        self.operands = []

    @property
    def mnemonic(self) -> Mnemonic | None:
        if self.opcode is None:
            return None

        assert isinstance(self.opcode.value, Mnemonic)
        return self.opcode.value

    def issue_word(self, word: int):
        lg.debug(f'Issuing word 0x{word:04X}')
        self.words.append(word)

    def reset(self):
        self.opcode = None
        self.operands = []

    def candidates(self, operands: Tokens) -> list[Format]:
        assert self.mnemonic is not None
        return [fmt for fmt in self.table[self.mnemonic] if fmt.accepts(operands)]

    def close_if_complete(self, candidates: list[Format]):
        for fmt in candidates:
            if fmt.complete(self.operands):
                self.issue_word(fmt.encode(self.operands))
                self.reset()
                return

    def on_opcode(self, token: Token):
        if self.opcode is not None:
            raise IllegalToken(token, self.words, f"'{self.opcode}' is not complete")

        lg.debug(f'Opening {token} at line {token.line}')
        self.opcode = token
        self.close_if_complete(self.candidates([]))

    def on_operand(self, token: Token):
        if self.opcode is None:
            raise IllegalToken(token, self.words, 'no instruction is open')

        operands = self.operands + [token]
        candidates = self.candidates(operands)

        if not candidates:
            raise IllegalToken(token, self.words, f"no '{self.opcode}' form accepts it")

        self.operands = operands
        self.close_if_complete(candidates)

    def feed(self, token: Token):
        if token.kind == Kind.COMMENT:
            return

        if token.kind == Kind.OPCODE:
            self.on_opcode(token)
        else:
            self.on_operand(token)

    def finish(self) -> list[int]:
        if self.opcode is not None:
            raise UnterminatedInstruction(self.opcode, self.words)

        return self.words

    def encode(self, tokens: Iterable[Token]) -> list[int]:
        try:
            for token in tokens:
                self.feed(token)
        except UnknownIdentifier as e:
            # Raised by the lexer, which never sees the issued words
            e.words = list(self.words)
            raise

        return self.finish()


def encode(tokens: Iterable[Token]) -> list[int]:
    return Encoder().encode(tokens)
