''' Byte stream to token stream '''

import logging as lg
from typing import Iterable, Iterator

import pyparsing as pp

from c8asm.common.tokens import Kind, Token, Mnemonic, Register, PSEUDO_OPERANDS
from c8asm.common.isa import IMM_MASK
from c8asm.sasm.errors import UnknownIdentifier


SEPARATORS = b', \t\n'
NEWLINE = ord('\n')
COMMENT = ord(';')


# Lower-cased spelling -> (kind, value)
keywords: dict[str, tuple[Kind, Mnemonic | Register | None]] = {}
keywords.update({m.value: (Kind.OPCODE, m) for m in Mnemonic})
keywords.update({r.spelling(): (Kind.REG, r) for r in Register})
keywords.update({k.value: (k, None) for k in PSEUDO_OPERANDS})

hex_const = pp.Regex('0x[0-9a-f]+').set_parse_action(
    lambda r: (Kind.IMM, int(r[0][2:], 16) & IMM_MASK))
dec_const = pp.Regex('[0-9]+').set_parse_action(
    lambda r: (Kind.IMM, int(r[0]) & IMM_MASK))
keyword = pp.one_of(list(keywords)).set_parse_action(lambda r: keywords[r[0]])

word = hex_const | dec_const | keyword


def classify(text: str) -> tuple[Kind, Mnemonic | Register | int | None] | None:
    ''' Kind and value of a lower-cased buffer, None if it is not a token '''
    try:
        return word.parse_string(text, parse_all=True)[0]
    except pp.ParseException:
        return None


class Lexer:
    line: int
    strict: bool

    def __init__(self, data: bytes | Iterable[int], strict: bool = False):
        self.input = iter(data)
        self.line = 1
        self.strict = strict
        self.comment_pending = False

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()

            if token is None:
                return

            yield token

    def next_token(self) -> Token | None:
        if self.comment_pending:
            self.comment_pending = False
            return self.skip_comment()

        buffer = bytearray()

        for b in self.input:
            if b == COMMENT:
                token = self.create_token(buffer)

                if token is not None:
                    # Comment follows on the next call
                    self.comment_pending = True
                    return token

                return self.skip_comment()

            if b not in SEPARATORS:
                buffer.append(b)
                continue

            token = self.create_token(buffer)

            if b == NEWLINE:
                self.line += 1

            if token is not None:
                return token

            buffer.clear()

        return self.create_token(buffer)

    def skip_comment(self) -> Token:
        line = self.line

        for b in self.input:
            if b == NEWLINE:
                self.line += 1
                break

        return Token(Kind.COMMENT, line)

    def create_token(self, buffer: bytearray) -> Token | None:
        try:
            text = buffer.decode('ascii').lower().strip()
        except UnicodeDecodeError:
            return self.drop(buffer.decode('ascii', errors='replace'))

        if not text:
            return None

        classified = classify(text)

        if classified is None:
            return self.drop(text)

        kind, value = classified
        return Token(kind, self.line, value)

    def drop(self, text: str) -> None:
        if self.strict:
            raise UnknownIdentifier(text, self.line)

        lg.warning(f"Skipping unrecognized token '{text}' at line {self.line}")
        return None


def tokenize(data: bytes | Iterable[int], strict: bool = False) -> Iterator[Token]:
    return iter(Lexer(data, strict))
