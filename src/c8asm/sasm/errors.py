from typing import Iterable

from c8asm.common.tokens import Token


class AsmError(Exception):
    ''' Assembly failure, words keeps the instructions committed before it '''
    line: int
    words: list[int]

    def __init__(self, message: str, line: int, words: Iterable[int] = ()):
        super().__init__(message)
        self.line = line
        self.words = list(words)


class IllegalToken(AsmError):
    token: Token

    def __init__(self, token: Token, words: Iterable[int] = (), reason: str | None = None):
        message = f"Illegal token '{token}' at line {token.line}"

        if reason is not None:
            message = f'{message} ({reason})'

        super().__init__(message, token.line, words)
        self.token = token


class UnterminatedInstruction(AsmError):
    token: Token

    def __init__(self, token: Token, words: Iterable[int] = ()):
        super().__init__(
            f"Instruction '{token}' opened at line {token.line} is incomplete at end of input",
            token.line,
            words
        )
        self.token = token


class UnknownIdentifier(AsmError):
    text: str

    def __init__(self, text: str, line: int):
        super().__init__(f"Unrecognized token '{text}' at line {line}", line)
        self.text = text
