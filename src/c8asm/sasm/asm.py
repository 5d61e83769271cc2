import logging as lg
import struct
from typing import Iterable

from c8asm.sasm.lexer import Lexer
from c8asm.sasm.encoder import Encoder
from c8asm.common.isa import WORD_MASK, WORD_SIZE


class AsmSettings:
    verbose: bool
    strict: bool

    def __init__(self):
        self.verbose = False
        self.strict = False

    def update(
        self,
        verbose: bool | None = None,
        strict: bool | None = None
    ):
        if verbose is not None:
            self.verbose = verbose

        if strict is not None:
            self.strict = strict

        return self


class CompilationItem:
    name: str = '<string>'
    contents: bytes

    def __init__(self, contents: bytes | str = b'', name: str | None = None):
        if isinstance(contents, str):
            contents = contents.encode()

        self.contents = contents

        if name is not None:
            self.name = name


def words_to_bytes(words: Iterable[int]) -> bytes:
    bytestr = bytearray()

    for word in words:
        bytestr += struct.pack('>H', word & WORD_MASK)

    return bytes(bytestr)


def compile_words(item: CompilationItem, settings: AsmSettings | None = None) -> list[int]:
    if settings is None:
        settings = AsmSettings()

    lg.info(f'Processing {item.name}')
    lexer = Lexer(item.contents, strict=settings.strict)
    words = Encoder().encode(lexer)
    lg.debug(f'{len(words)} words from {item.name}')

    if settings.verbose:
        for index, word in enumerate(words):
            lg.info(f'{index * WORD_SIZE:04X}: {word:04X}')

    return words


def compile_item(item: CompilationItem, settings: AsmSettings | None = None) -> bytes:
    return words_to_bytes(compile_words(item, settings))


def assemble_words(source: bytes | str, settings: AsmSettings | None = None) -> list[int]:
    return compile_words(CompilationItem(source), settings)


def assemble(source: bytes | str, settings: AsmSettings | None = None) -> bytes:
    return compile_item(CompilationItem(source), settings)
