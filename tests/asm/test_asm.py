import logging

import pytest

import c8asm.sasm.asm as asm
from c8asm.sasm.errors import IllegalToken, UnknownIdentifier

import unit_utils
from fixtures import strict_settings  # noqa: F401


def test_words_to_bytes():
    assert asm.words_to_bytes([0x00E0, 0xA21E, 0x12]) == b'\x00\xe0\xa2\x1e\x00\x12'
    assert asm.words_to_bytes([]) == b''


def test_assemble_bytes_and_str():
    assert asm.assemble(b'call 0x300\nret') == b'\x23\x00\x00\xee'
    assert asm.assemble('call 0x300\nret') == b'\x23\x00\x00\xee'


def test_demo_program():
    binary = unit_utils.assemble_file('testdata/programs/demo.c8asm')
    expected = unit_utils.load_words('testdata/programs/demo.hex')

    assert binary == asm.words_to_bytes(expected)
    assert len(binary) == 2 * len(expected)


def test_broken_program():
    with pytest.raises(IllegalToken) as e:
        unit_utils.assemble_file('testdata/programs/broken.c8asm')

    assert str(e.value.token) == 'v1'
    assert e.value.line == 4
    assert e.value.words == [0x00E0, 0x6005]


def test_comments_do_not_change_output():
    plain = 'cls\nld v0, 5\ndrw v0, v0, 1\n'
    commented = '; demo\ncls ; first\n\n\tld v0, 5 ;; value\n; mid\ndrw v0, v0, 1\n;end'

    assert asm.assemble(plain) == asm.assemble(commented)


def test_unknown_tokens_skipped_by_default():
    assert asm.assemble_words('cls\nlabel:\nret') == [0x00E0, 0x00EE]


def test_strict_settings(strict_settings):  # noqa: F811
    with pytest.raises(UnknownIdentifier) as e:
        asm.assemble_words('cls\nlabel:\nret', strict_settings)

    assert e.value.line == 2
    assert e.value.words == [0x00E0]


def test_strict_error_keeps_issued_words(strict_settings):  # noqa: F811
    with pytest.raises(UnknownIdentifier) as e:
        asm.assemble_words('cls\nret\nlabel:', strict_settings)

    assert e.value.words == [0x00E0, 0x00EE]


def test_settings_update():
    settings = asm.AsmSettings().update(verbose=True)

    assert settings.verbose
    assert not settings.strict
    assert settings.update(strict=True).strict
    assert settings.verbose


def test_compilation_item():
    item = asm.CompilationItem('ret', 'inline')

    assert item.contents == b'ret'
    assert item.name == 'inline'
    assert asm.CompilationItem().name == '<string>'
    assert asm.compile_item(item) == b'\x00\xee'


def test_verbose_listing(caplog):
    settings = asm.AsmSettings().update(verbose=True)

    with caplog.at_level(logging.INFO):
        asm.assemble_words('cls\njp 0x200', settings)

    assert '0000: 00E0' in caplog.text
    assert '0002: 1200' in caplog.text
