import pytest

from c8asm.common.tokens import Mnemonic
from c8asm.common.isa import FORMATS, TABLE, Format


def test_every_mnemonic_but_sys_has_forms():
    for mnemonic in Mnemonic:
        if mnemonic == Mnemonic.SYS:
            assert TABLE[mnemonic] == []
        else:
            assert TABLE[mnemonic], mnemonic


def test_no_duplicate_shapes():
    keys = [(fmt.mnemonic, fmt.shape) for fmt in FORMATS]
    assert len(keys) == len(set(keys))


@pytest.mark.parametrize('mnemonic', list(Mnemonic))
def test_no_shape_prefixes_another(mnemonic):
    shapes = [fmt.shape for fmt in TABLE[mnemonic]]

    for shape in shapes:
        for other in shapes:
            if other != shape:
                assert other[:len(shape)] != shape


@pytest.mark.parametrize('fmt', FORMATS, ids=str)
def test_template_matches_shape(fmt: Format):
    template = fmt.template

    assert len(template) == 4
    assert ('x' in template) == ('Vx' in fmt.shape)
    assert ('y' in template) == ('Vy' in fmt.shape)
    assert ('kk' in template) == ('byte' in fmt.shape)

    if 'addr' in fmt.shape:
        assert template.endswith('nnn')
    elif 'nibble' in fmt.shape:
        assert template.endswith('n') and not template.endswith('nn')
    else:
        assert 'n' not in template


def test_format_base_and_arity():
    fmt = Format(Mnemonic.DRW, ('Vx', 'Vy', 'nibble'), 'Dxyn')

    assert fmt.base == 0xD000
    assert fmt.arity == 3
    assert str(fmt) == 'drw Vx, Vy, nibble'
    assert str(TABLE[Mnemonic.CLS][0]) == 'cls'
