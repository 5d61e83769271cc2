# type: ignore
import pytest

import c8asm.sasm.asm as asm

import unit_utils


@pytest.fixture
def strict_settings():
    yield asm.AsmSettings().update(strict=True)


@pytest.fixture
def demo_source(tmp_path):
    path = tmp_path / 'demo.c8asm'
    path.write_text(unit_utils.load_file('testdata/programs/demo.c8asm'))
    yield path
