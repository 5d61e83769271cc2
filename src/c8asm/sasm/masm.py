import sys
from pathlib import Path
import logging as lg

import click

from c8asm.sasm.asm import AsmSettings, CompilationItem, compile_item
from c8asm.sasm.errors import AsmError


EXIT_OK = 0
EXIT_ASM_ERROR = 1
EXIT_IO_ERROR = 2


def collect_file(filepath: str | Path) -> CompilationItem:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Collecting file {filepath}')
    return CompilationItem(filepath.read_bytes(), filepath.name)


@click.command()
@click.option('-i', '--input', 'source', required=True, type=Path,
              help='The text file (assembly) to be assembled')
@click.option('-o', '--output', 'binary', required=True, type=Path,
              help='File name of the assembled output')
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-s', '--strict', is_flag=True, help='Fail on unrecognized tokens')
def compile(source: Path, binary: Path, verbose: bool, strict: bool):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('C8ASM')

    settings = AsmSettings().update(verbose=verbose, strict=strict)

    try:
        item = collect_file(source)
    except OSError as e:
        lg.error(f'Cannot read {source}: {e}')
        sys.exit(EXIT_IO_ERROR)

    try:
        bytestr = compile_item(item, settings)
    except AsmError as e:
        lg.error(f'{item.name}: {e}')
        binary.unlink(missing_ok=True)
        sys.exit(EXIT_ASM_ERROR)

    try:
        binary.parent.mkdir(parents=True, exist_ok=True)
        binary.write_bytes(bytestr)
    except OSError as e:
        lg.error(f'Cannot write {binary}: {e}')
        sys.exit(EXIT_IO_ERROR)

    lg.info(f'Wrote {len(bytestr)} bytes to {binary}')
    sys.exit(EXIT_OK)


if __name__ == '__main__':
    compile()
