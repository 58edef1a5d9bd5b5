import sys
import logging as lg
import struct
from pathlib import Path
from typing import Tuple

import click

from c8vm.common.hwconf import MAX_PROGRAM_SIZE
from c8vm.casm.fpp import FPP, AsmError
import c8vm.casm.grammar as grammar


class CompilationItem:
    modulename: str
    contents: str

    def __init__(self, modulename: str = 'main', contents: str = ''):
        self.modulename = modulename
        self.contents = contents

    def namespace(self) -> str:
        return self.modulename


def compile_items(compile_items: list[CompilationItem]) -> bytes:
    # First pass
    first_pass = FPP()

    for compile_item in compile_items:
        lg.info("Processing {0}".format(compile_item.namespace()))
        first_pass.namespace = compile_item.namespace()
        actions = grammar.program.parse_string(compile_item.contents, parse_all=True)

        for (func, arg) in actions:  # type: ignore
            func(first_pass, arg)

    # Second pass
    bytestr = bytearray()

    for (t, d) in first_pass.cmd_list:
        if t == 'bytes':
            bytestr += d

        if t == 'ref':
            (base, mask, labelname) = d

            if labelname not in first_pass.label_dict:
                raise AsmError(f'Undefined label {labelname}')

            address = first_pass.label_dict[labelname]
            bytestr += struct.pack('>H', base | (address & mask))

    if len(bytestr) > MAX_PROGRAM_SIZE:
        raise AsmError(f'Program too large: {len(bytestr)} bytes')

    return bytes(bytestr)


def assemble(source: str, modulename: str = 'main') -> bytes:
    return compile_items([CompilationItem(modulename, source)])


def collect_file(filepath: str | Path) -> CompilationItem:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Collecting file {filepath}')
    return CompilationItem(filepath.stem, filepath.read_text())


def collect_files(filepaths: list[Path]) -> list[CompilationItem]:
    return [collect_file(path) for path in filepaths]


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('sources', nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.argument('binary', type=Path)
def compile(verbose: bool, sources: Tuple[Path], binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("C8 ASM")

    try:
        bytestr = compile_items(collect_files(list(sources)))
    except AsmError as e:
        lg.error(f'Assembly failed: {e}')
        sys.exit(1)

    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(bytestr)
    lg.info(f'Wrote {len(bytestr)} bytes to {binary}')


if __name__ == "__main__":
    compile()
