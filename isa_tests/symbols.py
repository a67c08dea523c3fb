"""Symbol table readers.

Both readers return a mapping of symbol name to 32-bit address for the
symbols defined in one section (``.data`` by default), which is where the
architectural tests place ``begin_signature``, ``end_signature`` and the
``test_N_res`` boundaries.
"""

from elftools.elf.elffile import ELFFile
from elftools.elf.sections import SymbolTableSection

from .signature import parse_word

DATA_SECTION = ".data"


def parse_symbol_table(text, section=DATA_SECTION):
    """Parse ``objdump -t`` output.

    A line looks like::

        80002000 g       .data  00000000 begin_signature

    Lines that are too short, belong to another section or carry an address
    that is not 32-bit hex are skipped.
    """
    symbols = {}
    for line in text.splitlines():
        fields = line.split()
        if len(fields) < 5:
            continue
        if fields[2] != section:
            continue
        try:
            address = parse_word(fields[0])
        except ValueError:
            continue
        symbols[fields[-1]] = address
    return symbols


def read_elf_symbols(elf_path, section=DATA_SECTION):
    symbols = {}
    with open(elf_path, "rb") as f:
        elf = ELFFile(f)
        index = elf.get_section_index(section)
        if index is None:
            return symbols
        # Enumerate the SymbolTableSection
        for sect in elf.iter_sections():
            if not isinstance(sect, SymbolTableSection):
                continue
            for symbol in sect.iter_symbols():
                if not symbol.name or symbol.entry.st_shndx != index:
                    continue
                if symbol.entry.st_value > 0xFFFFFFFF:
                    continue
                symbols[symbol.name] = symbol.entry.st_value
    return symbols
