import logging
import struct

import pytest

SYMBOLS = [
    ("begin_signature", 0x80002000, 1),
    ("test_1_res", 0x80002008, 1),
    ("end_signature", 0x80002010, 1),
    ("tohost", 0x80001000, 0xFFF1),
]


def make_elf(symbols, elfclass=32):
    """Build a minimal little-endian RISC-V ELF image with .data and a symbol table."""
    if elfclass == 32:
        sym_fmt, sh_fmt, ehsize, phentsize = "<IIIBBH", "<10I", 52, 32
    else:
        sym_fmt, sh_fmt, ehsize, phentsize = "<IBBHQQ", "<IIQQQQIIQQ", 64, 56
    sym_size = struct.calcsize(sym_fmt)
    sh_size = struct.calcsize(sh_fmt)

    data = bytes(16)
    strtab = b"\0"
    syms = bytes(sym_size)
    for name, value, shndx in symbols:
        if elfclass == 32:
            syms += struct.pack(sym_fmt, len(strtab), value, 0, 0x10, 0, shndx)
        else:
            syms += struct.pack(sym_fmt, len(strtab), 0x10, 0, shndx, value, 0)
        strtab += name.encode() + b"\0"
    shstrtab = b"\0.data\0.symtab\0.strtab\0.shstrtab\0"

    body = data + syms + strtab + shstrtab
    data_off = ehsize
    syms_off = data_off + len(data)
    strtab_off = syms_off + len(syms)
    shstrtab_off = strtab_off + len(strtab)
    shoff = ehsize + len(body)

    headers = bytes(sh_size)
    headers += struct.pack(sh_fmt, 1, 1, 3, 0x80002000, data_off, len(data), 0, 0, 4, 0)
    headers += struct.pack(sh_fmt, 7, 2, 0, 0, syms_off, len(syms), 3, 1, 4, sym_size)
    headers += struct.pack(sh_fmt, 15, 3, 0, 0, strtab_off, len(strtab), 0, 0, 1, 0)
    headers += struct.pack(sh_fmt, 23, 3, 0, 0, shstrtab_off, len(shstrtab), 0, 0, 1, 0)

    ident = b"\x7fELF" + bytes([elfclass // 32, 1, 1, 0]) + bytes(8)
    addr = "I" if elfclass == 32 else "Q"
    ehdr = ident + struct.pack(f"<HHI{addr}{addr}{addr}IHHHHHH", 2, 243, 1, 0x80000000, 0, shoff, 0,
                               ehsize, phentsize, 0, sh_size, 5, 4)
    return ehdr + body + headers


@pytest.fixture
def elf_file(tmp_path):
    path = tmp_path / "rv32ui-p-add.elf"
    path.write_bytes(make_elf(SYMBOLS))
    return path


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger("isa_tests")
    saved = logger.handlers[:], logger.level, logger.propagate
    yield
    logger.handlers[:], logger.level, logger.propagate = saved


@pytest.fixture
def elf64_file(tmp_path):
    path = tmp_path / "rv64ui-p-add.elf"
    path.write_bytes(make_elf(SYMBOLS + [("high_res", 0x100002000, 1)], elfclass=64))
    return path
