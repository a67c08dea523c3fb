import logging
import os
from dataclasses import dataclass

from . import SignatureLayoutError
from .signature import read_signature
from .symbols import parse_symbol_table, read_elf_symbols
from .toolchain import dump_symbols, extract_binary

logger = logging.getLogger(__name__)

ELF_SUFFIX = ".elf"
SIGNATURE_SUFFIX = ".signature.output"
WORD_SIZE = 4
SEGMENT_END = "---"


@dataclass
class ElfProgram:
    name: str
    elf_path: str
    signature_path: str

    @property
    def case_name(self):
        # make a valid identifier
        return self.name.replace("-", "_")

    def bin_path(self, output_dir):
        return os.path.join(output_dir, self.case_name + ".bin")

    def want_path(self, output_dir):
        return os.path.join(output_dir, self.case_name + ".want")


def find_test_programs(input_dir, suffix=ELF_SUFFIX):
    """Yield a ElfProgram for every ``*.elf`` file directly inside input_dir."""
    for filename in sorted(os.listdir(input_dir)):
        path = os.path.join(input_dir, filename)
        if os.path.isdir(path) or not filename.endswith(suffix):
            continue
        name = filename[:-len(suffix)]
        yield ElfProgram(name, path, os.path.join(input_dir, name + SIGNATURE_SUFFIX))


def _symbol(symbols, name):
    try:
        return symbols[name]
    except KeyError:
        raise SignatureLayoutError(f"symbol {name} not found") from None


def result_counts(symbols):
    """Split the signature region into per-test word counts.

    The region starts at ``begin_signature``; ``test_1_res``, ``test_2_res``...
    mark the start of each following test's results, and the first missing
    one means the last segment runs up to ``end_signature``.
    """
    counts = []
    start = _symbol(symbols, "begin_signature")
    i = 1
    while True:
        end = symbols.get(f"test_{i}_res")
        last = end is None
        if last:
            end = _symbol(symbols, "end_signature")
        if end < start:
            raise SignatureLayoutError(f"signature boundary 0x{end:08x} is below 0x{start:08x}")
        counts.append((end - start) // WORD_SIZE)
        if last:
            return counts
        start = end
        i += 1


def format_expected(counts, values):
    needed = sum(counts)
    if len(values) < needed:
        raise SignatureLayoutError(f"signature has {len(values)} values, symbols describe {needed}")
    if len(values) > needed:
        logger.warning("ignoring %d trailing signature values", len(values) - needed)

    lines = []
    it = iter(values)
    for count in counts:
        for _ in range(count):
            lines.append(f"{next(it):08x}")
        lines.append(SEGMENT_END)
    return "".join(line + "\n" for line in lines)


def gather_symbols(config, elf_path):
    if config.symbol_source == "elf":
        return read_elf_symbols(elf_path)
    return parse_symbol_table(dump_symbols(config.objdump, elf_path))


def generate_case(config, program):
    """Write the .bin/.want pair for one program and return its signature base address."""
    extract_binary(config.objcopy, program.elf_path, program.bin_path(config.output_dir))

    symbols = gather_symbols(config, program.elf_path)
    counts = result_counts(symbols)
    values = read_signature(program.signature_path)
    expected = format_expected(counts, values)

    with open(program.want_path(config.output_dir), "w") as f:
        f.write(expected)
    logger.debug("%s: %d segments, %d words", program.case_name, len(counts), sum(counts))
    return symbols["begin_signature"]
