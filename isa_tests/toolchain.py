import logging
import subprocess

from . import ToolError

logger = logging.getLogger(__name__)


def run(cmd):
    logger.debug("running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, check=False, capture_output=True, text=True, errors="replace")
    except FileNotFoundError:
        raise ToolError(cmd) from None
    if result.returncode != 0:
        raise ToolError(cmd, result.returncode, result.stderr)
    return result.stdout


def extract_binary(objcopy, elf_path, bin_path):
    """Write the loadable image of elf_path to bin_path as a flat binary."""
    run([objcopy, "-O", "binary", str(elf_path), str(bin_path)])


def dump_symbols(objdump, elf_path):
    return run([objdump, "-t", str(elf_path)])
