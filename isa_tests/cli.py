import argparse
import logging
import os
import sys

from . import IsaTestsError, ToolError, __version__
from .config import DEFAULT_MACRO, SYMBOL_SOURCES, Config
from .fixtures import find_test_programs, generate_case
from .log import setup_logging

logger = logging.getLogger("isa_tests")


def format_registrations(cases, macro=DEFAULT_MACRO):
    """Render one registration statement per case, sorted by case name."""
    return "".join(f"{macro}!({name}, 0x{cases[name]:08x});\n" for name in sorted(cases))


def build_parser():
    ap = argparse.ArgumentParser(
        prog="generate-isa-tests",
        description="Convert RISC-V architectural test ELFs and signatures into emulator test fixtures",
    )
    ap.add_argument("input_dir", help="directory holding *.elf and *.signature.output files")
    ap.add_argument("output_dir", help="directory receiving the .bin/.want fixtures")
    ap.add_argument("--toolchain-prefix", help="binutils prefix (default: $RISCV_PREFIX or riscv32-unknown-elf-)")
    ap.add_argument("--objcopy", help="objcopy executable (default: $OBJCOPY or <prefix>objcopy)")
    ap.add_argument("--objdump", help="objdump executable (default: $OBJDUMP or <prefix>objdump)")
    ap.add_argument("--symbol-source", choices=SYMBOL_SOURCES, default="objdump",
                    help="read symbols from objdump output or directly from the ELF")
    ap.add_argument("--macro", default=DEFAULT_MACRO, help="macro used in the registration lines")
    ap.add_argument("--registry", help="write registration lines to this file instead of stdout")
    ap.add_argument("--strict", action="store_true", help="exit with status 1 if any test was skipped")
    verbosity = ap.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", dest="verbosity", action="store_const", const=1, default=0)
    verbosity.add_argument("-q", "--quiet", dest="verbosity", action="store_const", const=-1)
    ap.add_argument("--no-color", dest="color", action="store_false", default=None)
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def generate_all(config):
    """Generate fixtures for every program; return (base addresses by case, failed names)."""
    cases = {}
    failed = []
    for program in find_test_programs(config.input_dir):
        logger.info("working on %s from %s", program.name, program.elf_path)
        try:
            cases[program.case_name] = generate_case(config, program)
        except ToolError as e:
            logger.error("failed to generate %s from %s: %s", program.case_name, program.elf_path, e)
            if e.stderr:
                logger.error("stderr from %s:\n%s", os.path.basename(e.cmd[0]), e.stderr.rstrip())
            failed.append(program.name)
        except (IsaTestsError, OSError) as e:
            logger.error("failed to generate %s: %s", program.case_name, e)
            failed.append(program.name)
    return cases, failed


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbosity, args.color)
    config = Config.from_args(args)

    logger.info("gathering test programs from %s to generate test inputs in %s",
                config.input_dir, config.output_dir)
    try:
        os.makedirs(config.output_dir, exist_ok=True)
    except OSError as e:
        logger.critical("failed to create %s: %s", config.output_dir, e)
        return 1
    try:
        cases, failed = generate_all(config)
    except OSError as e:
        logger.critical("failed to read %s: %s", config.input_dir, e)
        return 1

    registrations = format_registrations(cases, config.macro)
    if config.registry:
        try:
            with open(config.registry, "w") as f:
                f.write(registrations)
        except OSError as e:
            logger.critical("failed to create %s: %s", config.registry, e)
            return 1
    else:
        sys.stdout.write(registrations)

    if failed:
        logger.warning("skipped %d of %d tests: %s", len(failed), len(cases) + len(failed), ", ".join(failed))
        if config.strict:
            return 1
    return 0
