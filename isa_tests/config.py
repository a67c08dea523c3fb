import os
import shutil
from dataclasses import dataclass
from typing import Optional

DEFAULT_PREFIX = "riscv32-unknown-elf-"
DEFAULT_MACRO = "rv32case"
SYMBOL_SOURCES = ("objdump", "elf")


def resolve_tool(name):
    return shutil.which(name) or name


@dataclass
class Config:
    input_dir: str
    output_dir: str
    objcopy: str
    objdump: str
    symbol_source: str = "objdump"
    macro: str = DEFAULT_MACRO
    registry: Optional[str] = None
    strict: bool = False

    @classmethod
    def from_args(cls, args, environ=None):
        """Build a Config from parsed arguments; flags win over the environment."""
        env = os.environ if environ is None else environ
        prefix = args.toolchain_prefix or env.get("RISCV_PREFIX") or DEFAULT_PREFIX
        objcopy = args.objcopy or env.get("OBJCOPY") or f"{prefix}objcopy"
        objdump = args.objdump or env.get("OBJDUMP") or f"{prefix}objdump"
        return cls(
            input_dir=args.input_dir,
            output_dir=args.output_dir,
            objcopy=resolve_tool(objcopy),
            objdump=resolve_tool(objdump),
            symbol_source=args.symbol_source,
            macro=args.macro,
            registry=args.registry,
            strict=args.strict,
        )
