import re

from . import SignatureFormatError

HEX_RE = re.compile(r"[0-9a-fA-F]+")


def parse_word(text):
    """Parse a bare hex string as an unsigned 32-bit value, ValueError otherwise."""
    if not HEX_RE.fullmatch(text):
        raise ValueError(f"invalid hex value {text!r}")
    value = int(text, 16)
    if value > 0xFFFFFFFF:
        raise ValueError(f"{text!r} does not fit in 32 bits")
    return value


def parse_signature(text, source="<signature>"):
    values = []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    for lineno, line in enumerate(lines, 1):
        try:
            values.append(parse_word(line.rstrip("\r")))
        except ValueError as e:
            raise SignatureFormatError(f"{source}:{lineno}: {e}") from None
    return values


def read_signature(path):
    """Read the expected result words dumped by the reference model."""
    try:
        with open(path, encoding="ascii", newline="") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise SignatureFormatError(f"{path}: not an ASCII text file: {e}") from None
    return parse_signature(text, str(path))
