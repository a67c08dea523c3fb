import logging
import os
import sys

from colorama import Fore, Style, just_fix_windows_console

LEVEL_COLORS = {
    logging.DEBUG: Style.DIM,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}


def supports_color(stream):
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM", "") == "dumb":
        return False
    return hasattr(stream, "isatty") and stream.isatty()


class ColorFormatter(logging.Formatter):
    def __init__(self, color=True):
        super().__init__("%(asctime)s %(levelname)s %(message)s", "%Y/%m/%d %H:%M:%S")
        self.color = color

    def format(self, record):
        msg = super().format(record)
        if not self.color:
            return msg
        return f"{LEVEL_COLORS.get(record.levelno, '')}{msg}{Style.RESET_ALL}"


def setup_logging(verbosity=0, color=None, stream=None):
    """Configure the package logger; verbosity < 0 is quiet, > 0 is debug."""
    stream = stream or sys.stderr
    if color is None:
        color = supports_color(stream)
    if color:
        just_fix_windows_console()

    if verbosity < 0:
        level = logging.ERROR
    elif verbosity > 0:
        level = logging.DEBUG
    else:
        level = logging.INFO

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColorFormatter(color))
    logger = logging.getLogger("isa_tests")
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False
    return logger
