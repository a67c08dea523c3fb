"""Generate emulator test fixtures from compiled RISC-V architectural tests."""

__version__ = "0.1.0"


class IsaTestsError(Exception):
    pass


class ToolError(IsaTestsError):
    def __init__(self, cmd, returncode=None, stderr=""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr or ""
        if returncode is None:
            msg = f"{self.cmd[0]}: executable not found"
        else:
            msg = f"{' '.join(self.cmd)} exited with status {returncode}"
        super().__init__(msg)


class SignatureFormatError(IsaTestsError):
    pass


class SignatureLayoutError(IsaTestsError):
    pass
