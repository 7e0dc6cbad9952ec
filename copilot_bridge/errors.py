"""
Copilot Bridge — Error taxonomy.

    SetupError           executable missing at CLI construction
    SpawnError           child process could not be started
    CommandFailedError   child ran and exited non-zero
    CommandTimeoutError  child exceeded the wait bound and was killed
    DecodeError          child succeeded but its JSON did not match the shape
"""
import shlex
from typing import Any, List, Optional, Sequence


class BridgeError(RuntimeError):
    ...


class SetupError(BridgeError):
    ...


class SpawnError(BridgeError):
    def __init__(self, argv: Sequence[str], cause: OSError):
        self.argv = list(argv)
        self.cause = cause
        super().__init__(f"could not start {shlex.join(self.argv)}: {cause}")


class CommandFailedError(BridgeError):
    """The process started, ran to completion and exited non-zero."""

    def __init__(self, argv: Sequence[str], exit_code: int, output: bytes):
        self.argv = list(argv)
        self.exit_code = exit_code
        self.output = output
        super().__init__(f"received non 0 exit code ({exit_code}) from {shlex.join(self.argv)}")

    @property
    def text(self) -> str:
        return self.output.decode("utf-8", errors="replace")


class CommandTimeoutError(BridgeError):
    def __init__(self, argv: Sequence[str], timeout_s: float, output: bytes):
        self.argv = list(argv)
        self.timeout_s = timeout_s
        self.output = output
        super().__init__(f"{shlex.join(self.argv)} did not exit within {timeout_s}s and was killed")

    @property
    def text(self) -> str:
        return self.output.decode("utf-8", errors="replace")


class DecodeError(BridgeError):
    """Output of a successful run could not be decoded into the expected shape."""

    def __init__(self, shape: str, payload: bytes, errors: Optional[List[Any]] = None):
        self.shape = shape
        self.payload = payload
        self.errors = errors or []
        first = self.errors[0].get("msg", "") if self.errors else ""
        super().__init__(f"could not decode {shape} from {len(payload)} bytes: {first}")
