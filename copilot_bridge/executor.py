"""
Copilot Bridge — Execution engine.
Runs one copilot process to completion, captures stdout+stderr as they are
written, and classifies the exit code.
"""
import logging
import os
import subprocess
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Dict, List, Optional, Sequence, Tuple

from .config import COLOR_ENV, READER_JOIN_TIMEOUT_S
from .errors import CommandFailedError, CommandTimeoutError, SpawnError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionOutcome:
    argv: Tuple[str, ...]
    exit_code: int
    output: bytes   # stdout and stderr merged in arrival order
    stdout: bytes   # stdout only, what --json decoders read

    @property
    def text(self) -> str:
        return self.output.decode("utf-8", errors="replace")


class OutputCapture:
    """Write-as-you-go buffer fed by the pipe readers, optionally mirrored."""

    def __init__(self, mirror: Optional[IO[bytes]] = None):
        self._mirror = mirror
        self._lock = threading.Lock()
        self._merged: List[bytes] = []
        self._stdout: List[bytes] = []

    def pump(self, stream: IO[bytes], is_stdout: bool) -> None:
        with stream:
            for line in iter(stream.readline, b""):
                self.write(line, is_stdout)

    def write(self, chunk: bytes, is_stdout: bool = True) -> None:
        with self._lock:
            self._merged.append(chunk)
            if is_stdout:
                self._stdout.append(chunk)
            if self._mirror is not None:
                self._mirror.write(chunk)
                if hasattr(self._mirror, "flush"):
                    self._mirror.flush()
        logger.debug("copilot: %s", chunk.rstrip().decode("utf-8", errors="replace"))

    @property
    def output(self) -> bytes:
        with self._lock:
            return b"".join(self._merged)

    @property
    def stdout(self) -> bytes:
        with self._lock:
            return b"".join(self._stdout)


def build_env(overrides: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Caller's environment, then overrides, then the color switch on top."""
    env = dict(os.environ)
    env.update(overrides or {})
    env.update(COLOR_ENV)
    return env


def join_readers(readers: List[threading.Thread], deadline: Optional[float]) -> None:
    """Wait for the pipe readers, never past the deadline or the grace period."""
    limit = time.monotonic() + READER_JOIN_TIMEOUT_S
    if deadline is not None:
        limit = min(limit, deadline)
    for reader in readers:
        reader.join(max(0.0, limit - time.monotonic()))
    if any(reader.is_alive() for reader in readers):
        # a leftover grandchild still holds the pipe; keep what arrived so far
        logger.warning("output pipes still open after the child exited")


def run_command(
    executable: Path,
    args: Sequence[str],
    *,
    timeout_s: Optional[float],
    mirror: Optional[IO[bytes]] = None,
    env: Optional[Dict[str, str]] = None,
) -> ExecutionOutcome:
    """
    Execute `executable args...` and block until it exits.
    Returns the outcome on exit code 0.
    Raises SpawnError, CommandTimeoutError or CommandFailedError otherwise.
    A timeout of None or 0 waits forever.
    """
    argv = (str(executable), *args)
    deadline = time.monotonic() + timeout_s if timeout_s else None
    try:
        proc = subprocess.Popen(
            list(argv),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=build_env(env),
        )
    except OSError as e:
        raise SpawnError(argv, e) from e

    capture = OutputCapture(mirror)
    readers = [
        threading.Thread(target=capture.pump, args=(proc.stdout, True), daemon=True),
        threading.Thread(target=capture.pump, args=(proc.stderr, False), daemon=True),
    ]
    for reader in readers:
        reader.start()

    try:
        exit_code = proc.wait(timeout=timeout_s or None)
    except subprocess.TimeoutExpired:
        proc.kill()
        proc.wait()
        join_readers(readers, None)
        logger.warning("killed pid %s after %ss", proc.pid, timeout_s)
        raise CommandTimeoutError(argv, timeout_s, capture.output)
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()

    join_readers(readers, deadline)

    logger.debug("pid %s exited with %s", proc.pid, exit_code)
    if exit_code != 0:
        logger.warning("copilot %s exited with %s", " ".join(args[:2]), exit_code)
        raise CommandFailedError(argv, exit_code, capture.output)
    return ExecutionOutcome(argv=argv, exit_code=exit_code, output=capture.output, stdout=capture.stdout)
