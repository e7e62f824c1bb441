"""Low-level process runner for adb commands."""

from __future__ import annotations

import logging
import subprocess
import sys
from collections.abc import Iterator, Sequence
from typing import Protocol

from adb_uninstall.client.errors import AdbCommandError, AdbExitError, AdbTimeoutError

logger = logging.getLogger(__name__)

# Keep a console window from flashing up for every adb call on Windows.
_CREATION_FLAGS: int = (
    subprocess.CREATE_NO_WINDOW if sys.platform.startswith("win") else 0  # type: ignore[attr-defined]
)

# adb relays device output verbatim; undecodable bytes must not abort a command.
_ENCODING: str = "utf-8"
_DECODE_ERRORS: str = "replace"


class CommandRunner(Protocol):
    """Capability to run an external command and capture its stdout."""

    def run(self, argv: Sequence[str]) -> str:
        """Run *argv* to completion and return its stdout."""
        ...

    def stream(self, argv: Sequence[str]) -> Iterator[str]:
        """Run *argv* and yield output lines (without newline) as they arrive."""
        ...


class SubprocessRunner:
    """:class:`CommandRunner` backed by :mod:`subprocess`.

    Maps launch failures, timeouts and non-zero exit codes to the
    :mod:`.errors` types.

    Args:
        timeout_s: Per-command timeout in seconds (default 30).  For
            :meth:`stream` it bounds the wait for exit once stdout closes.
    """

    def __init__(self, timeout_s: float = 30.0) -> None:
        self.timeout_s: float = timeout_s

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, argv: Sequence[str]) -> str:
        """Run *argv* and return its stdout.

        Raises:
            AdbCommandError: If the executable cannot be started.
            AdbTimeoutError: If the command exceeds :attr:`timeout_s`.
            AdbExitError: If the command exits with a non-zero status.
        """
        logger.debug("Running %s", argv)
        try:
            result = subprocess.run(
                list(argv),
                capture_output=True,
                encoding=_ENCODING,
                errors=_DECODE_ERRORS,
                timeout=self.timeout_s,
                check=False,
                creationflags=_CREATION_FLAGS,
            )
        except subprocess.TimeoutExpired as exc:
            raise AdbTimeoutError(argv, self.timeout_s, exc) from exc
        except OSError as exc:
            raise AdbCommandError(argv, exc) from exc

        if result.returncode != 0:
            raise AdbExitError(argv, result.returncode, result.stderr or "")
        if result.stderr and result.stderr.strip():
            logger.debug("stderr from %s: %s", argv, result.stderr.strip())
        return result.stdout or ""

    def stream(self, argv: Sequence[str]) -> Iterator[str]:
        """Run *argv* and lazily yield its output lines.

        stderr is merged into stdout, so adb's error messages arrive as
        ordinary lines in the order adb printed them.  The process is
        started on first iteration.  After the output is drained the exit
        status is checked.

        Raises:
            AdbCommandError: If the executable cannot be started.
            AdbTimeoutError: If the process does not exit within
                :attr:`timeout_s` after closing its output.
            AdbExitError: If the command exits with a non-zero status.
        """
        logger.debug("Streaming %s", argv)
        try:
            proc = subprocess.Popen(
                list(argv),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding=_ENCODING,
                errors=_DECODE_ERRORS,
                creationflags=_CREATION_FLAGS,
            )
        except OSError as exc:
            raise AdbCommandError(argv, exc) from exc

        last_line = ""
        with proc:
            for line in proc.stdout or ():
                last_line = line.rstrip("\r\n")
                yield last_line
            try:
                proc.wait(timeout=self.timeout_s)
            except subprocess.TimeoutExpired as exc:
                proc.kill()
                raise AdbTimeoutError(argv, self.timeout_s, exc) from exc

        if proc.returncode != 0:
            raise AdbExitError(argv, proc.returncode, last_line)
