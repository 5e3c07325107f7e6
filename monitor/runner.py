"""
monitor.runner
AUTHOR: carter-vin

Subprocess capability for the pipeline

- spawn first token as executable, remaining tokens as argv (no shell)
- stdio inherited so the wrapped command talks to the terminal / cron directly
- wait without timeout; the run duration is what is being measured
"""

from __future__ import annotations

import errno
import subprocess
from dataclasses import dataclass
from signal import SIGINT
from typing import Optional, Protocol, Sequence, Union

# Shell conventions for "could not run the command"
EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127
EXIT_FATAL = 125


@dataclass(frozen=True)
class Completed:
    """Process exited on its own with an exit code."""

    exit_code: int


@dataclass(frozen=True)
class Interrupted:
    """Process ended without an exit code (killed by a signal)."""

    signal: Optional[int] = None


ExecutionOutcome = Union[Completed, Interrupted]


class SpawnError(RuntimeError):
    """
    Executable could not be started

    exit_code follows shell conventions: 127 not found, 126 not executable
    """

    def __init__(self, message: str, *, exit_code: int = EXIT_FATAL) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class Spawner(Protocol):
    def spawn_and_wait(self, tokens: Sequence[str]) -> ExecutionOutcome: ...


def _spawn_exit_code(e: OSError) -> int:
    if isinstance(e, FileNotFoundError):
        return EXIT_NOT_FOUND
    if isinstance(e, PermissionError) or e.errno == errno.ENOEXEC:
        return EXIT_NOT_EXECUTABLE
    return EXIT_FATAL


def classify_returncode(returncode: int) -> ExecutionOutcome:
    """
    Map Popen.returncode to an outcome

    POSIX reports signal termination as a negative returncode
    """
    if returncode < 0:
        return Interrupted(signal=-returncode)
    return Completed(exit_code=returncode)


class SubprocessSpawner:
    """
    Real process execution via subprocess
    """

    def spawn_and_wait(self, tokens: Sequence[str]) -> ExecutionOutcome:
        argv = list(tokens)
        try:
            proc = subprocess.Popen(argv)
        except OSError as e:
            raise SpawnError(
                f"failed to start {argv[0]!r}: {e.strerror or e}",
                exit_code=_spawn_exit_code(e),
            ) from e

        try:
            returncode = proc.wait()
        except KeyboardInterrupt:
            # Ctrl+C reaches the child too; reap it and report the interruption
            try:
                proc.wait()
            except KeyboardInterrupt:
                # Second Ctrl+C kills the child
                proc.kill()
                proc.wait()
            return Interrupted(signal=int(SIGINT))

        return classify_returncode(returncode)
