"""External command execution behind a single capability interface."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

log = logging.getLogger(__name__)

# Exit code reported when the command could not be started at all.
NOT_FOUND = 127

_DEFAULT_TIMEOUT = 30


@dataclass(frozen=True, slots=True)
class CommandOutcome:
    """Exit code and captured output of a finished command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessRunner(Protocol):
    """Anything that can run a command to completion in a working directory."""

    def run(self, command: str, args: Sequence[str], cwd: Path | str | None = None) -> CommandOutcome:
        ...


class SubprocessRunner:
    """Runs commands with :func:`subprocess.run`, never raising."""

    def __init__(self, timeout: float = _DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout

    def run(self, command: str, args: Sequence[str], cwd: Path | str | None = None) -> CommandOutcome:
        try:
            proc = subprocess.run(
                [command, *args],
                cwd=cwd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError:
            log.debug("Command not found: %s", command)
            return CommandOutcome(NOT_FOUND, stderr=f"{command}: command not found")
        except subprocess.TimeoutExpired:
            log.warning("%s %s timed out after %ss", command, " ".join(args), self.timeout)
            return CommandOutcome(-1, stderr=f"{command} timed out")
        except OSError as e:
            log.debug("Cannot run %s: %s", command, e)
            return CommandOutcome(NOT_FOUND, stderr=str(e))
        return CommandOutcome(proc.returncode, proc.stdout, proc.stderr)
