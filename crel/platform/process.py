"""Child process execution.

``run`` is the only place crel spawns processes. Output is decoded as
UTF-8 with replacement so a commit message in a legacy encoding never
aborts a run.

Usage:
    match run(["git", "rev-parse", "HEAD"], cwd=repo_root, timeout=30):
        case Ok(stdout):
            head = stdout.strip()
        case Err(error):
            print(error.detail)
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from crel.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]

# Returncode used when the process could not be started or was killed.
NOT_RUN = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that could not run or exited non-zero.

    Attributes:
        command: Full argv
        returncode: Exit status, NOT_RUN if the process never finished
        stdout: Captured standard output
        stderr: Captured standard error, or the reason it never ran
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def detail(self) -> str:
        """Most useful text to show: stderr, else stdout, else empty."""
        return self.stderr.strip() or self.stdout.strip()

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        if len(self.command) > 3:
            shown += " ..."
        return f"{shown} failed (exit {self.returncode})"


def _failure(cmd: list[str], reason: str) -> Err[ProcessError]:
    return Err(ProcessError(command=tuple(cmd), returncode=NOT_RUN, stdout="", stderr=reason))


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run cmd in cwd and return its stdout.

    Args:
        cmd: Program and arguments
        cwd: Working directory
        env: Complete child environment, None to inherit
        timeout: Seconds before the child is killed, None for no limit
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return _failure(cmd, f"Command timed out after {timeout}s")
    except OSError as e:
        return _failure(cmd, str(e))

    if proc.returncode != 0:
        return Err(ProcessError(tuple(cmd), proc.returncode, proc.stdout, proc.stderr))
    return Ok(proc.stdout)
