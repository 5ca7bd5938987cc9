"""Error presentation utilities.

Centralized error formatting and exit code mapping for the CLI.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from crel.core.config import ConfigError
from crel.core.errors import ErrorCode
from crel.output.console import Style
from crel.release.errors import (
    FileIOError,
    GitOperationError,
    VersionFilesFailed,
    VersionMatchError,
    VersionParseError,
)

if TYPE_CHECKING:
    from crel.output.console import ConsoleProtocol

__all__ = ["CrelError", "error_exit_code", "print_error"]

CrelError = (
    ConfigError
    | GitOperationError
    | VersionParseError
    | FileIOError
    | VersionMatchError
    | VersionFilesFailed
)


def print_error(error: CrelError, console: ConsoleProtocol) -> None:
    """Print an error to console with appropriate formatting."""
    match error:
        case ConfigError(message=message):
            console.error(f"invalid configuration: {message}")
            if error.hint is not None:
                console.print(f"hint: {error.hint}", Style.DIM)
        case GitOperationError(command=command, message=message):
            console.error(f"git {command} failed: {message}")
        case VersionParseError() | FileIOError():
            console.error(error.message)
        case VersionMatchError():
            console.error(error.message)
            console.print(f"hint: {error.hint}", Style.DIM)
        case VersionFilesFailed(errors=errors):
            console.error(error.message)
            for item in errors:
                console.print(f"  {item.message}", Style.DIM)
                if isinstance(item, VersionMatchError):
                    console.print(f"    {item.hint}", Style.DIM)


def error_exit_code(error: CrelError) -> int:
    """Get exit code for an error."""
    match error:
        case ConfigError():
            return int(ErrorCode.CONFIG_ERROR)
        case GitOperationError():
            return int(ErrorCode.GIT_ERROR)
        case VersionParseError():
            return int(ErrorCode.VERSION_ERROR)
        case FileIOError() | VersionMatchError() | VersionFilesFailed():
            return int(ErrorCode.IO_ERROR)
