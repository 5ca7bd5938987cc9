"""Error types for version derivation and version file patching."""

from __future__ import annotations

from dataclasses import dataclass

from crel.git.repository import GitOperationError

__all__ = [
    "FileIOError",
    "GitOperationError",
    "MaterializeError",
    "VersionFileError",
    "VersionFilesFailed",
    "VersionMatchError",
    "VersionParseError",
]


@dataclass(frozen=True, slots=True)
class VersionParseError:
    text: str
    reason: str = "expected [v]MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]"

    @property
    def message(self) -> str:
        return f"invalid version '{self.text}': {self.reason}"


@dataclass(frozen=True, slots=True)
class FileIOError:
    """A version file could not be read or written."""

    path: str
    reason: str

    @property
    def message(self) -> str:
        return f"version file error ({self.path}): {self.reason}"


@dataclass(frozen=True, slots=True)
class VersionMatchError:
    """The configured prefix/version/postfix pattern is absent from a file."""

    path: str
    pattern: str

    @property
    def message(self) -> str:
        return f"unable to find version in version file {self.path}"

    @property
    def hint(self) -> str:
        return f"pattern: {self.pattern}"


VersionFileError = FileIOError | VersionMatchError


@dataclass(frozen=True, slots=True)
class VersionFilesFailed:
    """One or more version files could not be patched.

    Carries every per-file failure, not only the first.
    """

    errors: tuple[VersionFileError, ...]

    @property
    def message(self) -> str:
        n = len(self.errors)
        return f"{n} version file{'s' if n != 1 else ''} could not be updated"


MaterializeError = VersionParseError | GitOperationError | VersionFilesFailed
