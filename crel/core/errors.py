"""Process exit codes, one per failure family."""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit status of ``crel``.

    - 0: version printed, requested steps done
    - 1: conventional_release.toml unreadable or invalid
    - 2: not a repository, or a git command failed
    - 3: a version text could not be parsed
    - 4: a version file could not be read, matched or written
    """

    OK = 0
    CONFIG_ERROR = 1
    GIT_ERROR = 2
    VERSION_ERROR = 3
    IO_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self is ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return not self.is_success
