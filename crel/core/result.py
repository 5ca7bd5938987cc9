"""Ok/Err values for fallible operations.

Git calls, config loading and version file patching return ``Ok(value)``
or ``Err(error)``. Errors are frozen dataclasses; the CLI matches on them
to pick the message and the exit code.

Usage:
    match repo.head_commit_id():
        case Ok(commit_id):
            print(commit_id[:7])
        case Err(error):
            print(f"git failed: {error.message}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

__all__ = ["Err", "Ok", "Result"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: object) -> T:
        return self.value

    def map_err(self, f: Callable[[object], object]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E

    def unwrap(self) -> None:
        """Raise ValueError; only for tests and call sites that checked first."""
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or[T](self, default: T) -> T:
        return default

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Replace the error, e.g. to attach the file it came from."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
