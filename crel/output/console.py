"""Diagnostic output.

Warnings, progress and errors go through ConsoleProtocol so the release
steps stay testable. The derived version itself is printed by the CLI on
stdout and never passes through here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()

    def __str__(self) -> str:
        return self.name.lower()


# Label printed before success/error/warning/info messages.
_LABELS: dict[Style, str] = {
    Style.SUCCESS: "OK",
    Style.ERROR: "error:",
    Style.WARNING: "warning:",
    Style.INFO: "info:",
}

_RICH_STYLES: dict[Style, str] = {
    Style.DEFAULT: "",
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DIM: "dim",
}


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print message as is, optionally styled."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...


class RichConsole:
    """Rich backed console, on stderr unless told otherwise.

    Messages are never parsed as Rich markup, so tag names and file
    contents with square brackets print verbatim.
    """

    def __init__(self, *, stderr: bool = True) -> None:
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=_RICH_STYLES[style] or None, markup=False)

    def success(self, message: str) -> None:
        self._labelled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._labelled(Style.INFO, message)

    def _labelled(self, style: Style, message: str) -> None:
        from rich.text import Text

        line = Text(_LABELS[style], style=_RICH_STYLES[style])
        line.append(f" {message}")
        self._console.print(line)


@dataclass
class OutputRecord:
    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Records every message for assertions in tests."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self._labelled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._labelled(Style.INFO, message)

    def _labelled(self, style: Style, message: str) -> None:
        self.outputs.append(OutputRecord(f"{_LABELS[style]} {message}", style))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style is Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style is Style.WARNING for o in self.outputs)
