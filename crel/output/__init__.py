"""Diagnostics on stderr: console backends and error rendering."""

from .console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
]
