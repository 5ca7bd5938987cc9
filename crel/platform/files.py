"""Byte-exact reads and atomic writes for version files.

Line endings and permission bits survive a read/write round trip, and a
write never leaves a partial file behind.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

__all__ = ["atomic_write_text", "read_text_exact"]


def read_text_exact(path: Path, *, encoding: str = "utf-8") -> str:
    """Decode path without newline translation (CRLF stays CRLF)."""
    return path.read_bytes().decode(encoding)


def _existing_mode(path: Path) -> int | None:
    try:
        return path.stat().st_mode & 0o7777
    except FileNotFoundError:
        return None


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Replace path with content through a temp file in the same directory.

    The permission bits of an existing file are kept. Missing parent
    directories are created.
    """
    mode = _existing_mode(path)
    if mode is None:
        path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        if mode is not None:
            tmp_path.chmod(mode)
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)
