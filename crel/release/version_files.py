"""Version file patching.

Each configured file is searched for ``<prefix><version><postfix>`` and the
version part is replaced. Files are handled independently: a failure in one
is recorded and the next file is still processed.

Example:
    rule = VersionFileRule(path="Cargo.toml", version_prefix='version = "', version_postfix='"')
    errors = apply_version_files(root, "1.4.0", [rule])
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from crel.core.config import VersionFileRule
from crel.platform.files import atomic_write_text, read_text_exact
from crel.release.errors import FileIOError, VersionFileError, VersionMatchError

__all__ = [
    "SEMVER_TOKEN",
    "VersionFile",
    "apply_version_files",
    "compile_rule",
    "strip_leading_v",
]

SEMVER_TOKEN = r"[vV]?\d+\.\d+\.\d+[-+\w.]*"


@dataclass(frozen=True, slots=True)
class VersionFile:
    path: str
    pattern: re.Pattern[str]
    leading_v: bool

    def render(self, version: str) -> str:
        return f"v{version}" if self.leading_v else version

    def patch(self, text: str, version: str) -> str | None:
        """Return text with the first version occurrence replaced, None if absent."""
        rendered = self.render(version)
        patched, n = self.pattern.subn(
            lambda m: f"{m.group(1)}{rendered}{m.group(2)}",
            text,
            count=1,
        )
        if n == 0:
            return None
        return patched


def compile_rule(rule: VersionFileRule) -> VersionFile:
    """Build the ``(prefix)TOKEN(postfix)`` pattern; prefix and postfix are literal."""
    pattern = re.compile(
        f"({re.escape(rule.version_prefix)}){SEMVER_TOKEN}({re.escape(rule.version_postfix)})"
    )
    return VersionFile(path=rule.path, pattern=pattern, leading_v=rule.leading_v)


def strip_leading_v(version: str) -> str:
    if version[:1] in ("v", "V"):
        return version[1:]
    return version


def apply_version_files(
    root: Path,
    version: str,
    rules: Sequence[VersionFileRule],
) -> list[VersionFileError]:
    """Write version into every rule's file.

    Returns the failures, one per failed rule, in rule order. An empty list
    means every file was updated.
    """
    bare = strip_leading_v(version)
    errors: list[VersionFileError] = []
    for rule in rules:
        error = _apply_one(root, bare, compile_rule(rule))
        if error is not None:
            errors.append(error)
    return errors


def _apply_one(root: Path, version: str, vf: VersionFile) -> VersionFileError | None:
    path = root / vf.path
    try:
        text = read_text_exact(path)
    except (OSError, UnicodeDecodeError) as e:
        return FileIOError(path=vf.path, reason=str(e))

    patched = vf.patch(text, version)
    if patched is None:
        return VersionMatchError(path=vf.path, pattern=vf.pattern.pattern)

    if patched == text:
        return None

    try:
        atomic_write_text(path, patched, encoding="utf-8")
    except OSError as e:
        return FileIOError(path=vf.path, reason=str(e))
    return None
