"""Conventional commit classification.

Only enough of the convention is understood to derive a bump severity:
the header ``type(scope)!: description`` and a ``BREAKING CHANGE:`` footer.
Messages that do not follow the convention are not errors; they simply do
not influence the bump.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

__all__ = [
    "BumpSeverity",
    "ConventionalCommit",
    "classify",
    "parse_conventional_commit",
    "severity_of",
]

COMMIT_TYPE_FEAT = "feat"

_HEADER_RE = re.compile(
    r"^(?P<type>[A-Za-z][\w-]*)"
    r"(?:\((?P<scope>[^()\r\n]*)\))?"
    r"(?P<breaking>!)?"
    r":[ \t]+(?P<description>\S.*)$"
)
_BREAKING_FOOTER_RE = re.compile(r"^BREAKING[ -]CHANGE:[ \t]", re.MULTILINE)


class BumpSeverity(IntEnum):
    """Magnitude of a version increment. Combine with max()."""

    PATCH = 0
    MINOR = 1
    MAJOR = 2

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class ConventionalCommit:
    type: str
    scope: str | None
    breaking: bool
    description: str


def parse_conventional_commit(message: str) -> ConventionalCommit | None:
    text = message.strip()
    if not text:
        return None

    header, _, body = text.partition("\n")
    m = _HEADER_RE.match(header.rstrip("\r"))
    if m is None:
        return None

    breaking = m.group("breaking") is not None or _BREAKING_FOOTER_RE.search(body) is not None
    return ConventionalCommit(
        type=m.group("type"),
        scope=m.group("scope") or None,
        breaking=breaking,
        description=m.group("description").strip(),
    )


def severity_of(commit: ConventionalCommit) -> BumpSeverity:
    if commit.breaking:
        return BumpSeverity.MAJOR
    if commit.type.lower() == COMMIT_TYPE_FEAT:
        return BumpSeverity.MINOR
    return BumpSeverity.PATCH


def classify(message: str, current: BumpSeverity) -> BumpSeverity:
    """Fold one commit message into the running severity.

    Severity never decreases; non-conventional messages leave it unchanged.
    """
    commit = parse_conventional_commit(message)
    if commit is None:
        return current
    return max(current, severity_of(commit))
