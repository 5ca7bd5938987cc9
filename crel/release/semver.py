from __future__ import annotations

import re
from dataclasses import dataclass, field, replace

from crel.core.result import Err, Ok, Result
from crel.release.errors import VersionParseError


_IDENT = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
_CORE = (
    r"(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    rf"(?:-(?P<pre>{_IDENT}))?"
    rf"(?:\+(?P<build>{_IDENT}))?"
)
_VERSION_RE = re.compile(rf"^[vV]?{_CORE}$")
# Tags may carry a free-form prefix (`release-v1.2.3`) that must not end in a
# digit, dot or v, otherwise `1.2.3.4` would parse as `2.3.4`. The prefix is
# skipped when possible and otherwise kept short, so the leftmost triple is the
# version: `v2.0.0-rc-1.0.0` is 2.0.0 with prerelease `rc-1.0.0`.
_TAG_RE = re.compile(rf"^(?:.*?[^0-9.vV])??[vV]?{_CORE}$")


@dataclass(frozen=True, slots=True)
class SemanticVersion:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: str = ""
    # Text the version was parsed from, e.g. "v1.2.3". Not part of equality.
    original: str = field(default="", compare=False)

    @property
    def is_release(self) -> bool:
        """True for plain MAJOR.MINOR.PATCH (no prerelease, no build)."""
        return not self.prerelease and not self.build

    @property
    def text(self) -> str:
        return self.original or str(self)

    def precedence(self) -> tuple[object, ...]:
        """Sort key following semver 2.0 precedence (build metadata ignored)."""
        if not self.prerelease:
            pre: tuple[object, ...] = (1,)
        else:
            pre = (0, tuple(_identifier_key(p) for p in self.prerelease))
        return (self.major, self.minor, self.patch, pre)

    def with_metadata(self, *, prerelease: tuple[str, ...], build: str) -> SemanticVersion:
        return replace(self, prerelease=prerelease, build=build, original="")

    def __str__(self) -> str:
        out = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            out += "-" + ".".join(self.prerelease)
        if self.build:
            out += "+" + self.build
        return out


def _identifier_key(ident: str) -> tuple[int, int, str]:
    if ident.isdigit():
        return (0, int(ident), "")
    return (1, 0, ident)


def _from_match(m: re.Match[str], original: str) -> SemanticVersion:
    pre = m.group("pre")
    return SemanticVersion(
        major=int(m.group("major")),
        minor=int(m.group("minor")),
        patch=int(m.group("patch")),
        prerelease=tuple(pre.split(".")) if pre else (),
        build=m.group("build") or "",
        original=original,
    )


def parse_version(text: str) -> Result[SemanticVersion, VersionParseError]:
    """Parse a version leniently: optional leading v/V, surrounding blanks."""
    stripped = text.strip()
    m = _VERSION_RE.match(stripped)
    if m is None:
        return Err(VersionParseError(text=text))
    return Ok(_from_match(m, stripped))


def parse_tag_version(name: str) -> SemanticVersion | None:
    """Parse a tag name such as ``v1.2.3`` or ``release-1.2.3``.

    The whole tag name is kept as the original text.
    """
    m = _TAG_RE.match(name)
    if m is None:
        return None
    return _from_match(m, name)


ZERO_VERSION = SemanticVersion(0, 0, 0, original="0.0.0")
