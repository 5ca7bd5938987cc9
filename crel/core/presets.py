"""Well-known version file layouts.

A ``[[version_files]]`` entry may name one of these instead of spelling
out path, prefix and postfix.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

__all__ = ["PRESETS", "VersionFilePreset", "preset_names"]


@dataclass(frozen=True, slots=True)
class VersionFilePreset:
    path: str
    version_prefix: str
    version_postfix: str


# Cargo.toml anchors on a line start so `serde = { version = "1" }` never matches.
PRESETS: Mapping[str, VersionFilePreset] = MappingProxyType(
    {
        "Cargo.toml": VersionFilePreset(
            path="Cargo.toml",
            version_prefix='\nversion = "',
            version_postfix='"',
        ),
        "package.json": VersionFilePreset(
            path="package.json",
            version_prefix='"version": "',
            version_postfix='",',
        ),
    }
)


def preset_names() -> tuple[str, ...]:
    return tuple(sorted(PRESETS))
