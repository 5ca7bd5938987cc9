"""Tests for crel.output.errors module."""

from __future__ import annotations

from pathlib import Path

import pytest

from crel.core.config import ConfigError
from crel.core.errors import ErrorCode
from crel.output.console import MockConsole
from crel.output.errors import CrelError, error_exit_code, print_error
from crel.release.errors import (
    FileIOError,
    GitOperationError,
    VersionFilesFailed,
    VersionMatchError,
    VersionParseError,
)

_MATCH = VersionMatchError(path="Cargo.toml", pattern='version = "')
_IO = FileIOError(path="package.json", reason="No such file or directory")


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (ConfigError("bad"), ErrorCode.CONFIG_ERROR),
        (GitOperationError(command="status", message="boom"), ErrorCode.GIT_ERROR),
        (VersionParseError(text="x.y", reason="not a semantic version"), ErrorCode.VERSION_ERROR),
        (_IO, ErrorCode.IO_ERROR),
        (_MATCH, ErrorCode.IO_ERROR),
        (VersionFilesFailed(errors=(_MATCH,)), ErrorCode.IO_ERROR),
    ],
)
def test_exit_codes(error: CrelError, code: ErrorCode) -> None:
    assert error_exit_code(error) == int(code)


def test_config_error_shows_path_hint() -> None:
    console = MockConsole()
    print_error(ConfigError("lead_v must be a boolean", path=Path("conventional_release.toml")), console)

    assert console.messages == [
        "error: invalid configuration: lead_v must be a boolean",
        "hint: conventional_release.toml",
    ]


def test_git_error() -> None:
    console = MockConsole()
    print_error(GitOperationError(command="rev-parse", message="HEAD has no commit"), console)

    assert console.messages == ["error: git rev-parse failed: HEAD has no commit"]


def test_version_files_failed_lists_each_file() -> None:
    console = MockConsole()
    print_error(VersionFilesFailed(errors=(_IO, _MATCH)), console)

    assert console.has_error()
    assert len(console.outputs) == 4
    assert "package.json" in console.messages[1]
    assert "Cargo.toml" in console.messages[2]
    assert console.messages[3].strip() == 'pattern: version = "'


def test_version_match_error_shows_pattern() -> None:
    console = MockConsole()
    print_error(_MATCH, console)

    assert console.messages == [
        "error: unable to find version in version file Cargo.toml",
        'hint: pattern: version = "',
    ]


def test_version_parse_error() -> None:
    console = MockConsole()
    print_error(VersionParseError(text="1.2"), console)

    assert console.messages == [
        "error: invalid version '1.2': expected [v]MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]"
    ]
