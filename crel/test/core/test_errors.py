"""Tests for crel.core.errors module."""

import pytest

from crel.core.errors import ErrorCode


class TestErrorCodeValues:
    """Exit codes are part of the command line contract."""

    @pytest.mark.parametrize(
        ("code", "value"),
        [
            (ErrorCode.OK, 0),
            (ErrorCode.CONFIG_ERROR, 1),
            (ErrorCode.GIT_ERROR, 2),
            (ErrorCode.VERSION_ERROR, 3),
            (ErrorCode.IO_ERROR, 4),
        ],
    )
    def test_value(self, code: ErrorCode, value: int) -> None:
        assert code == value


class TestErrorCodeUsage:
    def test_can_use_as_int(self) -> None:
        code: int = ErrorCode.GIT_ERROR
        assert code == 2

    def test_str(self) -> None:
        assert str(ErrorCode.CONFIG_ERROR) == "config error"

    def test_is_success(self) -> None:
        assert ErrorCode.OK.is_success is True
        assert all(not c.is_success for c in ErrorCode if c is not ErrorCode.OK)

    def test_is_error(self) -> None:
        assert ErrorCode.OK.is_error is False
        assert all(c.is_error for c in ErrorCode if c is not ErrorCode.OK)
