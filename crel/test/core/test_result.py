"""Tests for crel.core.result module."""

import pytest

from crel.core.result import Err, Ok, Result


class TestOk:
    def test_unwrap(self) -> None:
        assert Ok("1.2.3").unwrap() == "1.2.3"

    def test_unwrap_or_ignores_default(self) -> None:
        assert Ok(42).unwrap_or(0) == 42

    def test_map_err_is_noop(self) -> None:
        assert Ok(42).map_err(lambda e: f"error: {e}") == Ok(42)

    def test_repr(self) -> None:
        assert repr(Ok("1.0.0")) == "Ok('1.0.0')"

    def test_frozen(self) -> None:
        result = Ok(42)
        with pytest.raises(AttributeError):
            result.value = 0  # type: ignore[misc]


class TestErr:
    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err"):
            Err("bad").unwrap()

    def test_unwrap_or(self) -> None:
        assert Err("bad").unwrap_or(7) == 7

    def test_map_err(self) -> None:
        """map_err replaces the error and keeps it an Err."""
        assert Err("bad").map_err(str.upper) == Err("BAD")

    def test_repr(self) -> None:
        assert repr(Err("bad")) == "Err('bad')"

    def test_equality(self) -> None:
        assert Err("a") == Err("a")
        assert Err("a") != Ok("a")


class TestPatternMatching:
    """Results are consumed with match statements at call sites."""

    @staticmethod
    def _describe(result: Result[int, str]) -> str:
        match result:
            case Ok(value):
                return f"value {value}"
            case Err(error):
                return f"error {error}"

    def test_match_ok(self) -> None:
        assert self._describe(Ok(1)) == "value 1"

    def test_match_err(self) -> None:
        assert self._describe(Err("x")) == "error x"
