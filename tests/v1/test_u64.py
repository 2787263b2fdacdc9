"""Tests for unsigned 64-bit parsing and encoding."""

from __future__ import annotations

import pytest

from skillstake_pow.core.errors import (
    EmptyValueError,
    InvalidInputError,
    NotAnIntegerError,
    OutOfRangeError,
)
from skillstake_pow.utils.u64 import (
    MAX_U64,
    from_u64_le_bytes,
    parse_u64,
    to_u64_le_bytes,
    wrapping_increment,
)


class TestParseU64:
    """Test the parse_u64 guard."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("0", 0),
            ("18446744073709551615", MAX_U64),
            ("1700000000", 1_700_000_000),
            ("  42  ", 42),
            ("007", 7),
        ],
    )
    def test_accepts(self, text: str, expected: int) -> None:
        assert parse_u64(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_rejects_blank(self, text: str) -> None:
        with pytest.raises(EmptyValueError):
            parse_u64(text)

    @pytest.mark.parametrize("text", ["-1", "+1", "3.5", "abc", "0x10", "1e3", "1 000", "١٢"])
    def test_rejects_non_digits(self, text: str) -> None:
        with pytest.raises(NotAnIntegerError):
            parse_u64(text)

    @pytest.mark.parametrize("value", [None, 42, b"42"])
    def test_rejects_non_strings(self, value: object) -> None:
        with pytest.raises(NotAnIntegerError):
            parse_u64(value)  # type: ignore[arg-type]

    def test_rejects_two_to_the_64(self) -> None:
        with pytest.raises(OutOfRangeError):
            parse_u64("18446744073709551616")

    def test_errors_are_value_errors(self) -> None:
        """Callers may catch the whole family as InvalidInputError or ValueError."""
        with pytest.raises(InvalidInputError):
            parse_u64("")
        with pytest.raises(ValueError):
            parse_u64("nope")


class TestU64Encoding:
    """Test little-endian encoding helpers."""

    def test_little_endian_layout(self) -> None:
        assert to_u64_le_bytes(1) == b"\x01" + b"\x00" * 7
        assert to_u64_le_bytes(0x0102030405060708) == bytes([8, 7, 6, 5, 4, 3, 2, 1])
        assert to_u64_le_bytes(MAX_U64) == b"\xff" * 8

    @pytest.mark.parametrize("value", [-1, MAX_U64 + 1])
    def test_out_of_range(self, value: int) -> None:
        with pytest.raises(OutOfRangeError):
            to_u64_le_bytes(value)

    def test_decode(self) -> None:
        assert from_u64_le_bytes(bytes([8, 7, 6, 5, 4, 3, 2, 1])) == 0x0102030405060708
        with pytest.raises(OutOfRangeError):
            from_u64_le_bytes(b"\x00" * 7)

    def test_wrapping_increment(self) -> None:
        assert wrapping_increment(0) == 1
        assert wrapping_increment(MAX_U64) == 0
