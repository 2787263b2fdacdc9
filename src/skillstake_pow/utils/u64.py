"""Unsigned 64-bit integer helpers."""

from __future__ import annotations

from typing import Final

from skillstake_pow.core.errors import EmptyValueError, NotAnIntegerError, OutOfRangeError

MAX_U64: Final[int] = (1 << 64) - 1
U64_SIZE_BYTES: Final[int] = 8
_ASCII_DIGITS: Final[frozenset[str]] = frozenset("0123456789")


def parse_u64(text: str) -> int:
    """Parse decimal text into an unsigned 64-bit integer.

    Args:
        text: User-supplied decimal string. Surrounding whitespace is ignored.

    Returns:
        The parsed value in ``[0, 2**64 - 1]``.

    Raises:
        EmptyValueError: If the text is blank.
        NotAnIntegerError: If ``text`` is not a string or any character is
            not an ASCII digit. Signs, fractions, hex and non-ASCII digits
            are all rejected.
        OutOfRangeError: If the value exceeds ``2**64 - 1``.
    """
    if not isinstance(text, str):
        raise NotAnIntegerError("Value must be a positive integer.")
    trimmed = text.strip()
    if not trimmed:
        raise EmptyValueError("Value is required.")
    # str.isdigit() accepts non-ASCII digits, so check membership explicitly
    if any(char not in _ASCII_DIGITS for char in trimmed):
        raise NotAnIntegerError("Value must be a positive integer.")

    parsed = int(trimmed)
    if parsed > MAX_U64:
        raise OutOfRangeError("Value exceeds 64-bit unsigned range.")
    return parsed


def to_u64_le_bytes(value: int) -> bytes:
    """Encode ``value`` as 8 little-endian bytes.

    Raises:
        OutOfRangeError: If ``value`` is negative or wider than 64 bits.
    """
    if not 0 <= value <= MAX_U64:
        raise OutOfRangeError(f"{value} is outside the unsigned 64-bit range")
    return value.to_bytes(U64_SIZE_BYTES, "little", signed=False)


def from_u64_le_bytes(data: bytes) -> int:
    """Decode 8 little-endian bytes into an integer."""
    if len(data) != U64_SIZE_BYTES:
        raise OutOfRangeError(f"expected {U64_SIZE_BYTES} bytes, got {len(data)}")
    return int.from_bytes(data, "little", signed=False)


def wrapping_increment(value: int) -> int:
    """Return ``value + 1`` modulo 2**64."""
    return (value + 1) & MAX_U64
