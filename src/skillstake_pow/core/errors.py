"""Exception hierarchy for the proof-of-work engine.

Cancellation of a search is not an error and has no exception here; the
solver returns a `SolveCancelled` outcome instead.
"""

from __future__ import annotations


class PowError(Exception):
    """Base class for proof-of-work failures."""


class InvalidInputError(PowError, ValueError):
    """Raised when caller-supplied input cannot be used by the puzzle."""


class EmptyValueError(InvalidInputError):
    """Raised for blank or whitespace-only integer input."""


class NotAnIntegerError(InvalidInputError):
    """Raised when integer input contains anything other than ASCII digits."""


class OutOfRangeError(InvalidInputError):
    """Raised when an integer does not fit in an unsigned 64-bit value."""


class InvalidDifficultyError(InvalidInputError):
    """Raised when a difficulty target falls outside the supported range."""


class InvalidPublicKeyError(InvalidInputError):
    """Raised when a wallet or mint key cannot be decoded to 32 bytes."""


class PreconditionFailedError(PowError):
    """Raised when no wallet identity is available to bind a puzzle to."""
