# src/skillstake_pow/utils/hash.py
"""Keccak-256 hashing helpers.

The on-chain program hashes proofs with the original Keccak padding, which is
*not* the NIST SHA3-256 available in ``hashlib``. Nothing else in the package
touches the primitive directly.
"""

from __future__ import annotations

from typing import Final

from Crypto.Hash import keccak

KECCAK256_DIGEST_BYTES: Final[int] = 32


def keccak256(data: bytes) -> bytes:
    """Return the 32-byte Keccak-256 digest of ``data``."""
    return keccak.new(digest_bits=256, data=bytes(data)).digest()


def keccak256_hexdigest(data: bytes) -> str:
    """Return the lowercase hexadecimal Keccak-256 digest of ``data``."""
    return keccak256(data).hex()
