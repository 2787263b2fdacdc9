"""Proof-of-Work primitives.

A proof binds a wallet to a task: the Keccak-256 hash of

    domain_tag | wallet | mint | task_id_le64 | nonce_le64

must start with at least ``difficulty`` zero bits. The layout has to match
the on-chain ``record_proof`` instruction byte for byte, otherwise every
proof produced here is rejected.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from skillstake_pow.core.errors import InvalidDifficultyError, InvalidPublicKeyError
from skillstake_pow.utils.hash import keccak256
from skillstake_pow.utils.u64 import to_u64_le_bytes

POW_DOMAIN: Final[bytes] = b"skillstake_pow"
PUBLIC_KEY_BYTES: Final[int] = 32
MAX_POW_DIFFICULTY: Final[int] = 248
BITS_PER_BYTE: Final[int] = 8
DEFAULT_YIELD_INTERVAL: Final[int] = 2048


@dataclass(frozen=True)
class PuzzleIdentity:
    """Who and what a proof is bound to.

    Attributes:
        wallet: 32-byte public key of the claiming wallet.
        mint: 32-byte public key of the reward token mint.
        domain_tag: Domain separation prefix.
    """

    wallet: bytes
    mint: bytes
    domain_tag: bytes = POW_DOMAIN

    def __post_init__(self) -> None:
        for name in ("wallet", "mint"):
            value = getattr(self, name)
            if not isinstance(value, (bytes, bytearray)) or len(value) != PUBLIC_KEY_BYTES:
                raise InvalidPublicKeyError(f"{name} must be exactly {PUBLIC_KEY_BYTES} bytes")
            object.__setattr__(self, name, bytes(value))
        object.__setattr__(self, "domain_tag", bytes(self.domain_tag))


@dataclass(frozen=True)
class PowPuzzle:
    """An identity paired with the difficulty its proofs must reach."""

    identity: PuzzleIdentity
    difficulty: int

    def __post_init__(self) -> None:
        validate_difficulty(self.difficulty)

    def digest(self, task_id: int, nonce: int) -> bytes:
        """Hash the preimage for ``task_id`` and ``nonce``."""
        return hash_pow(self.identity, task_id, nonce)

    def is_satisfied_by(self, digest: bytes) -> bool:
        """Return True if ``digest`` meets this puzzle's difficulty."""
        return meets_difficulty(digest, self.difficulty)


def validate_difficulty(difficulty: int) -> int:
    """Return ``difficulty`` if the program could be configured with it.

    Raises:
        InvalidDifficultyError: If outside ``[0, MAX_POW_DIFFICULTY]``.
    """
    if isinstance(difficulty, bool) or not isinstance(difficulty, int):
        raise InvalidDifficultyError("difficulty must be an integer")
    if not 0 <= difficulty <= MAX_POW_DIFFICULTY:
        raise InvalidDifficultyError(
            f"difficulty must be between 0 and {MAX_POW_DIFFICULTY} bits, got {difficulty}"
        )
    return difficulty


def build_preimage(
    domain_tag: bytes,
    wallet: bytes,
    mint: bytes,
    task_id: int,
    nonce: int,
) -> bytes:
    """Serialize the proof fields in their fixed on-chain order.

    Field widths are fixed, so no separators or length prefixes are needed.

    Raises:
        OutOfRangeError: If ``task_id`` or ``nonce`` do not fit in a u64.
    """
    buffer = bytearray()
    buffer.extend(domain_tag)
    buffer.extend(wallet)
    buffer.extend(mint)
    buffer.extend(to_u64_le_bytes(task_id))
    buffer.extend(to_u64_le_bytes(nonce))
    return bytes(buffer)


def hash_pow(identity: PuzzleIdentity, task_id: int, nonce: int) -> bytes:
    """Return the Keccak-256 digest of the proof preimage."""
    preimage = build_preimage(
        identity.domain_tag, identity.wallet, identity.mint, task_id, nonce
    )
    return keccak256(preimage)


def leading_zero_bits_in_byte(byte: int) -> int:
    """Return the number of leading zero bits in a single byte (0-8)."""
    return BITS_PER_BYTE - byte.bit_length()


def count_leading_zero_bits(digest: bytes) -> int:
    """Count the leading zero bits of ``digest`` across byte boundaries."""
    zeros = 0
    for byte in digest:
        zeros += leading_zero_bits_in_byte(byte)
        if byte != 0:
            break
    return zeros


def meets_difficulty(digest: bytes, difficulty: int) -> bool:
    """Return True if ``digest`` starts with at least ``difficulty`` zero bits.

    Args:
        digest: Hash output to evaluate.
        difficulty: Required leading zero bits. Zero or less always passes.

    Returns:
        True once the running zero-bit count reaches ``difficulty``; False as
        soon as a set bit appears first or the digest is exhausted.
    """
    if difficulty <= 0:
        return True

    remaining = difficulty
    for byte in digest:
        zeros = leading_zero_bits_in_byte(byte)
        if zeros >= remaining:
            return True
        if zeros < BITS_PER_BYTE:
            return False
        remaining -= BITS_PER_BYTE
    return False
