"""Public key decoding for wallet and mint identities."""

from __future__ import annotations

import binascii
import json
from pathlib import Path
from typing import Final

import base58
from nacl.signing import SigningKey

from skillstake_pow.core.errors import InvalidPublicKeyError
from skillstake_pow.core.pow import PUBLIC_KEY_BYTES

HEX_KEY_LENGTH: Final[int] = PUBLIC_KEY_BYTES * 2
KEYPAIR_BYTES: Final[int] = 64


def decode_public_key(value: str | bytes) -> bytes:
    """Decode a 32-byte public key.

    Args:
        value: Raw bytes, a 64-character hex string, or base58 text as used
            by Solana wallets.

    Returns:
        The 32 raw key bytes.

    Raises:
        InvalidPublicKeyError: If the value does not decode to 32 bytes.
    """
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    else:
        text = value.strip()
        if not text:
            raise InvalidPublicKeyError("public key is required")
        raw = _decode_text_key(text)

    if len(raw) != PUBLIC_KEY_BYTES:
        raise InvalidPublicKeyError(
            f"public key must decode to {PUBLIC_KEY_BYTES} bytes, got {len(raw)}"
        )
    return raw


def _decode_text_key(text: str) -> bytes:
    if len(text) == HEX_KEY_LENGTH:
        try:
            return binascii.unhexlify(text)
        except binascii.Error:
            pass  # not hex; base58 keys may also be 64 characters long
    try:
        return base58.b58decode(text)
    except ValueError as exc:
        raise InvalidPublicKeyError(f"invalid base58 public key: {exc}") from exc


def encode_public_key(raw: bytes) -> str:
    """Return the base58 text form of a 32-byte public key."""
    return base58.b58encode(decode_public_key(raw)).decode("ascii")


def load_keypair_file(path: str | Path) -> bytes:
    """Return the public key stored in a Solana CLI keypair file.

    The file holds a JSON array of 64 integers: the ed25519 seed followed by
    the public key. The embedded public key is checked against the one
    derived from the seed.

    Raises:
        InvalidPublicKeyError: If the file is malformed or inconsistent.
    """
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        secret = bytes(payload)
    except (OSError, ValueError, TypeError) as exc:
        raise InvalidPublicKeyError(f"cannot read keypair file {path}: {exc}") from exc

    if len(secret) != KEYPAIR_BYTES:
        raise InvalidPublicKeyError(
            f"keypair file must contain {KEYPAIR_BYTES} bytes, got {len(secret)}"
        )

    seed, embedded = secret[:PUBLIC_KEY_BYTES], secret[PUBLIC_KEY_BYTES:]
    derived = bytes(SigningKey(seed).verify_key)
    if derived != embedded:
        raise InvalidPublicKeyError("keypair public key does not match its secret seed")
    return derived
