"""On-chain proof records and task id rules.

The program stores the last accepted proof of each stake account as a
Borsh-encoded ``ProofRecord``; these helpers read and write that layout.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Final

from skillstake_pow.core.errors import InvalidInputError
from skillstake_pow.utils.hash import KECCAK256_DIGEST_BYTES
from skillstake_pow.utils.u64 import U64_SIZE_BYTES, from_u64_le_bytes, to_u64_le_bytes

PROOF_RECORD_BYTES: Final[int] = U64_SIZE_BYTES * 2 + KECCAK256_DIGEST_BYTES
MAX_PROOF_STORAGE: Final[int] = 64


@dataclass(frozen=True)
class ProofRecord:
    """An accepted proof as persisted by the program."""

    task_id: int
    nonce: int
    digest: bytes

    def __post_init__(self) -> None:
        if len(self.digest) != KECCAK256_DIGEST_BYTES:
            raise InvalidInputError(f"digest must be {KECCAK256_DIGEST_BYTES} bytes")

    @property
    def digest_hex(self) -> str:
        return self.digest.hex()

    def to_bytes(self) -> bytes:
        """Encode as ``task_id_le64 | nonce_le64 | hash[32]``."""
        encoded = to_u64_le_bytes(self.task_id) + to_u64_le_bytes(self.nonce) + self.digest
        # Mirrors the program's storage bound
        if len(encoded) > MAX_PROOF_STORAGE:
            raise InvalidInputError("encoded proof exceeds storage limit")
        return encoded

    @classmethod
    def from_bytes(cls, data: bytes) -> ProofRecord:
        """Decode a record previously produced by `to_bytes`."""
        if len(data) != PROOF_RECORD_BYTES:
            raise InvalidInputError(
                f"proof record must be {PROOF_RECORD_BYTES} bytes, got {len(data)}"
            )
        task_id = from_u64_le_bytes(data[:U64_SIZE_BYTES])
        nonce = from_u64_le_bytes(data[U64_SIZE_BYTES : U64_SIZE_BYTES * 2])
        return cls(task_id=task_id, nonce=nonce, digest=bytes(data[U64_SIZE_BYTES * 2 :]))


def new_task_id() -> int:
    """Return a fresh task id: the current Unix time in whole seconds."""
    return int(time.time())


def is_task_fresh(task_id: int, last_task_id: int) -> bool:
    """Return True if the program would accept ``task_id`` after ``last_task_id``."""
    return task_id > last_task_id
