"""Tests for on-chain proof records and task id rules."""

from __future__ import annotations

import time

import pytest

from skillstake_pow.core.errors import InvalidInputError
from skillstake_pow.core.proof_record import (
    MAX_PROOF_STORAGE,
    PROOF_RECORD_BYTES,
    ProofRecord,
    is_task_fresh,
    new_task_id,
)

DIGEST = bytes(range(32))


def test_layout() -> None:
    record = ProofRecord(task_id=1, nonce=0x0102, digest=DIGEST)
    encoded = record.to_bytes()
    assert len(encoded) == PROOF_RECORD_BYTES == 48
    assert len(encoded) <= MAX_PROOF_STORAGE
    assert encoded[:8] == b"\x01" + b"\x00" * 7
    assert encoded[8:16] == b"\x02\x01" + b"\x00" * 6
    assert encoded[16:] == DIGEST


def test_decode() -> None:
    encoded = (7).to_bytes(8, "little") + (9).to_bytes(8, "little") + DIGEST
    record = ProofRecord.from_bytes(encoded)
    assert (record.task_id, record.nonce, record.digest) == (7, 9, DIGEST)
    assert record.digest_hex == DIGEST.hex()


def test_rejects_bad_lengths() -> None:
    with pytest.raises(InvalidInputError):
        ProofRecord(task_id=1, nonce=1, digest=b"\x00" * 31)
    with pytest.raises(InvalidInputError):
        ProofRecord.from_bytes(b"\x00" * 47)


def test_new_task_id_is_unix_seconds() -> None:
    before = int(time.time())
    task_id = new_task_id()
    assert before <= task_id <= int(time.time())


@pytest.mark.parametrize(
    ("task_id", "last", "fresh"),
    [(2, 1, True), (1, 1, False), (0, 5, False)],
)
def test_is_task_fresh(task_id: int, last: int, fresh: bool) -> None:
    assert is_task_fresh(task_id, last) is fresh
