"""Single-shot proof verification."""

from __future__ import annotations

from dataclasses import dataclass

from skillstake_pow.core.errors import InvalidInputError
from skillstake_pow.core.pow import PowPuzzle
from skillstake_pow.utils.u64 import parse_u64


@dataclass(frozen=True)
class VerifyResult:
    """Outcome of checking one nonce.

    ``digest_hex`` is present whenever the inputs parsed, even if the digest
    misses the target, so it can always be displayed.
    """

    valid: bool
    digest_hex: str | None

    @classmethod
    def rejected(cls) -> VerifyResult:
        return cls(valid=False, digest_hex=None)


def verify_nonce(puzzle: PowPuzzle, task_id_text: str, nonce_text: str) -> VerifyResult:
    """Return whether ``nonce_text`` solves the puzzle for ``task_id_text``.

    Malformed input never raises; it yields ``VerifyResult(False, None)``.
    """
    try:
        task_id = parse_u64(task_id_text)
        nonce = parse_u64(nonce_text)
    except InvalidInputError:
        return VerifyResult.rejected()

    digest = puzzle.digest(task_id, nonce)
    return VerifyResult(valid=puzzle.is_satisfied_by(digest), digest_hex=digest.hex())
