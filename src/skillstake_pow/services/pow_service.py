"""Proof-of-work service binding a wallet session to the puzzle engine."""

from __future__ import annotations

import logging

from skillstake_pow.core.errors import PreconditionFailedError
from skillstake_pow.core.pow import PowPuzzle, PuzzleIdentity, validate_difficulty
from skillstake_pow.core.settings import Settings, settings
from skillstake_pow.services.solver import (
    CancellationToken,
    PowSolver,
    ProgressCallback,
    SolveJob,
    SolveOutcome,
)
from skillstake_pow.services.verifier import VerifyResult, verify_nonce
from skillstake_pow.utils.keys import decode_public_key

logger = logging.getLogger(__name__)


class PowService:
    """Solve and verify proofs for the currently connected wallet.

    The difficulty is fetched from the program by the caller and passed in;
    the service never talks to the network.
    """

    def __init__(
        self,
        wallet: str | bytes | None = None,
        difficulty: int | None = None,
        *,
        mint: str | bytes | None = None,
        config: Settings | None = None,
    ) -> None:
        self._settings = config or settings
        self._wallet = decode_public_key(wallet) if wallet else None
        self._mint = decode_public_key(mint) if mint else self._settings.mint_public_key()
        self._difficulty = validate_difficulty(
            self._settings.pow_difficulty if difficulty is None else difficulty
        )

    @property
    def connected(self) -> bool:
        return self._wallet is not None

    @property
    def difficulty(self) -> int:
        return self._difficulty

    @property
    def mint(self) -> bytes:
        return self._mint

    def connect(self, wallet: str | bytes) -> None:
        """Bind the service to a wallet public key."""
        self._wallet = decode_public_key(wallet)

    def disconnect(self) -> None:
        self._wallet = None

    def puzzle(self) -> PowPuzzle:
        """Return the puzzle for the connected wallet.

        Raises:
            PreconditionFailedError: If no wallet is connected.
        """
        if self._wallet is None:
            raise PreconditionFailedError("Connect wallet before solving proof of work.")
        identity = PuzzleIdentity(
            wallet=self._wallet,
            mint=self._mint,
            domain_tag=self._settings.pow_domain_bytes,
        )
        return PowPuzzle(identity=identity, difficulty=self._difficulty)

    def solver(self) -> PowSolver:
        return PowSolver(self.puzzle(), yield_interval=self._settings.pow_yield_interval)

    def solve(
        self,
        task_id: str,
        starting_nonce: str | None = None,
        cancel_token: CancellationToken | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> SolveOutcome:
        """Search for a nonce in the calling thread."""
        return self.solver().solve(task_id, starting_nonce, cancel_token, on_progress)

    def start_solve(
        self,
        task_id: str,
        starting_nonce: str | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> SolveJob:
        """Search for a nonce on a background thread."""
        return self.solver().start(task_id, starting_nonce, on_progress)

    async def solve_async(
        self,
        task_id: str,
        starting_nonce: str | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> SolveOutcome:
        return await self.solver().solve_async(task_id, starting_nonce, cancel_token)

    def verify(self, task_id: str, nonce: str) -> VerifyResult:
        """Check a nonce before it is submitted on-chain.

        Without a connected wallet the result is invalid rather than an error,
        since verification runs opportunistically on form input.
        """
        if self._wallet is None:
            logger.debug("Verification requested without a connected wallet")
            return VerifyResult.rejected()
        return verify_nonce(self.puzzle(), task_id, nonce)


def get_pow_service(
    wallet: str | bytes | None = None, difficulty: int | None = None
) -> PowService:
    """Return a new proof-of-work service instance."""
    return PowService(wallet=wallet, difficulty=difficulty)
