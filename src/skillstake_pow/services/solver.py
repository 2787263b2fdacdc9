"""Nonce search for proof-of-work puzzles.

The search runs in whichever thread calls `PowSolver.solve`. Callers that
must stay responsive use `PowSolver.start` (worker thread) or
`PowSolver.solve_async` (event loop friendly); both stop cooperatively when
the shared `CancellationToken` is set.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Final, Union

from skillstake_pow.core.pow import (
    DEFAULT_YIELD_INTERVAL,
    PowPuzzle,
    build_preimage,
    meets_difficulty,
)
from skillstake_pow.utils.hash import keccak256
from skillstake_pow.utils.u64 import parse_u64, wrapping_increment

logger = logging.getLogger(__name__)

MILLISECONDS_PER_SECOND: Final[int] = 1000


class CancellationToken:
    """Shared flag a caller sets to stop a running search."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(frozen=True)
class SolveResult:
    """A nonce that satisfied the puzzle."""

    nonce: int
    digest_hex: str
    iterations: int
    elapsed_seconds: float

    @property
    def duration_ms(self) -> float:
        return self.elapsed_seconds * MILLISECONDS_PER_SECOND


@dataclass(frozen=True)
class SolveCancelled:
    """Outcome of a search stopped through its cancellation token."""

    iterations: int
    elapsed_seconds: float
    last_nonce: int

    @property
    def duration_ms(self) -> float:
        return self.elapsed_seconds * MILLISECONDS_PER_SECOND


@dataclass(frozen=True)
class SolveProgress:
    """Snapshot handed to progress callbacks at every check-in."""

    iterations: int
    nonce: int
    elapsed_seconds: float


SolveOutcome = Union[SolveResult, SolveCancelled]
ProgressCallback = Callable[[SolveProgress], None]


def _parse_inputs(task_id_text: str, starting_nonce_text: str | None) -> tuple[int, int]:
    task_id = parse_u64(task_id_text)
    # Only an absent or empty field means "unset"; blank text still goes through the guard
    if starting_nonce_text is None or starting_nonce_text == "":
        return task_id, 0
    return task_id, parse_u64(starting_nonce_text)


class PowSolver:
    """Searches nonces for a single puzzle."""

    def __init__(self, puzzle: PowPuzzle, yield_interval: int = DEFAULT_YIELD_INTERVAL) -> None:
        if yield_interval < 1:
            raise ValueError("yield_interval must be at least 1")
        self.puzzle = puzzle
        self.yield_interval = yield_interval

    def solve(
        self,
        task_id_text: str,
        starting_nonce_text: str | None = None,
        cancel_token: CancellationToken | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> SolveOutcome:
        """Search ascending nonces until one meets the puzzle difficulty.

        Args:
            task_id_text: Decimal task identifier.
            starting_nonce_text: Decimal nonce to start from; None or an
                empty string starts at zero. Whitespace-only text is rejected.
            cancel_token: Checked before every attempt.
            on_progress: Called every ``yield_interval`` attempts.

        Returns:
            `SolveResult` on success or `SolveCancelled` if the token was set.

        Raises:
            InvalidInputError: If either input is not a valid u64. Raised
                before any hashing happens.
        """
        task_id, nonce = _parse_inputs(task_id_text, starting_nonce_text)
        return self.search(task_id, nonce, cancel_token, on_progress)

    def search(
        self,
        task_id: int,
        nonce: int = 0,
        cancel_token: CancellationToken | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> SolveOutcome:
        """Run the search loop on already-parsed integers."""
        identity = self.puzzle.identity
        difficulty = self.puzzle.difficulty
        interval = self.yield_interval
        iterations = 0

        logger.debug(
            "Starting nonce search task_id=%d nonce=%d difficulty=%d", task_id, nonce, difficulty
        )
        started_at = time.perf_counter()
        while True:
            if cancel_token is not None and cancel_token.cancelled:
                elapsed = time.perf_counter() - started_at
                logger.info("Nonce search cancelled after %d iterations", iterations)
                return SolveCancelled(
                    iterations=iterations, elapsed_seconds=elapsed, last_nonce=nonce
                )

            digest = keccak256(
                build_preimage(identity.domain_tag, identity.wallet, identity.mint, task_id, nonce)
            )
            iterations += 1

            if meets_difficulty(digest, difficulty):
                elapsed = time.perf_counter() - started_at
                logger.info(
                    "Found nonce %d for task %d in %d iterations (%.3fs)",
                    nonce,
                    task_id,
                    iterations,
                    elapsed,
                )
                return SolveResult(
                    nonce=nonce,
                    digest_hex=digest.hex(),
                    iterations=iterations,
                    elapsed_seconds=elapsed,
                )

            nonce = wrapping_increment(nonce)

            if iterations % interval == 0:
                if on_progress is not None:
                    on_progress(
                        SolveProgress(
                            iterations=iterations,
                            nonce=nonce,
                            elapsed_seconds=time.perf_counter() - started_at,
                        )
                    )
                # Let other threads (and the event loop) run
                time.sleep(0)

    def start(
        self,
        task_id_text: str,
        starting_nonce_text: str | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> SolveJob:
        """Validate inputs and run the search on a background thread."""
        task_id, nonce = _parse_inputs(task_id_text, starting_nonce_text)
        token = CancellationToken()
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pow-solver")
        future = executor.submit(self.search, task_id, nonce, token, on_progress)
        executor.shutdown(wait=False)
        return SolveJob(future, token)

    async def solve_async(
        self,
        task_id_text: str,
        starting_nonce_text: str | None = None,
        cancel_token: CancellationToken | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> SolveOutcome:
        """Await a search running in a worker thread.

        Cancelling the awaiting task sets the token so the worker stops
        within one iteration; `asyncio.CancelledError` is then re-raised.
        """
        token = cancel_token or CancellationToken()
        try:
            return await asyncio.to_thread(
                self.solve, task_id_text, starting_nonce_text, token, on_progress
            )
        except asyncio.CancelledError:
            token.cancel()
            raise


class SolveJob:
    """Handle to a search running on a background thread."""

    def __init__(self, future: Future[SolveOutcome], token: CancellationToken) -> None:
        self._future = future
        self.token = token

    def cancel(self) -> None:
        """Ask the search to stop; it returns `SolveCancelled` shortly after."""
        self.token.cancel()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> SolveOutcome:
        """Block until the search finishes.

        Raises:
            concurrent.futures.TimeoutError: If ``timeout`` elapses first.
        """
        return self._future.result(timeout=timeout)
