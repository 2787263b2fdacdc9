"""Proof-of-work API endpoints.

Thin HTTP wrappers around `PowService` so non-browser clients (bots, the
oracle, scripts) can check and compute proofs with the same rules the UI
uses. Verification stays authoritative: a solved nonce should still be
verified before it is submitted on-chain.
"""
from __future__ import annotations

import asyncio
import logging
from concurrent.futures import TimeoutError as FutureTimeoutError

from fastapi import APIRouter, HTTPException, status

from skillstake_pow.core.errors import InvalidInputError, PreconditionFailedError
from skillstake_pow.core.settings import settings
from skillstake_pow.schemas.pow import (
    PowConfigOut,
    PowSolveIn,
    PowSolveOut,
    PowVerifyIn,
    PowVerifyOut,
)
from skillstake_pow.services.pow_service import PowService
from skillstake_pow.services.solver import SolveResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pow", tags=["pow"])


def _build_service(wallet: str | None, difficulty: int | None) -> PowService:
    try:
        return PowService(wallet=wallet, difficulty=difficulty)
    except InvalidInputError as exc:
        logger.debug("Rejected PoW request: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc


@router.get("/config", response_model=PowConfigOut)
async def get_pow_config() -> PowConfigOut:
    """Return the puzzle parameters clients need to build proofs."""
    return PowConfigOut(
        domain=settings.pow_domain,
        difficulty=settings.pow_difficulty,
        mint=settings.resolve_mint_address(),
        program_id=settings.resolve_program_address(),
        yield_interval=settings.pow_yield_interval,
    )


@router.post("/verify", response_model=PowVerifyOut)
async def verify_proof(payload: PowVerifyIn) -> PowVerifyOut:
    """Check a nonce; malformed numbers produce ``valid=false`` rather than an error."""
    service = _build_service(payload.wallet, payload.difficulty)
    result = service.verify(payload.task_id, payload.nonce)
    return PowVerifyOut(valid=result.valid, hash_hex=result.digest_hex)


@router.post("/solve", response_model=PowSolveOut)
async def solve_proof(payload: PowSolveIn) -> PowSolveOut:
    """Search for a nonce, giving up once the timeout elapses.

    The search is also stopped if the request itself is cancelled.

    Raises:
        HTTPException: 412 without a wallet, 422 for malformed input.
    """
    service = _build_service(payload.wallet, payload.difficulty)
    try:
        job = service.start_solve(payload.task_id, payload.starting_nonce)
    except PreconditionFailedError as exc:
        raise HTTPException(
            status_code=status.HTTP_412_PRECONDITION_FAILED, detail=str(exc)
        ) from exc
    except InvalidInputError as exc:
        logger.debug("Rejected PoW solve request: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc

    timeout = payload.timeout_seconds or settings.pow_solve_timeout_seconds
    try:
        outcome = await asyncio.to_thread(job.result, timeout)
    except FutureTimeoutError:
        job.cancel()
        outcome = await asyncio.to_thread(job.result)
    except asyncio.CancelledError:
        # Client went away or the server is shutting down
        job.cancel()
        logger.info("Solve request cancelled; stopping nonce search")
        raise

    if isinstance(outcome, SolveResult):
        return PowSolveOut(
            status="solved",
            nonce=str(outcome.nonce),
            hash_hex=outcome.digest_hex,
            iterations=str(outcome.iterations),
            duration_ms=outcome.duration_ms,
        )
    return PowSolveOut(
        status="cancelled",
        iterations=str(outcome.iterations),
        duration_ms=outcome.duration_ms,
    )
