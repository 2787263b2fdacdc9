"""Schemas related to proof-of-work solving and verification."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from skillstake_pow.core.pow import MAX_POW_DIFFICULTY
from skillstake_pow.core.settings import settings


class PowConfigOut(BaseModel):
    """Public puzzle configuration."""

    domain: str
    difficulty: int
    max_difficulty: int = MAX_POW_DIFFICULTY
    mint: str
    program_id: str
    yield_interval: int
    hash_algorithm: str = "keccak256"


class PowVerifyIn(BaseModel):
    """Request payload for checking a nonce."""

    wallet: str | None = None
    task_id: str
    nonce: str
    difficulty: int | None = Field(default=None, ge=0, le=MAX_POW_DIFFICULTY)


class PowVerifyOut(BaseModel):
    valid: bool
    hash_hex: str | None


class PowSolveIn(BaseModel):
    """Request payload for searching a nonce server-side."""

    wallet: str | None = None
    task_id: str
    starting_nonce: str | None = None
    difficulty: int | None = Field(default=None, ge=0, le=MAX_POW_DIFFICULTY)
    # Clients may shorten the configured search budget, never extend it
    timeout_seconds: float | None = Field(
        default=None, gt=0, le=settings.pow_solve_timeout_seconds
    )


class PowSolveOut(BaseModel):
    """Search outcome. ``nonce`` and ``hash_hex`` are only set when solved."""

    status: Literal["solved", "cancelled"]
    nonce: str | None = None
    hash_hex: str | None = None
    iterations: str
    duration_ms: float
