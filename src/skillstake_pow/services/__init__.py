# src/skillstake_pow/services/__init__.py
"""Solving and verification services."""

from .pow_service import PowService
from .solver import CancellationToken, PowSolver, SolveCancelled, SolveJob, SolveResult
from .verifier import VerifyResult, verify_nonce

__all__ = [
    "CancellationToken",
    "PowService",
    "PowSolver",
    "SolveCancelled",
    "SolveJob",
    "SolveResult",
    "VerifyResult",
    "verify_nonce",
]
