# src/skillstake_pow/schemas/__init__.py
"""
Pydantic schemas for API request/response models.
"""

from .pow import PowConfigOut, PowSolveIn, PowSolveOut, PowVerifyIn, PowVerifyOut

__all__ = [
    "PowConfigOut",
    "PowSolveIn", "PowSolveOut",
    "PowVerifyIn", "PowVerifyOut",
]
