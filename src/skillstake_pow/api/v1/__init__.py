# src/skillstake_pow/api/v1/__init__.py
"""Version 1 API endpoints."""

from .routes_pow import router as pow_router

__all__ = ["pow_router"]
