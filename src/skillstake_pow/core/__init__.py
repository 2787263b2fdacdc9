"""Puzzle primitives, errors and settings."""
