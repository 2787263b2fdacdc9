"""Encoding and hashing helpers."""
