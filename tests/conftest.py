# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from nacl.signing import SigningKey

from skillstake_pow.core.pow import POW_DOMAIN, PowPuzzle, PuzzleIdentity
from skillstake_pow.core.settings import Settings, config_warnings
from skillstake_pow.main import app as fastapi_app
from skillstake_pow.utils.keys import encode_public_key

WALLET_SEED = bytes(range(32))
TASK_ID = "1700000000"
# Practically unreachable; keeps searches running until cancelled
UNREACHABLE_DIFFICULTY = 248


@pytest.fixture(autouse=True)
def reset_config_warnings() -> Iterator[None]:
    config_warnings.reset()
    yield
    config_warnings.reset()


@pytest.fixture(scope="session")
def signing_key() -> SigningKey:
    return SigningKey(WALLET_SEED)


@pytest.fixture(scope="session")
def wallet(signing_key: SigningKey) -> bytes:
    """32-byte ed25519 public key used as the wallet identity."""
    return bytes(signing_key.verify_key)


@pytest.fixture(scope="session")
def wallet_b58(wallet: bytes) -> str:
    return encode_public_key(wallet)


@pytest.fixture()
def test_settings() -> Settings:
    """Settings pinned to a cheap difficulty and a small check-in interval."""
    return Settings(pow_difficulty=8, pow_yield_interval=64)


@pytest.fixture()
def mint(test_settings: Settings) -> bytes:
    return test_settings.mint_public_key()


@pytest.fixture()
def identity(wallet: bytes, mint: bytes) -> PuzzleIdentity:
    return PuzzleIdentity(wallet=wallet, mint=mint, domain_tag=POW_DOMAIN)


@pytest.fixture()
def make_puzzle(identity: PuzzleIdentity) -> Callable[[int], PowPuzzle]:
    def _make(difficulty: int) -> PowPuzzle:
        return PowPuzzle(identity=identity, difficulty=difficulty)

    return _make


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client
