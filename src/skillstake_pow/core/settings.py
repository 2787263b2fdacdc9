"""Application settings and configuration.

Settings are loaded from environment variables (or a ``.env`` file) with
defaults suitable for local development against devnet.
"""

from __future__ import annotations

import logging
from threading import Lock

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from skillstake_pow.core.errors import InvalidPublicKeyError
from skillstake_pow.core.pow import DEFAULT_YIELD_INTERVAL, MAX_POW_DIFFICULTY, POW_DOMAIN
from skillstake_pow.utils.keys import decode_public_key

logger = logging.getLogger(__name__)

DEFAULT_PROGRAM_ADDRESS = "C3e8kFFYMsEKxXwjMXix3vKSLfk9WwS1xcHeg5gedjvV"
DEFAULT_MINT_ADDRESS = "BbdpHzXyQmNerced3qTs6trkRB3CbpkG6B1VbXYhs7BR"


class ConfigWarnings:
    """Deduplicates configuration warnings.

    A message is logged the first time it is seen and suppressed afterwards.
    The module-level `config_warnings` instance lives for the whole process;
    call `reset` (tests do) to start over.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()
        self._lock = Lock()

    def warn(self, message: str) -> bool:
        """Log ``message`` once. Returns True if it was logged now."""
        with self._lock:
            if message in self._seen:
                return False
            self._seen.add(message)
        logger.warning("[SkillStake config] %s", message)
        return True

    def seen(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._seen)

    def reset(self) -> None:
        with self._lock:
            self._seen.clear()


config_warnings = ConfigWarnings()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application metadata
    app_name: str = Field(default="SkillStake PoW", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Proof-of-work puzzle
    pow_domain: str = Field(default=POW_DOMAIN.decode("ascii"), alias="SKILLSTAKE_POW_DOMAIN")
    pow_difficulty: int = Field(default=16, alias="SKILLSTAKE_POW_DIFFICULTY")
    pow_yield_interval: int = Field(
        default=DEFAULT_YIELD_INTERVAL, alias="SKILLSTAKE_POW_YIELD_INTERVAL"
    )
    pow_solve_timeout_seconds: float = Field(
        default=30.0, gt=0, alias="SKILLSTAKE_POW_SOLVE_TIMEOUT_SECONDS"
    )

    # Program addresses (base58)
    program_id: str | None = Field(default=None, alias="SKILLSTAKE_PROGRAM_ID")
    mint_address: str | None = Field(default=None, alias="SKILLSTAKE_MINT")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("pow_difficulty")
    @classmethod
    def _check_difficulty(cls, value: int) -> int:
        if not 0 <= value <= MAX_POW_DIFFICULTY:
            raise ValueError(f"pow_difficulty must be between 0 and {MAX_POW_DIFFICULTY}")
        return value

    @field_validator("pow_yield_interval")
    @classmethod
    def _check_yield_interval(cls, value: int) -> int:
        if value < 1:
            raise ValueError("pow_yield_interval must be at least 1")
        return value

    @property
    def pow_domain_bytes(self) -> bytes:
        """Return the domain tag as it is fed into the preimage."""
        return self.pow_domain.encode("utf-8")

    def resolve_program_address(self) -> str:
        """Return the configured program id, or the placeholder when unusable."""
        return _resolve_address(
            self.program_id,
            DEFAULT_PROGRAM_ADDRESS,
            label="Program address",
            env_name="SKILLSTAKE_PROGRAM_ID",
        )

    def resolve_mint_address(self) -> str:
        """Return the configured token mint, or the placeholder when unusable."""
        return _resolve_address(
            self.mint_address,
            DEFAULT_MINT_ADDRESS,
            label="Token mint",
            env_name="SKILLSTAKE_MINT",
        )

    def mint_public_key(self) -> bytes:
        """Return the raw 32 bytes of the resolved token mint."""
        return decode_public_key(self.resolve_mint_address())


def _resolve_address(value: str | None, fallback: str, *, label: str, env_name: str) -> str:
    if not value:
        config_warnings.warn(
            f"{label} missing. Falling back to a placeholder. Set {env_name}."
        )
        return fallback
    try:
        decode_public_key(value)
    except InvalidPublicKeyError:
        config_warnings.warn(
            f'{label} "{value}" is not a valid public key. '
            f"Falling back to a placeholder. Update {env_name} with the correct address."
        )
        return fallback
    return value


settings = Settings()
