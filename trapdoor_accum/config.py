"""
Accumulator Configuration

Environment-based configuration for the trapdoor accumulator.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AccumulatorSettings(BaseSettings):
    """Accumulator settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ACCUMULATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Trapdoor setup
    prime_bits: int = Field(
        default=64,
        ge=8,
        description="Bit length of each safe prime p, q (>= 1024 for real security)"
    )

    # Element mapping
    element_bits: int = Field(
        default=256,
        ge=16,
        description="Bit length of the safe primes assigned to elements"
    )

    # Exponentiation engine
    exponent_bits: int = Field(
        default=512,
        ge=64,
        description="Minimum fixed exponent width scanned by the exponentiation engine"
    )

    reduction_interval: int = Field(
        default=64,
        ge=0,
        description="Bits between explicit reductions mod n (0 disables)"
    )

    primality_rounds: int = Field(
        default=25,
        ge=1,
        description="Miller-Rabin rounds for primality testing"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    log_format: str = Field(
        default="json",
        description="Log format: json or text"
    )

    app_version: str = Field(default="0.1.0")

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        if value.lower() not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return value.lower()

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        if value.upper() not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"Unknown log level: {value}")
        return value.upper()


@lru_cache()
def get_settings() -> AccumulatorSettings:
    """Get accumulator settings."""
    return AccumulatorSettings()


def reset_settings() -> None:
    """Drop the cached settings so the environment is read again."""
    get_settings.cache_clear()
