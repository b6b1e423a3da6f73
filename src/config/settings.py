# src/config/settings.py
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for matching defaults, query limits, cache sizing,
remote fallback, ingestion limits and logging. Every variable is read with
the ANSWERFINDER_ prefix (e.g. ANSWERFINDER_MIN_CONFIDENCE=0.6).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ANSWERFINDER_",
        extra="ignore",
    )

    # === Matching defaults (per-call options start from these) ===
    min_confidence: float = 0.5
    fuzzy_enabled: bool = True
    partial_enabled: bool = True
    use_cache: bool = True

    # === Query limits ===
    min_query_length: int = 3
    max_query_length: int = 500

    # === Query cache ===
    cache_max_size: int = 100
    cache_ttl_seconds: float = 3600.0

    # === Remote fallback ===
    remote_enabled: bool = False
    remote_endpoint: str = ""
    remote_timeout_seconds: float = 15.0
    remote_default_confidence: float = 0.7
    remote_max_retries: int = 2
    remote_deadline_seconds: float = 60.0

    # === Ingestion ===
    max_file_size_mb: float = 10.0
    import_batch_size: int = 100

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("min_confidence", "remote_default_confidence")
    @classmethod
    def validate_unit_interval(cls, v: float) -> float:  # noqa: N805
        """Confidence-like values must lie in [0, 1]."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("value must be between 0 and 1")
        return v

    @field_validator("cache_max_size", "import_batch_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("value must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.min_query_length < 1:
            errors.append("MIN_QUERY_LENGTH must be >= 1")

        if self.min_query_length >= self.max_query_length:
            errors.append("MIN_QUERY_LENGTH must be < MAX_QUERY_LENGTH")

        if self.remote_enabled and not self.remote_endpoint:
            errors.append("REMOTE_ENABLED requires REMOTE_ENDPOINT")

        if self.cache_ttl_seconds <= 0:
            errors.append("CACHE_TTL_SECONDS must be > 0")

        if self.remote_timeout_seconds <= 0:
            errors.append("REMOTE_TIMEOUT_SECONDS must be > 0")

        if self.remote_deadline_seconds < self.remote_timeout_seconds:
            errors.append("REMOTE_DEADLINE_SECONDS must be >= REMOTE_TIMEOUT_SECONDS")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def max_file_size_bytes(self) -> int:
        """Ingestion size limit in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-call config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
