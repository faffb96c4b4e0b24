# src/config/settings.py — v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for preview tuning: cache lifetime, render window
sizes, image retry budget and HTTP client options.
"""

from __future__ import annotations

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
        env_prefix="FILEPREVIEW_",
        extra="ignore",
    )

    # === Cache ===
    cache_backend: Literal["memory"] = "memory"
    cache_ttl_seconds: float = 300.0

    # === Text rendering ===
    initial_visible_lines: int = 20
    visible_lines_chunk: int = 50
    truncation_marker: str = "Content truncated"
    filename_max_length: int = 40

    # === Media ===
    image_max_retries: int = 2

    # === HTTP ===
    # None = no timeout; a stuck fetch keeps the loading view up.
    http_timeout_seconds: float | None = None
    http_follow_redirects: bool = True

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"

    # --- Validators ---

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: float) -> float:  # noqa: N805
        if v <= 0:
            raise ValueError("cache_ttl_seconds must be > 0")
        return v

    @field_validator("image_max_retries")
    @classmethod
    def validate_retries(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("image_max_retries must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.initial_visible_lines <= 0:
            errors.append("INITIAL_VISIBLE_LINES must be > 0")
        if self.visible_lines_chunk <= 0:
            errors.append("VISIBLE_LINES_CHUNK must be > 0")
        if self.filename_max_length < 8:
            errors.append("FILENAME_MAX_LENGTH must be >= 8")
        if self.http_timeout_seconds is not None and self.http_timeout_seconds <= 0:
            errors.append("HTTP_TIMEOUT_SECONDS must be > 0 when set")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
