"""
Application configuration for the localization service.

Strongly-typed settings using Pydantic v2 BaseSettings. Defaults target
local/dev usage; values can be overridden via environment variables or a
.env file at the project root (lists are given as JSON, e.g.
SUPPORTED_CULTURES='["pt-BR", "en-US"]').
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (.env supported)."""

    # Load from .env at repo root; ignore unknown variables to keep flexibility
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # -------------------------------------------------------------------------
    # Core application info
    # -------------------------------------------------------------------------
    APP_NAME: str = "Localization JSON"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # -------------------------------------------------------------------------
    # Cultures
    # -------------------------------------------------------------------------
    DEFAULT_CULTURE: str = "en-US"
    SUPPORTED_CULTURES: list[str] = ["pt-BR", "en-US"]
    # Accept any culture babel knows about, not only SUPPORTED_CULTURES.
    ACCEPT_ANY_KNOWN_CULTURE: bool = False

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------
    # This file is app/core/config.py → APP_DIR is .../app
    APP_DIR: Path = Path(__file__).resolve().parent.parent
    RESOURCES_DIR: Path = APP_DIR / "localization" / "languages"
    RESOURCE_EXTENSION: str = ".json"

    # -------------------------------------------------------------------------
    # Cache (defaults: unbounded, never expires)
    # -------------------------------------------------------------------------
    CACHE_NAMESPACE: str = "locale"
    CACHE_TTL_SECONDS: float | None = None
    CACHE_MAX_ENTRIES: int | None = None

    # -------------------------------------------------------------------------
    # API
    # -------------------------------------------------------------------------
    CORS_ALLOW_ORIGINS: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance (singleton-like)."""
    return Settings()
