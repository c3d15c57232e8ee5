"""Centralized, typed configuration using pydantic-settings.

Provides a single ``Settings`` class backed by ``.env`` file and environment
variables (prefixed ``AUCTION_``) and a cached ``get_settings()`` accessor.

This module has no imports from the ``auction`` package so that any module
can depend on it.
"""

from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path

import structlog
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Host settings loaded from environment variables and ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="AUCTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- General ---------------------------------------------------------------
    production: bool = False

    # -- Persistence -----------------------------------------------------------
    db_path: Path = Path("data/auction.db")
    auction_id: str = Field(default="default", min_length=1)

    # -- Settlement ------------------------------------------------------------
    transfer_attempts: int = Field(default=3, ge=1)


@lru_cache
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    try:
        return Settings()
    except ValidationError as exc:
        logger.error("settings_validation_failed", errors=exc.errors())
        sys.exit(1)
