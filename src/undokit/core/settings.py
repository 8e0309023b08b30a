"""Centralized configuration for undokit using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the working directory root: .env, .env.local, .env.dev/.env.test/.env.prod

Only ambient concerns live here: the runtime environment flag, the log level
and the default history capacity used by `HistoryManager.from_settings`.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `UNDOKIT_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    default_capacity : int
        Undo history capacity used when a caller does not pass one explicitly.
        Maps from `UNDOKIT_DEFAULT_CAPACITY`; must be at least 1.
    """

    environment: EnvName = Field(default="dev", alias="UNDOKIT_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    default_capacity: int = Field(default=100, ge=1, alias="UNDOKIT_DEFAULT_CAPACITY")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests force a rebuild via `load_settings.cache_clear()` after mutating
    `os.environ`.
    """
    os.environ.setdefault("UNDOKIT_ENV", "dev")
    return Settings()


settings: Settings = load_settings()


def get_logger(name: str = "undokit") -> logging.Logger:
    """Return a logger configured to the currently loaded `LOG_LEVEL`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger


__all__ = ["Settings", "get_logger", "load_settings", "settings"]
