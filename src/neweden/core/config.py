"""
neweden Centralized Configuration

Provides validated, type-safe access to all environment variables using Pydantic Settings.

Usage:
    from neweden.core.config import get_settings

    settings = get_settings()
    if settings.sde_path:
        ...

Environment Variables:
    NEWEDEN_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    NEWEDEN_DEBUG: Legacy debug flag (enables DEBUG level if set)
    NEWEDEN_LOG_JSON: Output logs as JSON
    NEWEDEN_SDE_PATH: Fuzzwork SDE SQLite file to load the universe from
    NEWEDEN_UNIVERSE_CACHE: JSON universe cache to load the universe from
    NEWEDEN_DEBUG_TIMING: Enable timing debug logs
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_env_file() -> Path | None:
    """
    Find .env file by searching for project root markers.

    Searches upward from this file's location for pyproject.toml,
    then checks for .env in that directory.

    Returns:
        Path to .env if found, None otherwise
    """
    current = Path(__file__).resolve().parent

    for _ in range(10):  # Limit search depth
        if (current / "pyproject.toml").exists():
            env_file = current / ".env"
            if env_file.exists():
                return env_file
            return None
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


_ENV_FILE = _find_project_env_file()


class NewEdenSettings(BaseSettings):
    """
    neweden configuration settings with validation.

    Environment variables are automatically loaded with the NEWEDEN_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="NEWEDEN_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # =========================================================================
    # Logging Configuration
    # =========================================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level for neweden components",
    )

    debug: bool = Field(
        default=False,
        description="Legacy debug flag (enables DEBUG level if set)",
    )

    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format for machine parsing",
    )

    debug_timing: bool = Field(
        default=False,
        description="Log universe load and route timings",
    )

    # =========================================================================
    # Data Sources
    # =========================================================================

    sde_path: Optional[Path] = Field(
        default=None,
        description="Fuzzwork SDE SQLite file (mapSolarSystems, mapSolarSystemJumps)",
    )

    universe_cache: Optional[Path] = Field(
        default=None,
        description="JSON universe cache file",
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def effective_log_level(self) -> str:
        """
        Get effective log level, respecting legacy NEWEDEN_DEBUG.

        Priority:
        1. Explicit NEWEDEN_LOG_LEVEL
        2. NEWEDEN_DEBUG=1 -> DEBUG
        3. Default: WARNING
        """
        if self.debug and self.log_level == "WARNING":
            return "DEBUG"
        return self.log_level

    @property
    def log_level_int(self) -> int:
        """Get effective log level as logging constant."""
        return getattr(logging, self.effective_log_level)


# =============================================================================
# Singleton Accessor
# =============================================================================


@lru_cache(maxsize=1)
def get_settings() -> NewEdenSettings:
    """
    Get the singleton settings instance.

    The settings are validated at first access.
    """
    return NewEdenSettings()


def reset_settings() -> None:
    """
    Reset the settings cache (for testing).

    After calling this, the next get_settings() call will
    reload settings from environment variables.
    """
    get_settings.cache_clear()
