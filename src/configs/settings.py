"""Centralized settings management for the Charlotte Event Feed."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Repository root (src/configs/settings.py -> repo)
PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """
    Application settings powered by pydantic-settings.

    Loads configuration from environment variables and a .env file located
    at the repository root.
    """

    # -------------------------------------------------------------------------
    # ENVIRONMENT
    # -------------------------------------------------------------------------
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # -------------------------------------------------------------------------
    # SOURCE API KEYS
    # -------------------------------------------------------------------------
    TICKETMASTER_API_KEY: SecretStr | None = None
    EVENTBRITE_API_KEY: SecretStr | None = None

    # -------------------------------------------------------------------------
    # METRO AREA
    # -------------------------------------------------------------------------
    CITY: str = "Charlotte"
    STATE_CODE: str = "NC"
    TIMEZONE: str = "America/New_York"

    # -------------------------------------------------------------------------
    # PATHS
    # -------------------------------------------------------------------------
    DATA_DIR: Path = PROJECT_ROOT / "data"
    CACHE_DIR: Path = PROJECT_ROOT / "data" / "cache"
    SOURCES_CONFIG_PATH: Path = PROJECT_ROOT / "src" / "configs" / "sources.yaml"

    # -------------------------------------------------------------------------
    # CRAWL BEHAVIOUR
    # -------------------------------------------------------------------------
    CACHE_MAX_AGE_DAYS: int = 7
    RATE_LIMIT_DELAY_S: float = 1.0
    REQUEST_TIMEOUT_S: float = 30.0
    FEED_WINDOW_DAYS: int = 14

    # -------------------------------------------------------------------------
    # CONFIGURATION
    # -------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        # Allow extra fields in .env but ignore them in the model
        extra="ignore",
    )

    @property
    def log_level(self) -> str:
        """Effective log level; DEBUG=true overrides LOG_LEVEL."""
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL

    def credential(self, name: str) -> str | None:
        """
        Return the plain value of a secret setting, or None when unset/blank.

        Parameters
        ----------
        name : str
            Setting name, e.g. ``"TICKETMASTER_API_KEY"``.
        """
        value = getattr(self, name, None)
        if value is None:
            return None
        if isinstance(value, SecretStr):
            value = value.get_secret_value()
        value = str(value).strip()
        return value or None


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns
    -------
    Settings
        The singleton settings instance.
    """
    return Settings()


def read_credential(name: str) -> str | None:
    """
    Read a credential fresh from the environment.

    Bypasses the settings cache so that keys exported after start-up (or
    removed in tests) are seen at fetch time.
    """
    return Settings().credential(name)
