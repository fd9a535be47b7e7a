# authstash/app/core/config.py
"""
Configuration for the fake login server using pydantic-settings.

Notes:
- The record store itself takes no settings; only the HTTP app and the
  logging setup read from here
- CORS_ORIGINS parsed from comma-separated env var, never defaults to "*"
- OTP window is the number of 30-second steps accepted on either side
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Strictly typed application settings.

    Priority for loading:
    1. Environment variables (highest priority)
    2. .env file (via pydantic-settings)
    3. Default values (lowest priority, dev-safe only)
    """

    # ─────────────────────────────────────────────────────────────
    # Application metadata
    # ─────────────────────────────────────────────────────────────
    PROJECT_NAME: str = "authstash"
    PROJECT_VERSION: str = "0.1.0"
    API_V2_STR: str = "/api/v2"

    # ─────────────────────────────────────────────────────────────
    # Logging
    # Accepts any stdlib level name, case-insensitive
    # ─────────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the level name so "debug" and "DEBUG" both work."""
        if v is None:
            return "INFO"
        return str(v).strip().upper() or "INFO"

    # ─────────────────────────────────────────────────────────────
    # Login server behaviour
    # ─────────────────────────────────────────────────────────────
    OTP_VALID_WINDOW: int = 1
    FAKE_SERVER_OFFLINE: bool = False

    # JSON list of fixture users to seed at startup (optional)
    FAKE_USERS_FILE: Optional[str] = None

    # ─────────────────────────────────────────────────────────────
    # CORS Configuration
    # Parsed from comma-separated CORS_ORIGINS env var
    # Empty string → empty list (NOT "*")
    # ─────────────────────────────────────────────────────────────
    CORS_ORIGINS: str = ""

    @property
    def BACKEND_CORS_ORIGINS(self) -> List[str]:
        """
        Parse CORS_ORIGINS string into a list of allowed origins.

        Returns:
            List of allowed origin URLs, empty when unset
        """
        if not self.CORS_ORIGINS or not self.CORS_ORIGINS.strip():
            return []

        return [
            origin.strip()
            for origin in self.CORS_ORIGINS.split(",")
            if origin.strip()
        ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance.

    Using lru_cache ensures settings are only loaded once per process.
    Tests that need different values build their own Settings(...) and
    pass it to create_app() instead.
    """
    return Settings()
