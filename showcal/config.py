"""Centralized application configuration using Pydantic Settings.

Loads configuration from environment variables and a `.env` file.

Usage:
    from showcal.config import get_settings

    settings = get_settings()  # cached singleton
    print(settings.EPISODATE_SEARCH_URL)
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file.

    Every field has a default; the Google credentials are only needed for
    the calendar login flow.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Flask ──────────────────────────────────────────────────────────
    FLASK_ENV: str = Field(default="development", description="Flask environment (development/production)")
    FLASK_DEBUG: bool = Field(default=False, description="Enable Flask debug mode")
    SECRET_KEY: str = Field(default=DEFAULT_SECRET_KEY, description="Signs the session cookie holding the calendar token")
    SERVER_PORT: int = Field(default=8080, ge=1, le=65535, description="Port for the development server")

    # ── Episodate API ─────────────────────────────────────────────────
    EPISODATE_SEARCH_URL: str = Field(
        default="https://www.episodate.com/api/search",
        description="Show search endpoint",
    )
    EPISODATE_DETAILS_URL: str = Field(
        default="https://episodate.com/api/show-details",
        description="Show details endpoint",
    )

    # ── HTTP Client ───────────────────────────────────────────────────
    HTTP_TIMEOUT: float = Field(default=30, gt=0, le=120, description="Outbound request timeout (seconds)")

    # ── Google OAuth2 / Calendar ──────────────────────────────────────
    GOOGLE_CLIENT_ID: str = Field(default="", description="OAuth2 client id")
    GOOGLE_CLIENT_SECRET: str = Field(default="", description="OAuth2 client secret")
    GOOGLE_REDIRECT_URL: str = Field(
        default="http://localhost:8080/GoogleCallback",
        description="OAuth2 redirect URL registered with Google",
    )
    GOOGLE_AUTH_URL: str = Field(default="https://accounts.google.com/o/oauth2/auth")
    GOOGLE_TOKEN_URL: str = Field(default="https://oauth2.googleapis.com/token")
    GOOGLE_CALENDAR_URL: str = Field(default="https://www.googleapis.com/calendar/v3")
    CALENDAR_SESSION_LIMIT: int = Field(default=1024, gt=0, description="Max logged-in calendar sessions kept in memory")

    # ── Logging ───────────────────────────────────────────────────────
    LOG_LEVEL: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    LOG_FORMAT: str = Field(default="json", description="Log output format ('json' for prod, 'console' for dev)")

    # ── Validators ────────────────────────────────────────────────────

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_secret_key(cls, v: str, info) -> str:
        """Refuse the default secret key in production."""
        env = info.data.get("FLASK_ENV", "development")
        if env == "production" and v == DEFAULT_SECRET_KEY:
            raise ValueError("SECRET_KEY must be changed from the default in production.")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper().strip()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}, got '{v}'")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower().strip()
        if v not in ("json", "console"):
            raise ValueError("LOG_FORMAT must be 'json' or 'console'")
        return v

    @field_validator(
        "EPISODATE_SEARCH_URL",
        "EPISODATE_DETAILS_URL",
        "GOOGLE_AUTH_URL",
        "GOOGLE_TOKEN_URL",
        "GOOGLE_CALENDAR_URL",
    )
    @classmethod
    def validate_urls(cls, v: str) -> str:
        """Strip trailing slashes so paths and query strings join cleanly."""
        return v.rstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton Settings instance."""
    return Settings()
