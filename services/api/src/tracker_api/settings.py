"""Application settings loaded from environment variables."""

import functools

from pydantic import Field
from pydantic_settings import BaseSettings

from tracker_api.constants import DEFAULT_CACHE_FILE, DEFAULT_CACHE_MAX_AGE_MINUTES
from tracker_core.constants import DEFAULT_RECENT_WINDOW_DAYS, DEFAULT_REQUEST_TIMEOUT
from tracker_core.consolidate import DEFAULT_ERA_ALIASES, EraAlias


class AppSettings(BaseSettings):
    """API service configuration."""

    # Parsed-tracker cache (flat JSON file)
    CACHE_FILE: str = DEFAULT_CACHE_FILE
    CACHE_MAX_AGE_MINUTES: int = DEFAULT_CACHE_MAX_AGE_MINUTES

    # Google Sheets
    SHEETS_REQUEST_TIMEOUT: float = DEFAULT_REQUEST_TIMEOUT
    ART_SHEET_LOOKUP_ENABLED: bool = True

    # Parsing
    ERA_ALIASES: list[EraAlias] = Field(default_factory=lambda: list(DEFAULT_ERA_ALIASES))  # JSON list in env
    RECENT_WINDOW_DAYS: int = DEFAULT_RECENT_WINDOW_DAYS

    # CORS
    CORS_ALLOWED_ORIGINS: str = "http://localhost:3000"  # comma-separated origins

    # Rate limiting
    RATE_LIMIT_PARSE_PER_MINUTE: int = 30

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = {"env_prefix": ""}


@functools.lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return cached application settings singleton."""
    return AppSettings()
