"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    session_secret: str
    google_maps_api_key: str | None = None
    data_dir: str = "data"
    rounds_per_game: int = 5
    anon_daily_limit: int = 3
    standard_daily_limit: int = 6
    guess_min: float = -50.0
    guess_max: float = 50.0
    round_seconds: int = 15
    session_max_age_seconds: int | None = 3 * 60 * 60
    leaderboard_size: int = 20
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_forwarded_for(raw: str | None) -> str | None:
    """Return the client address from an X-Forwarded-For header."""
    if raw is None:
        return None
    first = raw.split(",", maxsplit=1)[0].strip()
    return first or None
