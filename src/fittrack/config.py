"""Configuration settings for fittrack."""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory (<repo>/data)
DATA_DIR = Path(__file__).parent.parent.parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from FITTRACK_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FITTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    data_dir: Path = DATA_DIR
    db_name: str = "fittrack.db"

    # Dashboard window: how many recent workouts feed the stats counters
    recent_window: int = 5

    # Upper bound on concurrent per-workout exercise fetches
    history_concurrency: int = 8

    # Web server
    host: str = "127.0.0.1"
    port: int = 8000

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for CLI and server entry points."""
    if level is None:
        level = get_settings().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
