"""Configuration management using environment variables."""

import os
from functools import lru_cache

from attrs import define

DEFAULT_TMDB_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"


@define
class Settings:
    """Application settings."""

    tmdb_api_key: str
    tmdb_base_url: str = DEFAULT_TMDB_BASE_URL
    image_base_url: str = DEFAULT_IMAGE_BASE_URL
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Load settings from the process environment."""
    return Settings(
        tmdb_api_key=os.environ["TMDB_API"],
        tmdb_base_url=os.environ.get("TMDB_BASE_URL", DEFAULT_TMDB_BASE_URL),
        image_base_url=os.environ.get("TMDB_IMAGE_BASE_URL", DEFAULT_IMAGE_BASE_URL),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )
