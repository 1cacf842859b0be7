"""
config.py — Runtime settings.

Values come from the environment (prefix YT_CAPTIONS_) or a local .env file.
The Data API credential is read from the conventional YOUTUBE_API_KEY
variable.  Everything has a default, so the pipeline runs without any
configuration; it just skips the Data API strategy when no key is set.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Desktop Chrome identity sent when scraping the public watch page.
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    youtube_api_key: str | None = Field(default=None, validation_alias="YOUTUBE_API_KEY")
    target_language: str = "en"

    # Seconds per HTTP request.  Every fetch is bounded by this.
    request_timeout: float = Field(default=15.0, gt=0)

    # Seconds a successful extraction stays in the in-memory cache.
    cache_ttl: float = Field(default=600.0, ge=0)

    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="YT_CAPTIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loaded on first use."""
    return Settings()
