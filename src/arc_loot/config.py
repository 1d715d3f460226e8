"""
Configuration management for the loot scraper.

Loads settings from environment variables and config file, with sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ARC_LOOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(default="https://arcraiders.wiki", description="Wiki origin")
    loot_path: str = Field(default="/wiki/Loot", description="Path of the loot table page")
    user_agent: str = Field(
        default="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        description="User-Agent header sent with every request",
    )
    api_timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")
    request_delay: float = Field(
        default=0.5, ge=0.0, description="Minimum seconds between detail page fetches"
    )
    fetch_missing_prices: bool = Field(
        default=True, description="Fetch detail pages for recycle outputs with no known price"
    )
    null_zero_total: bool = Field(
        default=False, description="Report a zero recycled value as null instead of 0"
    )
    output_path: Path = Field(
        default_factory=lambda: Path("data/loot-data.json"),
        description="Output JSON document",
    )
    cache_dir: Path = Field(
        default_factory=lambda: Path(".cache/arc_loot"),
        description="Cache storage directory",
    )
    detail_cache_ttl: int = Field(
        default=86400, ge=0, description="Seconds to keep cached detail pages"
    )
    log_level: str = Field(default="INFO", description="Logging level")


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    global _settings
    _settings = Settings()
    return _settings
