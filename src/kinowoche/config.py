"""Application configuration using pydantic-settings."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        str_strip_whitespace=True,
    )

    # SerpApi (Google Maps + Google showtimes block)
    serpapi_key: str = ""

    # TMDb API
    tmdb_key: str = Field(
        default="",
        validation_alias=AliasChoices("tmdb_key", "tmdb_api_key"),
    )

    # Upstream HTTP settings
    request_timeout: float = 20.0
    scrape_timeout: int = 60
    user_agent: str = "kinowoche/0.1 (+https://github.com/kinowoche)"

    # Caches (seconds)
    metadata_cache_ttl: int = 60 * 60 * 12
    query_cache_ttl: int = 60 * 10

    # Pipeline tuning
    enrich_max_titles: int = 12
    fallback_min_real_days: int = 2
    timezone: str = "Europe/Berlin"

    # API settings
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 3000


# Global settings instance
settings = Settings()
