"""
Library configuration using Pydantic Settings.

Values come from SOFTLRU_* environment variables or a local .env file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide cache defaults with environment variable support."""

    # Capacity used when a cache is built without an explicit one
    default_capacity: int = 10000

    # Logging
    log_level: str = "INFO"
    log_evictions: bool = False

    model_config = SettingsConfigDict(
        env_prefix="SOFTLRU_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
