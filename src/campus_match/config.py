"""Configuration management for Campus Match."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CAMPUS_MATCH_",
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Matching defaults
    default_scheme: str = Field(
        default="roommate",
        description="Scheme used when a request does not name one",
    )
    default_limit: int | None = Field(
        default=None,
        ge=1,
        le=1000,
        description="Overrides the scheme's result cap when a request sets no limit",
    )

    # Custom schemes
    schemes_file: Path | None = Field(
        default=None,
        description="JSON file with extra scoring schemes, registered next to the built-ins",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # HTTP server
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
