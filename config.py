# config.py

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./posts.db"
    database_echo: bool = False  # Set True for SQL logging

    # Logging
    log_level: str = "INFO"

    # Header set by the upstream auth gateway with the resolved role claim
    role_header: str = "X-Role"

    # Number of words a non-admin reader sees in a word breakdown
    public_word_limit: int = 10


@lru_cache()
def get_settings() -> Settings:
    return Settings()
