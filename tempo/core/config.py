"""
Application configuration using Pydantic Settings.

Values are read from environment variables (and an optional .env file).
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "production"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    # ===========================================
    # Scheduler
    # ===========================================
    # IANA timezone used to read day boundaries and working hours.
    # Empty means instants are read by their own wall-clock fields.
    SCHEDULER_TIMEZONE: str = ""
    DEFAULT_BLOCK_MINUTES: int = Field(default=90, gt=0)
    DEFAULT_BUFFER_MINUTES: int = Field(default=10, ge=0)

    @property
    def scheduler_timezone(self) -> str | None:
        return self.SCHEDULER_TIMEZONE or None


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
