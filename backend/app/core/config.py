"""
Application configuration using Pydantic Settings.

Database connection parameters and the listening port are the only values
that normally need to change between environments.
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
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Database
    # ===========================================
    # sqlite+aiosqlite for local development, postgresql+asyncpg in production
    DATABASE_URL: str = "sqlite+aiosqlite:///./nabeatsu.db"
    DB_POOL_SIZE: int = 20
    DB_POOL_TIMEOUT: float = 2.0  # seconds to wait for a pooled connection
    DB_POOL_RECYCLE: int = 60  # seconds before a connection is replaced

    # Insert the default game_config row on startup when it is missing
    SEED_GAME_CONFIG: bool = True

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 4000
    API_PREFIX: str = "/api"
    ALLOWED_ORIGINS: List[str] = Field(default=["*"])

    # ===========================================
    # Uploads
    # ===========================================
    UPLOAD_DIR: str = "./uploads"

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
