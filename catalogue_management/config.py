"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Management service settings loaded from ``CATALOGUE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CATALOGUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    app_name: str = "Book Catalogue Management API"

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Database
    database_url: str = "sqlite+aiosqlite:///./catalogue.db"

    @property
    def async_database_url(self) -> str:
        """Get database URL with an async driver for SQLAlchemy.

        Hosted Postgres providers hand out 'postgres://' URLs, but SQLAlchemy
        async needs 'postgresql+asyncpg://'.
        """
        url = self.database_url
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    # Logging
    log_level: str = "INFO"
    log_format: Literal["structured", "text"] = "text"

    # HTTP Basic users
    admin_username: str = "admin"
    admin_password: str = "admin"
    worker_username: str = "worker"
    worker_password: str = "worker"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
