"""Web service configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from catalogue_web.client.config import ClientConfig


class Settings(BaseSettings):
    """Web service settings loaded from ``CATALOGUE_WEB_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CATALOGUE_WEB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    app_name: str = "Book Catalogue Web"

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8081

    # Management service
    management_base_url: str = ClientConfig.DEFAULT_BASE_URL
    management_username: str = "admin"
    management_password: str = "admin"
    connect_timeout: float = ClientConfig.DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = ClientConfig.DEFAULT_READ_TIMEOUT

    # Logging
    log_level: str = "INFO"
    log_format: Literal["structured", "text"] = "text"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    def client_config(self) -> ClientConfig:
        """Build the immutable management client configuration.

        Raises:
            ConfigurationError: If the values are invalid.
        """
        return ClientConfig(
            base_url=self.management_base_url,
            username=self.management_username,
            password=self.management_password,
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
