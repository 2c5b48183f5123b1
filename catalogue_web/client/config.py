"""Connection settings for the management service client.

``ClientConfig`` is built once at startup from the web service's settings
and handed to ``HTTPClient``; nothing in the client reads the environment
directly.

Example:
    >>> config = ClientConfig(base_url="http://localhost:8080", read_timeout=3.0)
    >>> config.timeout
    Timeout(connect=5.0, read=3.0, write=3.0, pool=3.0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import httpx

from catalogue_web.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Immutable configuration for the management service client.

    Attributes:
        base_url: Management service root URL.
        username: HTTP Basic username, or None to send no credentials.
        password: HTTP Basic password.
        connect_timeout: Seconds allowed to establish a connection.
        read_timeout: Seconds allowed for each read.
        user_agent: User-Agent header for requests.
    """

    DEFAULT_BASE_URL: ClassVar[str] = "http://localhost:8080"
    DEFAULT_CONNECT_TIMEOUT: ClassVar[float] = 5.0
    DEFAULT_READ_TIMEOUT: ClassVar[float] = 10.0

    base_url: str = DEFAULT_BASE_URL
    username: str | None = None
    password: str | None = None
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT
    user_agent: str = "catalogue-web/1.0"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate all configuration values.

        Raises:
            ConfigurationError: If any configuration value is invalid.
        """
        if not self.base_url:
            raise ConfigurationError("base_url cannot be empty")
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"Invalid base_url: {self.base_url} (must start with http:// or https://)"
            )

        # Remove trailing slash for consistency
        if self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

        if self.connect_timeout <= 0:
            raise ConfigurationError(
                f"connect_timeout must be positive, got {self.connect_timeout}"
            )
        if self.read_timeout <= 0:
            raise ConfigurationError(f"read_timeout must be positive, got {self.read_timeout}")

        if self.username is not None and self.password is None:
            raise ConfigurationError("password is required when username is set")

    @property
    def timeout(self) -> httpx.Timeout:
        """Timeouts in httpx form; write and pool share the read limit."""
        return httpx.Timeout(self.read_timeout, connect=self.connect_timeout)

    @property
    def auth(self) -> httpx.BasicAuth | None:
        """Basic credentials, if configured."""
        if self.username is None or self.password is None:
            return None
        return httpx.BasicAuth(self.username, self.password)
