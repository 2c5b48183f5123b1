"""Tests for management client configuration."""

import httpx
import pytest

from catalogue_web.client.config import ClientConfig
from catalogue_web.config import Settings
from catalogue_web.errors import ConfigurationError


def test_defaults() -> None:
    """Test defaults point at a local management service without credentials."""
    config = ClientConfig()

    assert config.base_url == "http://localhost:8080"
    assert config.auth is None
    assert config.timeout == httpx.Timeout(10.0, connect=5.0)


def test_trailing_slash_is_stripped() -> None:
    """Test base URLs are normalised."""
    assert ClientConfig(base_url="http://management:8080/").base_url == "http://management:8080"


def test_basic_auth() -> None:
    """Test credentials become httpx Basic auth."""
    config = ClientConfig(username="worker", password="worker")

    assert isinstance(config.auth, httpx.BasicAuth)


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"base_url": ""}, "base_url cannot be empty"),
        ({"base_url": "ftp://management"}, "Invalid base_url"),
        ({"connect_timeout": 0}, "connect_timeout must be positive"),
        ({"read_timeout": -1}, "read_timeout must be positive"),
        ({"username": "admin"}, "password is required"),
    ],
)
def test_invalid_values(kwargs: dict[str, object], message: str) -> None:
    """Test bad configuration fails at construction."""
    with pytest.raises(ConfigurationError, match=message):
        ClientConfig(**kwargs)  # type: ignore[arg-type]


def test_settings_build_client_config() -> None:
    """Test web settings carry through to the client configuration."""
    settings = Settings(
        management_base_url="https://catalogue.example/",
        management_username="worker",
        management_password="secret",
        read_timeout=2.5,
    )

    config = settings.client_config()

    assert config.base_url == "https://catalogue.example"
    assert config.username == "worker"
    assert config.timeout.read == 2.5
    assert config.timeout.connect == 5.0
