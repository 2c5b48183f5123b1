"""Pytest configuration and fixtures for the web service."""

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from catalogue_web.api.deps import get_catalogue_client
from catalogue_web.client.catalogue import CatalogueClient
from catalogue_web.main import app
from tests.web.support import FakeManagementAPI, Handler, make_catalogue_client


@pytest.fixture
def management() -> FakeManagementAPI:
    """Empty fake management service."""
    return FakeManagementAPI()


@pytest.fixture
def catalogue_client(management: FakeManagementAPI) -> Generator[CatalogueClient, None, None]:
    """Client talking to the fake management service."""
    with make_catalogue_client(management) as client:
        yield client


@pytest.fixture
def web_client(catalogue_client: CatalogueClient) -> Generator[TestClient, None, None]:
    """Web app test client using the fake management service."""
    app.dependency_overrides[get_catalogue_client] = lambda: catalogue_client
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def web_client_for() -> Generator[Callable[[Handler], TestClient], None, None]:
    """Build a web test client whose management calls go to ``handler``."""
    clients: list[CatalogueClient] = []

    def factory(handler: Handler) -> TestClient:
        client = make_catalogue_client(handler)
        clients.append(client)
        app.dependency_overrides[get_catalogue_client] = lambda: client
        return TestClient(app, raise_server_exceptions=False)

    yield factory

    app.dependency_overrides.clear()
    for client in clients:
        client.close()


@pytest.fixture
def dune_form() -> dict[str, str]:
    """Valid create form for Dune."""
    return {
        "title": "Dune",
        "author": "Herbert",
        "publish_date": "01/08/1965",
        "price": "29.99",
        "category": "HARD_COVER",
    }
