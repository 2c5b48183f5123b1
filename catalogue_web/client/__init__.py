"""Client for the catalogue management service."""

from catalogue_web.client.catalogue import CatalogueClient
from catalogue_web.client.config import ClientConfig
from catalogue_web.client.models import (
    BookCategory,
    BookCreateRequest,
    BookResponse,
    BookUpdateRequest,
)

__all__ = [
    "BookCategory",
    "BookCreateRequest",
    "BookResponse",
    "BookUpdateRequest",
    "CatalogueClient",
    "ClientConfig",
]
