"""Repository layer for database operations."""

from catalogue_management.repositories.book import BookRepository
from catalogue_management.repositories.port import BookRepositoryPort

__all__ = [
    "BookRepository",
    "BookRepositoryPort",
]
