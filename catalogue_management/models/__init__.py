"""SQLAlchemy models package."""

from catalogue_management.models.base import Base
from catalogue_management.models.book import Book, BookCategory

__all__ = [
    "Base",
    "Book",
    "BookCategory",
]
