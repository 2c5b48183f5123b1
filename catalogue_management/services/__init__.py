"""Service layer for business logic."""

from catalogue_management.services.book import BookReadService, BookWriteService, require_text
from catalogue_management.services.isbn import IsbnAllocator, random_isbn

__all__ = [
    "BookReadService",
    "BookWriteService",
    "IsbnAllocator",
    "random_isbn",
    "require_text",
]
