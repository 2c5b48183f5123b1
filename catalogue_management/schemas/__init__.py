"""Pydantic schemas for request/response validation."""

from catalogue_management.schemas.base import BaseSchema
from catalogue_management.schemas.book import BookCreate, BookRead, BookUpdate

__all__ = [
    "BaseSchema",
    "BookCreate",
    "BookRead",
    "BookUpdate",
]
