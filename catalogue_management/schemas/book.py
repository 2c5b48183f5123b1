"""Book schemas for request/response validation."""

from datetime import date
from decimal import Decimal
from typing import Annotated, Any

from pydantic import Field, PlainSerializer, field_validator

from catalogue_management.models.book import BookCategory
from catalogue_management.schemas.base import BaseSchema

# Eight integer digits and two fractional, matching Numeric(10, 2).
Price = Annotated[
    Decimal,
    Field(ge=0, max_digits=10, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class BookCreate(BaseSchema):
    """Schema for creating a book, or re-pricing one already on file."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Dune"])
    author: str = Field(..., min_length=1, max_length=255, examples=["Frank Herbert"])
    publish_date: date = Field(..., examples=["1965-08-01"])
    price: Price
    category: BookCategory


class BookUpdate(BaseSchema):
    """Schema for patching an existing book.

    Only fields present in the request body are applied; absence is read from
    ``model_fields_set``. Explicit nulls are rejected. The ISBN cannot be
    patched and an ``isbn`` key in the body is ignored.
    """

    title: str | None = Field(default=None, min_length=1, max_length=255)
    author: str | None = Field(default=None, min_length=1, max_length=255)
    publish_date: date | None = None
    price: Price | None = None
    category: BookCategory | None = None

    @field_validator("title", "author", "publish_date", "price", "category")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        """Refuse explicit nulls; a book has no nullable attributes."""
        if v is None:
            msg = "Field may be omitted but not set to null"
            raise ValueError(msg)
        return v

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent, with their values."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class BookRead(BaseSchema):
    """Schema for reading book data."""

    isbn: str
    title: str
    author: str
    publish_date: date
    price: Price
    category: BookCategory
