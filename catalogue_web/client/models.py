"""Wire models exchanged with the management service."""

from datetime import date
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, TypeAdapter


class BookCategory(StrEnum):
    """Book formats, as named by the management service."""

    HARD_COVER = "HARD_COVER"
    SOFT_COVER = "SOFT_COVER"
    EBOOK = "EBOOK"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    BookCategory.HARD_COVER: "Hard cover",
    BookCategory.SOFT_COVER: "Soft cover",
    BookCategory.EBOOK: "E-book",
}


class BookResponse(BaseModel):
    """A book as returned by the management service."""

    model_config = ConfigDict(extra="ignore")

    isbn: str
    title: str
    author: str
    publish_date: date
    price: Decimal
    category: BookCategory


class BookCreateRequest(BaseModel):
    """Body of ``POST /api/books``."""

    title: str
    author: str
    publish_date: date
    price: Decimal
    category: BookCategory


class BookUpdateRequest(BaseModel):
    """Body of ``PATCH /api/books/{isbn}``; only set fields are sent."""

    title: str | None = None
    author: str | None = None
    publish_date: date | None = None
    price: Decimal | None = None
    category: BookCategory | None = None


BookList = TypeAdapter(list[BookResponse])
