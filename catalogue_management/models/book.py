"""Book model, the unit of catalogue state."""

from datetime import date
from decimal import Decimal
from enum import StrEnum

from sqlalchemy import Date, Enum, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from catalogue_management.models.base import Base, TimestampMixin

ISBN_LENGTH = 13


class BookCategory(StrEnum):
    """Physical or digital format of a book."""

    HARD_COVER = "HARD_COVER"
    SOFT_COVER = "SOFT_COVER"
    EBOOK = "EBOOK"


class Book(Base, TimestampMixin):
    """A catalogued book.

    The ``isbn`` is assigned once by the allocator and never changes. The
    natural key ``(title, author, publish_date)`` decides whether a create
    request refers to a book already on file.

    Attributes:
        id: Surrogate primary key, never exposed over HTTP.
        isbn: Opaque public identifier, unique and immutable.
        title: Book title.
        author: Author name.
        publish_date: Publication date.
        price: Price with two decimal places.
        category: Hard cover, soft cover or ebook.
    """

    __tablename__ = "book_data"
    __table_args__ = (
        UniqueConstraint("isbn", name="uk_books_isbn"),
        UniqueConstraint("title", "author", "publish_date", name="uk_books_name_author_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    isbn: Mapped[str] = mapped_column(String(ISBN_LENGTH), nullable=False)

    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    author: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    publish_date: Mapped[date] = mapped_column(Date, nullable=False)

    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    category: Mapped[BookCategory] = mapped_column(
        Enum(BookCategory, name="book_category", native_enum=False, length=16),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Book {self.isbn} {self.title!r}>"
