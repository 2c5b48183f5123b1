"""Field-by-field conversion between book schemas and the ORM model."""

from catalogue_management.models.book import Book
from catalogue_management.schemas.book import BookCreate, BookRead


def to_model(data: BookCreate, isbn: str) -> Book:
    """Build a transient ``Book`` from a create request and its allocated ISBN."""
    return Book(
        isbn=isbn,
        title=data.title,
        author=data.author,
        publish_date=data.publish_date,
        price=data.price,
        category=data.category,
    )


def to_read(book: Book) -> BookRead:
    """Build the public representation of a stored book."""
    return BookRead(
        isbn=book.isbn,
        title=book.title,
        author=book.author,
        publish_date=book.publish_date,
        price=book.price,
        category=book.category,
    )
