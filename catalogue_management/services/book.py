"""Book services for catalogue business logic."""

import logging

from sqlalchemy.exc import IntegrityError

from catalogue_management.core.exceptions import BadRequestError, ConflictError, NotFoundError
from catalogue_management.models.book import Book
from catalogue_management.repositories.port import BookRepositoryPort
from catalogue_management.schemas.book import BookCreate, BookRead, BookUpdate
from catalogue_management.services.isbn import IsbnAllocator
from catalogue_management.services.mappers import to_model, to_read

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "A book with this information already exists"


def require_text(value: str | None, field: str) -> str:
    """Return ``value`` if it is a non-empty string.

    Raises:
        BadRequestError: If the value is None or empty.
    """
    if not value:
        raise BadRequestError(f"Field '{field}' must be provided")
    return value


class BookWriteService:
    """Create, patch and delete catalogue records.

    The lookups and writes inside one operation are separate store calls and
    are not isolated from concurrent requests. Two creates for the same
    natural key can both miss the lookup; the loser then fails on the
    database's unique constraint and is reported as a conflict.
    """

    def __init__(
        self,
        repository: BookRepositoryPort,
        allocator: IsbnAllocator | None = None,
    ) -> None:
        """Initialize service with its storage port.

        Args:
            repository: Book storage.
            allocator: ISBN allocator; defaults to one over ``repository``.
        """
        self.repository = repository
        self.allocator = allocator or IsbnAllocator(repository)

    async def create(self, data: BookCreate) -> BookRead:
        """Create a book, or re-price the one already filed under the same natural key.

        On a natural-key match only ``price`` and ``category`` are overwritten
        and the existing ISBN is kept. Otherwise a new ISBN is allocated.

        Args:
            data: Book creation data.

        Returns:
            The stored book.

        Raises:
            ConflictError: If no ISBN could be allocated or the insert
                violated a unique constraint.
        """
        existing = await self.repository.get_by_natural_key(
            data.title, data.author, data.publish_date
        )
        if existing is not None:
            book = await self.repository.update(
                existing,
                price=data.price,
                category=data.category,
            )
            logger.info("Merged create into existing book %s", book.isbn)
            return to_read(book)

        isbn = await self.allocator.allocate()
        book = await self._insert(to_model(data, isbn))
        logger.info("Created book %s", book.isbn)
        return to_read(book)

    async def update(self, isbn: str, patch: BookUpdate) -> BookRead:
        """Apply the fields present in ``patch`` to the book with this ISBN.

        Args:
            isbn: ISBN of the book to change.
            patch: Fields to overwrite; absent fields are left alone.

        Returns:
            The updated book.

        Raises:
            BadRequestError: If ``isbn`` is empty.
            NotFoundError: If no book has this ISBN.
            ConflictError: If the change collides with another book's natural key.
        """
        require_text(isbn, "isbn")
        book = await self._get_or_404(isbn)

        try:
            book = await self.repository.update(book, **patch.changes())
        except IntegrityError as exc:
            raise ConflictError(message=DUPLICATE_MESSAGE) from exc

        logger.info("Updated book %s fields=%s", isbn, sorted(patch.model_fields_set))
        return to_read(book)

    async def delete(self, isbn: str) -> None:
        """Delete the book with this ISBN.

        Raises:
            BadRequestError: If ``isbn`` is empty.
            NotFoundError: If no book has this ISBN.
        """
        require_text(isbn, "isbn")
        if not await self.repository.exists_by_isbn(isbn):
            raise NotFoundError("Book", isbn, key="ISBN")

        await self.repository.delete_by_isbn(isbn)
        logger.info("Deleted book %s", isbn)

    async def _insert(self, book: Book) -> Book:
        try:
            return await self.repository.add(book)
        except IntegrityError as exc:
            logger.warning("Insert of %s lost to a concurrent write", book.isbn)
            raise ConflictError(message=DUPLICATE_MESSAGE) from exc

    async def _get_or_404(self, isbn: str) -> Book:
        book = await self.repository.get_by_isbn(isbn)
        if book is None:
            raise NotFoundError("Book", isbn, key="ISBN")
        return book


class BookReadService:
    """Read-only queries over the catalogue."""

    def __init__(self, repository: BookRepositoryPort) -> None:
        self.repository = repository

    async def get_all(self) -> list[BookRead]:
        """Return the whole catalogue, possibly empty."""
        return [to_read(book) for book in await self.repository.get_all_books()]

    async def get_by_isbn(self, isbn: str) -> BookRead:
        """Get a book by ISBN.

        Raises:
            BadRequestError: If ``isbn`` is empty.
            NotFoundError: If no book has this ISBN.
        """
        require_text(isbn, "isbn")
        book = await self.repository.get_by_isbn(isbn)
        if book is None:
            raise NotFoundError("Book", isbn, key="ISBN")
        return to_read(book)

    async def search_by_title(self, title: str) -> list[BookRead]:
        """Books whose title matches exactly."""
        require_text(title, "title")
        return [to_read(book) for book in await self.repository.get_all_by_title(title)]

    async def search_by_author(self, author: str) -> list[BookRead]:
        """Books whose author matches exactly."""
        require_text(author, "author")
        return [to_read(book) for book in await self.repository.get_all_by_author(author)]

    async def search(self, title: str | None = None, author: str | None = None) -> list[BookRead]:
        """Search by title if given, else by author, else list everything."""
        if title is not None:
            return await self.search_by_title(title)
        if author is not None:
            return await self.search_by_author(author)
        return await self.get_all()

    async def first_by_title(self, title: str) -> BookRead | None:
        require_text(title, "title")
        book = await self.repository.get_first_by_title(title)
        return to_read(book) if book is not None else None

    async def first_by_author(self, author: str) -> BookRead | None:
        require_text(author, "author")
        book = await self.repository.get_first_by_author(author)
        return to_read(book) if book is not None else None
