"""Book repository for database operations."""

from datetime import date

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalogue_management.models.book import Book
from catalogue_management.repositories.base import BaseRepository


class BookRepository(BaseRepository[Book]):
    """SQLAlchemy implementation of ``BookRepositoryPort``."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize book repository.

        Args:
            session: Async database session.
        """
        super().__init__(Book, session)

    async def get_by_isbn(self, isbn: str) -> Book | None:
        """Get a book by its ISBN."""
        result = await self.session.execute(select(Book).where(Book.isbn == isbn))
        return result.scalar_one_or_none()

    async def get_by_natural_key(
        self,
        title: str,
        author: str,
        publish_date: date,
    ) -> Book | None:
        """Get the book matching title, author and publish date exactly."""
        result = await self.session.execute(
            select(Book).where(
                Book.title == title,
                Book.author == author,
                Book.publish_date == publish_date,
            )
        )
        return result.scalar_one_or_none()

    async def exists_by_isbn(self, isbn: str) -> bool:
        result = await self.session.execute(select(exists().where(Book.isbn == isbn)))
        return bool(result.scalar())

    async def exists_by_natural_key(
        self,
        title: str,
        author: str,
        publish_date: date,
    ) -> bool:
        result = await self.session.execute(
            select(
                exists().where(
                    Book.title == title,
                    Book.author == author,
                    Book.publish_date == publish_date,
                )
            )
        )
        return bool(result.scalar())

    async def get_all_books(self) -> list[Book]:
        """Get the whole catalogue ordered by title, then ISBN."""
        return await self.get_all(Book.title, Book.isbn)

    async def get_all_by_title(self, title: str) -> list[Book]:
        """Get books whose title matches exactly."""
        result = await self.session.execute(
            select(Book).where(Book.title == title).order_by(Book.publish_date, Book.isbn)
        )
        return list(result.scalars().all())

    async def get_all_by_author(self, author: str) -> list[Book]:
        """Get books whose author matches exactly."""
        result = await self.session.execute(
            select(Book).where(Book.author == author).order_by(Book.title, Book.isbn)
        )
        return list(result.scalars().all())

    async def get_first_by_title(self, title: str) -> Book | None:
        """Get the first book with this title, by ascending surrogate id."""
        result = await self.session.execute(
            select(Book).where(Book.title == title).order_by(Book.id).limit(1)
        )
        return result.scalar_one_or_none()

    async def get_first_by_author(self, author: str) -> Book | None:
        """Get the first book by this author, by ascending surrogate id."""
        result = await self.session.execute(
            select(Book).where(Book.author == author).order_by(Book.id).limit(1)
        )
        return result.scalar_one_or_none()

    async def delete_by_isbn(self, isbn: str) -> None:
        """Physically delete the book with this ISBN, if any."""
        await self.session.execute(delete(Book).where(Book.isbn == isbn))
        await self.session.flush()
