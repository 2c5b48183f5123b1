"""Pytest configuration and fixtures for the management service."""

import asyncio
from collections.abc import AsyncGenerator
from datetime import date
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from catalogue_management.api.deps import get_current_user, get_db
from catalogue_management.core.security import Role, User
from catalogue_management.main import app
from catalogue_management.models import Base, Book

# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
)

TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

TEST_ADMIN = User(username="admin", password_hash="", roles=frozenset({Role.ADMIN}))


class InMemoryBookRepository:
    """Dict-backed ``BookRepositoryPort``.

    Every method yields to the event loop before touching state, so
    operations running under ``asyncio.gather`` interleave the way
    concurrent requests against a real store would.
    """

    def __init__(self, books: list[Book] | None = None) -> None:
        self.books: dict[str, Book] = {book.isbn: book for book in books or []}
        self.writes = 0
        self._next_id = len(self.books) + 1

    async def get_by_isbn(self, isbn: str) -> Book | None:
        await asyncio.sleep(0)
        return self.books.get(isbn)

    async def get_by_natural_key(self, title: str, author: str, publish_date: date) -> Book | None:
        await asyncio.sleep(0)
        key = (title, author, publish_date)
        return next(
            (b for b in self.books.values() if (b.title, b.author, b.publish_date) == key),
            None,
        )

    async def exists_by_isbn(self, isbn: str) -> bool:
        await asyncio.sleep(0)
        return isbn in self.books

    async def exists_by_natural_key(self, title: str, author: str, publish_date: date) -> bool:
        return await self.get_by_natural_key(title, author, publish_date) is not None

    async def get_all_books(self) -> list[Book]:
        await asyncio.sleep(0)
        return sorted(self.books.values(), key=lambda b: (b.title, b.isbn))

    async def get_all_by_title(self, title: str) -> list[Book]:
        return [b for b in await self.get_all_books() if b.title == title]

    async def get_all_by_author(self, author: str) -> list[Book]:
        return [b for b in await self.get_all_books() if b.author == author]

    async def get_first_by_title(self, title: str) -> Book | None:
        await asyncio.sleep(0)
        return next((b for b in self.books.values() if b.title == title), None)

    async def get_first_by_author(self, author: str) -> Book | None:
        await asyncio.sleep(0)
        return next((b for b in self.books.values() if b.author == author), None)

    async def add(self, instance: Book) -> Book:
        await asyncio.sleep(0)
        instance.id = self._next_id
        self._next_id += 1
        self.books[instance.isbn] = instance
        self.writes += 1
        return instance

    async def update(self, entity: Book, **kwargs: Any) -> Book:
        await asyncio.sleep(0)
        for key, value in kwargs.items():
            setattr(entity, key, value)
        self.writes += 1
        return entity

    async def delete(self, entity: Book) -> None:
        await self.delete_by_isbn(entity.isbn)

    async def delete_by_isbn(self, isbn: str) -> None:
        await asyncio.sleep(0)
        self.books.pop(isbn, None)
        self.writes += 1


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


def _override_get_db(db_session: AsyncSession) -> Any:
    """Same commit/rollback contract as ``get_db``, over the test session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    return override_get_db


@pytest.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden dependencies, acting as admin."""

    def override_get_current_user() -> User:
        return TEST_ADMIN

    app.dependency_overrides[get_db] = _override_get_db(db_session)
    app.dependency_overrides[get_current_user] = override_get_current_user

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def anonymous_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client that goes through real HTTP Basic authentication.

    Credentials are passed per request with ``auth=``.
    """
    app.dependency_overrides[get_db] = _override_get_db(db_session)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def memory_repository() -> InMemoryBookRepository:
    """Empty in-memory book storage."""
    return InMemoryBookRepository()


@pytest.fixture
def dune_payload() -> dict[str, Any]:
    """Create-request body for Dune."""
    return {
        "title": "Dune",
        "author": "Herbert",
        "publish_date": "1965-08-01",
        "price": 29.99,
        "category": "HARD_COVER",
    }
