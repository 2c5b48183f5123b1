"""Storage contract the catalogue services depend on."""

from datetime import date
from typing import Any, Protocol

from catalogue_management.models.book import Book


class BookRepositoryPort(Protocol):
    """Book storage operations.

    Each method is a single awaited call against the store; lookups return
    ``None`` on a miss. Sequences of calls are not isolated from each other.
    """

    async def get_by_isbn(self, isbn: str) -> Book | None: ...

    async def get_by_natural_key(
        self, title: str, author: str, publish_date: date
    ) -> Book | None: ...

    async def exists_by_isbn(self, isbn: str) -> bool: ...

    async def exists_by_natural_key(
        self, title: str, author: str, publish_date: date
    ) -> bool: ...

    async def get_all_books(self) -> list[Book]: ...

    async def get_all_by_title(self, title: str) -> list[Book]: ...

    async def get_all_by_author(self, author: str) -> list[Book]: ...

    async def get_first_by_title(self, title: str) -> Book | None: ...

    async def get_first_by_author(self, author: str) -> Book | None: ...

    async def add(self, instance: Book) -> Book: ...

    async def update(self, entity: Book, **kwargs: Any) -> Book: ...

    async def delete(self, entity: Book) -> None: ...

    async def delete_by_isbn(self, isbn: str) -> None: ...
