"""Book endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from catalogue_management.api.deps import (
    AdminUser,
    BookReadServiceDep,
    BookWriteServiceDep,
    CatalogueUser,
)
from catalogue_management.schemas.book import BookCreate, BookRead, BookUpdate

router = APIRouter()


@router.get(
    "",
    response_model=list[BookRead],
    summary="List books",
    description="Get the whole catalogue ordered by title.",
)
async def list_books(
    service: BookReadServiceDep,
    _user: CatalogueUser,
) -> list[BookRead]:
    """List every book in the catalogue."""
    return await service.get_all()


@router.get(
    "/search",
    response_model=list[BookRead],
    summary="Search books",
    description="Exact-match search by title or author. Title wins if both are given.",
)
async def search_books(
    service: BookReadServiceDep,
    _user: CatalogueUser,
    title: Annotated[str | None, Query(max_length=255, description="Exact title")] = None,
    author: Annotated[str | None, Query(max_length=255, description="Exact author")] = None,
) -> list[BookRead]:
    """Search the catalogue.

    - **title**: match books with exactly this title
    - **author**: match books by exactly this author (ignored if title is given)

    With neither parameter the whole catalogue is returned.
    """
    return await service.search(title=title, author=author)


@router.get(
    "/{isbn}",
    response_model=BookRead,
    summary="Get book",
    description="Get a book by its ISBN.",
)
async def get_book(
    isbn: str,
    service: BookReadServiceDep,
    _user: CatalogueUser,
) -> BookRead:
    """Get a specific book by ISBN."""
    return await service.get_by_isbn(isbn)


@router.post(
    "",
    response_model=BookRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create book",
    description="Create a book, or update price and category of the matching one.",
)
async def create_book(
    data: BookCreate,
    service: BookWriteServiceDep,
    _user: CatalogueUser,
) -> BookRead:
    """Create a new book.

    If a book with the same title, author and publish date already exists,
    its price and category are overwritten and its ISBN is returned
    unchanged. Otherwise the service allocates a new ISBN.
    """
    return await service.create(data)


@router.patch(
    "/{isbn}",
    response_model=BookRead,
    summary="Update book",
    description="Update a book. Only provided fields will be updated.",
)
async def update_book(
    isbn: str,
    data: BookUpdate,
    service: BookWriteServiceDep,
    _user: AdminUser,
) -> BookRead:
    """Update a book.

    Only fields included in the request body will be updated. The ISBN
    itself cannot be changed.
    """
    return await service.update(isbn, data)


@router.delete(
    "/{isbn}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete book",
    description="Permanently delete a book.",
)
async def delete_book(
    isbn: str,
    service: BookWriteServiceDep,
    _user: AdminUser,
) -> None:
    """Delete a book."""
    await service.delete(isbn)
