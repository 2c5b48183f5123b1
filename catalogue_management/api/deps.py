"""API dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from catalogue_management.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ErrorCode,
)
from catalogue_management.core.security import Role, User, get_user_directory
from catalogue_management.database import get_db
from catalogue_management.repositories.book import BookRepository
from catalogue_management.services.book import BookReadService, BookWriteService

# Type alias for database session dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]

# auto_error=False so missing credentials go through our own error envelope
basic_scheme = HTTPBasic(auto_error=False)


async def get_book_repository(
    session: DBSession,
) -> AsyncGenerator[BookRepository, None]:
    """Get book repository bound to the request's session.

    Args:
        session: Database session.

    Yields:
        BookRepository instance.
    """
    yield BookRepository(session)


BookRepositoryDep = Annotated[BookRepository, Depends(get_book_repository)]


async def get_book_write_service(
    repository: BookRepositoryDep,
) -> AsyncGenerator[BookWriteService, None]:
    """Get book write service instance.

    Args:
        repository: Book repository.

    Yields:
        BookWriteService instance.
    """
    yield BookWriteService(repository)


async def get_book_read_service(
    repository: BookRepositoryDep,
) -> AsyncGenerator[BookReadService, None]:
    """Get book read service instance.

    Args:
        repository: Book repository.

    Yields:
        BookReadService instance.
    """
    yield BookReadService(repository)


def get_current_user(
    credentials: Annotated[HTTPBasicCredentials | None, Depends(basic_scheme)],
) -> User:
    """Authenticate the caller from HTTP Basic credentials.

    Declared sync so the Argon2 verification runs in the threadpool.

    Args:
        credentials: Username and password from the Authorization header.

    Returns:
        The authenticated user.

    Raises:
        AuthenticationError: If credentials are missing or wrong.
    """
    if credentials is None:
        raise AuthenticationError(
            message="Authentication required",
            code=ErrorCode.UNAUTHORIZED,
        )

    user = get_user_directory().authenticate(credentials.username, credentials.password)
    if user is None:
        raise AuthenticationError(message="Invalid username or password")

    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_catalogue_user(user: CurrentUser) -> User:
    """Allow workers and admins."""
    if not user.has_any_role(Role.WORKER, Role.ADMIN):
        raise AuthorizationError(message="Catalogue access requires the WORKER or ADMIN role")
    return user


def require_admin(user: CurrentUser) -> User:
    """Allow admins only."""
    if not user.has_any_role(Role.ADMIN):
        raise AuthorizationError(message="This operation requires the ADMIN role")
    return user


# Type aliases for dependency injection
BookWriteServiceDep = Annotated[BookWriteService, Depends(get_book_write_service)]
BookReadServiceDep = Annotated[BookReadService, Depends(get_book_read_service)]
CatalogueUser = Annotated[User, Depends(require_catalogue_user)]
AdminUser = Annotated[User, Depends(require_admin)]
