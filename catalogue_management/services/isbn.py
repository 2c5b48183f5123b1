"""ISBN allocation for new catalogue records."""

import logging
from collections.abc import Callable
from uuid import uuid4

from catalogue_management.core.exceptions import ConflictError
from catalogue_management.models.book import ISBN_LENGTH
from catalogue_management.repositories.port import BookRepositoryPort

logger = logging.getLogger(__name__)


def random_isbn() -> str:
    """Generate a 13-character upper-case token from a random UUID.

    The token carries no ISBN-13 check digit and does not depend on the
    book's content.
    """
    return uuid4().hex[:ISBN_LENGTH].upper()


class IsbnAllocator:
    """Hands out ISBNs not yet present in storage.

    A candidate that already exists is replaced once; if the replacement
    also exists, allocation fails with ``ConflictError``.
    """

    MAX_ATTEMPTS = 2

    def __init__(
        self,
        repository: BookRepositoryPort,
        generator: Callable[[], str] = random_isbn,
    ) -> None:
        """Initialize the allocator.

        Args:
            repository: Storage used for the existence check.
            generator: Candidate source; replaced in tests to force collisions.
        """
        self._repository = repository
        self._generator = generator

    async def allocate(self) -> str:
        """Return an ISBN unused at the time of the check.

        Returns:
            A fresh ISBN.

        Raises:
            ConflictError: If every candidate collided.
        """
        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            candidate = self._generator()
            if not await self._repository.exists_by_isbn(candidate):
                return candidate
            logger.warning("ISBN collision on attempt %d: %s", attempt, candidate)

        logger.error("ISBN allocation failed after %d attempts", self.MAX_ATTEMPTS)
        raise ConflictError(message="Unable to allocate unique ISBN right now")
