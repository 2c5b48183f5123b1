"""Typed client for the management service's book API."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar
from urllib.parse import quote

import httpx

from catalogue_common.logging import get_logger
from catalogue_web.client.config import ClientConfig
from catalogue_web.client.http import HTTPClient, HTTPResponse
from catalogue_web.client.models import (
    BookCreateRequest,
    BookList,
    BookResponse,
    BookUpdateRequest,
)
from catalogue_web.errors import (
    Outcome,
    ServiceUnavailable,
    Success,
    map_success,
    severity_for,
)

T = TypeVar("T")

BOOKS_ENDPOINT = "/api/books"


class CatalogueClient:
    """Book operations against the management service.

    Each method returns an ``Outcome`` and never raises for a failed remote
    call. Anything unexpected while calling or decoding, such as an invalid
    body, becomes ``ServiceUnavailable`` with a generic message.

    Example:
        >>> with CatalogueClient(ClientConfig(username="worker", password="worker")) as client:
        ...     outcome = client.list_books()
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Connection settings; defaults to ``ClientConfig()``.
            transport: Optional httpx transport override.
        """
        self._config = config or ClientConfig()
        self._http = HTTPClient(self._config, transport=transport)
        self._logger = get_logger(__name__, management_url=self._config.base_url)

    @property
    def config(self) -> ClientConfig:
        """The configuration this client was built with."""
        return self._config

    def list_books(self) -> Outcome[list[BookResponse]]:
        """Fetch the whole catalogue."""
        return self._call(
            "retrieve books",
            lambda: map_success(self._http.get(BOOKS_ENDPOINT), _parse_list),
        )

    def get_book(self, isbn: str) -> Outcome[BookResponse]:
        """Fetch one book by ISBN."""
        return self._call(
            f"retrieve book {isbn}",
            lambda: map_success(
                self._http.get(_book_path(isbn), resource_id=isbn),
                _parse_book,
            ),
        )

    def create_book(self, payload: BookCreateRequest) -> Outcome[BookResponse]:
        """Create a book, or re-price the matching one."""
        return self._call(
            "create book",
            lambda: map_success(
                self._http.post(BOOKS_ENDPOINT, json_data=payload.model_dump(mode="json")),
                _parse_book,
            ),
        )

    def update_book(self, isbn: str, payload: BookUpdateRequest) -> Outcome[BookResponse]:
        """Patch the fields set on ``payload``."""
        return self._call(
            f"update book {isbn}",
            lambda: map_success(
                self._http.patch(
                    _book_path(isbn),
                    json_data=payload.model_dump(mode="json", exclude_unset=True),
                    resource_id=isbn,
                ),
                _parse_book,
            ),
        )

    def delete_book(self, isbn: str) -> Outcome[None]:
        """Delete a book by ISBN."""
        return self._call(
            f"delete book {isbn}",
            lambda: map_success(
                self._http.delete(_book_path(isbn), resource_id=isbn),
                lambda _response: None,
            ),
        )

    def _call(self, action: str, call: Callable[[], Outcome[T]]) -> Outcome[T]:
        """Run one remote operation and log its outcome at the matching level."""
        self._logger.debug("Attempting to %s", action)
        try:
            outcome = call()
        except Exception:
            self._logger.error("Unexpected error while trying to %s", action, exc_info=True)
            return ServiceUnavailable(
                f"An unexpected error occurred while trying to {action}",
                connectivity=False,
            )

        if isinstance(outcome, Success):
            self._logger.info("Completed: %s", action)
        else:
            self._logger.log(
                severity_for(outcome),
                "Failed to %s: %s %s",
                action,
                outcome.code,
                outcome.message,
            )
        return outcome

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()

    def __enter__(self) -> CatalogueClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _book_path(isbn: str) -> str:
    # One path segment; "/", "?" and "#" must not reach the URL unescaped.
    return f"{BOOKS_ENDPOINT}/{quote(isbn, safe='')}"


def _parse_book(response: HTTPResponse) -> BookResponse:
    return BookResponse.model_validate(response.data)


def _parse_list(response: HTTPResponse) -> list[BookResponse]:
    return BookList.validate_python(response.data)
