"""HTTP client wrapper for the management service.

This module provides a thin wrapper around httpx that handles:
- Base URL, timeouts, headers and Basic credentials
- JSON body encoding and response parsing
- Classification of transport failures and error statuses into outcomes

The HTTPClient is an internal detail of ``CatalogueClient``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from catalogue_web.errors import (
    CONNECT_FAILURE_MESSAGE,
    Outcome,
    ServiceUnavailable,
    Success,
    error_from_response,
)

if TYPE_CHECKING:
    from catalogue_web.client.config import ClientConfig

logger = logging.getLogger(__name__)


class HTTPClient:
    """Low-level HTTP client for management service requests.

    ``request`` never raises for transport failures or error statuses; it
    returns the matching outcome instead. Malformed JSON in a 2xx body does
    raise, and is classified by the caller.
    """

    __slots__ = ("_client", "_config")

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            config: Client configuration.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
        """
        self._config = config
        self._client = self._create_client(transport)

    def _create_client(self, transport: httpx.BaseTransport | None) -> httpx.Client:
        """Create and configure the httpx client.

        Returns:
            Configured httpx.Client instance.
        """
        return httpx.Client(
            base_url=self._config.base_url,
            timeout=self._config.timeout,
            auth=self._config.auth,
            headers={
                "Accept": "application/json",
                "User-Agent": self._config.user_agent,
            },
            transport=transport,
        )

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
        resource_id: str | None = None,
    ) -> Outcome[HTTPResponse]:
        """Make an HTTP request to the management service.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE).
            endpoint: API endpoint path (e.g., "/api/books").
            params: Query parameters.
            json_data: JSON body for POST/PATCH requests.
            resource_id: ISBN the request concerns, used in not-found messages.

        Returns:
            Success with the parsed response, or the classified error.
        """
        logger.debug("Request: %s %s", method, endpoint)

        try:
            response = self._client.request(
                method,
                endpoint,
                params=params,
                json=json_data,
            )
        except httpx.TimeoutException as e:
            logger.debug("Request timed out: %s", e)
            return ServiceUnavailable(CONNECT_FAILURE_MESSAGE)
        except httpx.TransportError as e:
            logger.debug("Connection failed: %s", e)
            return ServiceUnavailable(CONNECT_FAILURE_MESSAGE)

        return self._process_response(response, resource_id)

    def _process_response(
        self,
        response: httpx.Response,
        resource_id: str | None,
    ) -> Outcome[HTTPResponse]:
        """Process the HTTP response.

        Args:
            response: The httpx response object.
            resource_id: ISBN the request concerns, if any.

        Returns:
            Success with parsed data, or the classified error.
        """
        logger.debug("Response: %d %s", response.status_code, response.reason_phrase)

        if not response.is_success:
            return error_from_response(
                status_code=response.status_code,
                response_data=_error_body(response),
                resource_id=resource_id,
            )

        # Empty for 204 No Content
        data: Any = None
        if response.status_code != 204 and response.content:
            data = response.json()

        return Success(
            HTTPResponse(
                data=data,
                status_code=response.status_code,
                headers=dict(response.headers),
            )
        )

    def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        *,
        resource_id: str | None = None,
    ) -> Outcome[HTTPResponse]:
        """Make a GET request."""
        return self.request("GET", endpoint, params=params, resource_id=resource_id)

    def post(
        self,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
    ) -> Outcome[HTTPResponse]:
        """Make a POST request."""
        return self.request("POST", endpoint, json_data=json_data)

    def patch(
        self,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
        *,
        resource_id: str | None = None,
    ) -> Outcome[HTTPResponse]:
        """Make a PATCH request."""
        return self.request("PATCH", endpoint, json_data=json_data, resource_id=resource_id)

    def delete(
        self,
        endpoint: str,
        *,
        resource_id: str | None = None,
    ) -> Outcome[HTTPResponse]:
        """Make a DELETE request."""
        return self.request("DELETE", endpoint, resource_id=resource_id)

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> HTTPClient:
        """Enter context manager."""
        return self

    def __exit__(self, *args: object) -> None:
        """Exit context manager and close client."""
        self.close()


def _error_body(response: httpx.Response) -> dict[str, Any]:
    """Best-effort JSON object from an error response."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {"message": str(data)}


@dataclass(frozen=True, slots=True)
class HTTPResponse:
    """Container for a successful HTTP response.

    Attributes:
        data: Parsed JSON body, or None when the body is empty.
        status_code: HTTP status code.
        headers: Response headers.
    """

    data: Any
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
