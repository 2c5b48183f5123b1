"""Outcome types for calls to the management service.

Every call made through ``CatalogueClient`` returns exactly one of:

    Success[T]
    NotFound            - the book does not exist (HTTP 404)
    Conflict            - duplicate data or ISBN exhaustion (HTTP 409)
    BadRequest          - the management service rejected the input (HTTP 400/422)
    ServiceUnavailable  - the service could not be reached, or its reply was unusable
    UpstreamError       - any other non-2xx status

The error variants form the closed union ``CatalogueError``. Callers match
on it exhaustively instead of catching exceptions, so a new variant shows up
as a type error in every ``match`` that forgot it.

Example:
    >>> match client.get_book("9780441013593"):
    ...     case Success(value=book):
    ...         print(book.title)
    ...     case NotFound(message=message):
    ...         print(message)
    ...     case other:
    ...         print(other.code)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar, Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")

CONNECT_FAILURE_MESSAGE = "Unable to connect to the management service"


class ConfigurationError(Exception):
    """Raised when client configuration is invalid."""


class ErrorCode(StrEnum):
    """Stable machine-readable codes for catalogue errors."""

    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    BAD_REQUEST = "BAD_REQUEST"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """A call that completed with a 2xx response."""

    value: T


@dataclass(frozen=True, slots=True)
class NotFound:
    """The requested book does not exist."""

    message: str
    resource_id: str | None = None
    code: ClassVar[ErrorCode] = ErrorCode.NOT_FOUND


@dataclass(frozen=True, slots=True)
class Conflict:
    """The write clashed with existing data."""

    message: str
    code: ClassVar[ErrorCode] = ErrorCode.CONFLICT


@dataclass(frozen=True, slots=True)
class BadRequest:
    """The management service rejected the submitted data.

    Attributes:
        message: Summary from the remote service.
        field_errors: Per-field messages keyed by field name.
    """

    message: str
    field_errors: Mapping[str, str] = field(default_factory=dict)
    code: ClassVar[ErrorCode] = ErrorCode.BAD_REQUEST


@dataclass(frozen=True, slots=True)
class ServiceUnavailable:
    """The call produced no usable answer.

    Attributes:
        message: User-facing message.
        connectivity: True when the service could not be reached at all,
            False when it answered with something unusable.
    """

    message: str
    connectivity: bool = True
    code: ClassVar[ErrorCode] = ErrorCode.SERVICE_UNAVAILABLE


@dataclass(frozen=True, slots=True)
class UpstreamError:
    """A non-2xx status outside the specific cases above."""

    status_code: int
    message: str
    code: ClassVar[ErrorCode] = ErrorCode.UPSTREAM_ERROR

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500


CatalogueError: TypeAlias = Union[NotFound, Conflict, BadRequest, ServiceUnavailable, UpstreamError]
Outcome: TypeAlias = Union[Success[T], CatalogueError]


def map_success(outcome: Outcome[T], fn: Callable[[T], U]) -> Outcome[U]:
    """Apply ``fn`` to a successful value; pass errors through unchanged."""
    if isinstance(outcome, Success):
        return Success(fn(outcome.value))
    return outcome


def severity_for(outcome: Outcome[Any]) -> int:
    """Log level an outcome should be reported at."""
    match outcome:
        case Success():
            return logging.INFO
        case NotFound() | Conflict() | BadRequest():
            return logging.WARNING
        case UpstreamError() as error if not error.is_server_error:
            return logging.WARNING
        case UpstreamError() | ServiceUnavailable():
            return logging.ERROR
    raise TypeError(f"Not a catalogue outcome: {outcome!r}")


def _extract_message(data: Mapping[str, Any], status_code: int) -> str:
    """Pull a human message out of an error body.

    Understands the management service's ``{"error": {...}}`` envelope as
    well as flat ``message``/``detail`` bodies.
    """
    error = data.get("error")
    if isinstance(error, Mapping) and error.get("message"):
        return str(error["message"])
    for key in ("message", "detail"):
        if isinstance(data.get(key), str) and data[key]:
            return str(data[key])
    return f"HTTP {status_code}"


def _extract_field_errors(data: Mapping[str, Any]) -> dict[str, str]:
    error = data.get("error")
    if not isinstance(error, Mapping):
        return {}
    details = error.get("details") or []
    return {
        str(item["field"]): str(item.get("message", "Invalid value"))
        for item in details
        if isinstance(item, Mapping) and "field" in item
    }


def error_from_response(
    status_code: int,
    response_data: Mapping[str, Any],
    resource_id: str | None = None,
) -> CatalogueError:
    """Classify a non-2xx response from the management service.

    Args:
        status_code: HTTP status code from the response.
        response_data: Parsed JSON body, or an empty mapping.
        resource_id: ISBN the call was about, if any.

    Returns:
        The matching error variant.
    """
    message = _extract_message(response_data, status_code)

    if status_code == 404:
        if resource_id is not None:
            message = f"Book with ISBN {resource_id} not found"
        return NotFound(message=message, resource_id=resource_id)
    if status_code == 409:
        return Conflict(message=message)
    if status_code in (400, 422):
        return BadRequest(message=message, field_errors=_extract_field_errors(response_data))
    return UpstreamError(status_code=status_code, message=message)
