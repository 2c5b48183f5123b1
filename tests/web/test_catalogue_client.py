"""Tests for the management service client and outcome classification."""

import json
import logging
from datetime import date
from decimal import Decimal

import httpx
import pytest

from catalogue_web.client.catalogue import CatalogueClient
from catalogue_web.client.models import BookCategory, BookCreateRequest, BookUpdateRequest
from catalogue_web.errors import (
    CONNECT_FAILURE_MESSAGE,
    BadRequest,
    Conflict,
    ErrorCode,
    NotFound,
    ServiceUnavailable,
    Success,
    UpstreamError,
    severity_for,
)
from tests.web.support import FakeManagementAPI, error_body, make_catalogue_client

DUNE = BookCreateRequest(
    title="Dune",
    author="Herbert",
    publish_date=date(1965, 8, 1),
    price=Decimal("29.99"),
    category=BookCategory.HARD_COVER,
)


def respond(status_code: int, **kwargs: object) -> CatalogueClient:
    return make_catalogue_client(lambda request: httpx.Response(status_code, **kwargs))


def raise_error(exc: Exception) -> CatalogueClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    return make_catalogue_client(handler)


def test_create_and_get(catalogue_client: CatalogueClient, management: FakeManagementAPI) -> None:
    """Test create returns the stored book and get finds it again."""
    created = catalogue_client.create_book(DUNE)

    assert isinstance(created, Success)
    assert created.value.title == "Dune"
    assert created.value.price == Decimal("29.99")

    fetched = catalogue_client.get_book(created.value.isbn)
    assert fetched == created

    sent = management.requests[0]
    assert sent.headers["Authorization"].startswith("Basic ")
    assert sent.url == httpx.URL("http://management.test/api/books")


def test_update_sends_only_set_fields(
    catalogue_client: CatalogueClient, management: FakeManagementAPI
) -> None:
    """Test the patch body omits fields that were never set."""
    created = catalogue_client.create_book(DUNE)
    assert isinstance(created, Success)

    outcome = catalogue_client.update_book(
        created.value.isbn, BookUpdateRequest(price=Decimal("19.99"))
    )

    assert isinstance(outcome, Success)
    assert outcome.value.price == Decimal("19.99")
    assert json.loads(management.requests[-1].content) == {"price": "19.99"}


def test_delete_then_get(catalogue_client: CatalogueClient) -> None:
    """Test delete succeeds once, then the book is not found."""
    created = catalogue_client.create_book(DUNE)
    assert isinstance(created, Success)
    isbn = created.value.isbn

    assert catalogue_client.delete_book(isbn) == Success(None)
    assert catalogue_client.get_book(isbn) == NotFound(
        message=f"Book with ISBN {isbn} not found", resource_id=isbn
    )


def test_connection_refused_is_service_unavailable() -> None:
    """Test an unreachable service while listing."""
    client = raise_error(httpx.ConnectError("Connection refused"))

    outcome = client.list_books()

    assert outcome == ServiceUnavailable(CONNECT_FAILURE_MESSAGE, connectivity=True)
    assert outcome.code is ErrorCode.SERVICE_UNAVAILABLE


def test_timeout_is_service_unavailable() -> None:
    """Test a read timeout counts as unreachable."""
    outcome = raise_error(httpx.ReadTimeout("too slow")).get_book("X")

    assert isinstance(outcome, ServiceUnavailable)
    assert outcome.connectivity


def test_conflict_carries_remote_message() -> None:
    """Test a 409 keeps the management service's message."""
    client = respond(409, json=error_body("CONFLICT", "Unable to allocate unique ISBN right now"))

    assert client.create_book(DUNE) == Conflict("Unable to allocate unique ISBN right now")


def test_bad_request_carries_field_errors() -> None:
    """Test a 400 envelope keeps per-field details."""
    client = respond(
        400,
        json=error_body(
            "VALIDATION_ERROR",
            "Request validation failed",
            [{"field": "price", "message": "Input should be greater than or equal to 0"}],
        ),
    )

    outcome = client.create_book(DUNE)

    assert isinstance(outcome, BadRequest)
    assert outcome.message == "Request validation failed"
    assert outcome.field_errors == {"price": "Input should be greater than or equal to 0"}


@pytest.mark.parametrize(
    ("status_code", "is_server_error"),
    [(302, False), (401, False), (403, False), (500, True), (502, True)],
)
def test_other_statuses_are_upstream_errors(status_code: int, is_server_error: bool) -> None:
    """Test non-2xx statuses outside 400/404/409 keep their code."""
    outcome = respond(status_code, json={"message": "nope"}).list_books()

    assert outcome == UpstreamError(status_code, "nope")
    assert isinstance(outcome, UpstreamError)
    assert outcome.is_server_error is is_server_error


def test_non_json_error_body() -> None:
    """Test an HTML error page still classifies by status."""
    outcome = respond(503, text="<html>down</html>").list_books()

    assert outcome == UpstreamError(503, "HTTP 503")


def test_malformed_success_body_is_service_unavailable() -> None:
    """Test a 200 that is not a valid book list becomes a generic failure."""
    outcome = respond(200, json=[{"isbn": "X"}]).list_books()

    assert isinstance(outcome, ServiceUnavailable)
    assert not outcome.connectivity
    assert outcome.message == "An unexpected error occurred while trying to retrieve books"


def test_undecodable_success_body_is_service_unavailable() -> None:
    """Test a 200 with broken JSON becomes a generic failure."""
    outcome = respond(200, text="{not json").list_books()

    assert isinstance(outcome, ServiceUnavailable)
    assert not outcome.connectivity


def test_unexpected_exception_is_service_unavailable() -> None:
    """Test an unforeseen local exception never escapes the client."""
    outcome = raise_error(RuntimeError("boom")).delete_book("X")

    assert isinstance(outcome, ServiceUnavailable)
    assert not outcome.connectivity


def test_severity_classes() -> None:
    """Test each outcome maps to the documented log level."""
    assert severity_for(Success(1)) == logging.INFO
    assert severity_for(NotFound("m")) == logging.WARNING
    assert severity_for(Conflict("m")) == logging.WARNING
    assert severity_for(BadRequest("m")) == logging.WARNING
    assert severity_for(UpstreamError(403, "m")) == logging.WARNING
    assert severity_for(UpstreamError(500, "m")) == logging.ERROR
    assert severity_for(ServiceUnavailable("m")) == logging.ERROR


def test_outcomes_are_logged_at_their_severity(caplog: pytest.LogCaptureFixture) -> None:
    """Test the client logs the attempt and the classified result."""
    caplog.set_level(logging.DEBUG, logger="catalogue_web.client.catalogue")

    respond(404, json=error_body("NOT_FOUND", "missing")).get_book("ABC")
    raise_error(httpx.ConnectError("refused")).list_books()

    records = [
        (r.levelno, r.getMessage())
        for r in caplog.records
        if r.name == "catalogue_web.client.catalogue"
    ]
    assert (logging.DEBUG, "Attempting to retrieve book ABC") in records
    assert (
        logging.WARNING,
        "Failed to retrieve book ABC: NOT_FOUND Book with ISBN ABC not found",
    ) in records
    assert any(
        level == logging.ERROR and message.startswith("Failed to retrieve books: SERVICE_")
        for level, message in records
    )


@pytest.mark.parametrize(
    ("isbn", "raw_path"),
    [
        ("ABC?x=1", b"/api/books/ABC%3Fx%3D1"),
        ("../ABC", b"/api/books/..%2FABC"),
        ("A B#C", b"/api/books/A%20B%23C"),
    ],
)
def test_isbn_is_one_escaped_path_segment(
    catalogue_client: CatalogueClient,
    management: FakeManagementAPI,
    isbn: str,
    raw_path: bytes,
) -> None:
    """Test reserved characters in an ISBN cannot change the target URL."""
    assert catalogue_client.get_book(isbn) == NotFound(
        message=f"Book with ISBN {isbn} not found", resource_id=isbn
    )
    assert isinstance(catalogue_client.delete_book(isbn), NotFound)

    for request in management.requests:
        assert request.url.raw_path == raw_path
        assert request.url.query == b""


def test_redirect_status_is_upstream_error() -> None:
    """Test a 3xx from the service is classified, not parsed as a book."""
    client = respond(302, json={"message": "moved"}, headers={"Location": "/login"})

    outcome = client.get_book("X")

    assert outcome == UpstreamError(302, "moved")
