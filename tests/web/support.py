"""Fake management service and client helpers for web tests."""

import json
from collections.abc import Callable
from typing import Any

import httpx

from catalogue_web.client.catalogue import CatalogueClient
from catalogue_web.client.config import ClientConfig

MANAGEMENT_URL = "http://management.test"

Handler = Callable[[httpx.Request], httpx.Response]


def error_body(
    code: str, message: str, details: list[dict[str, str]] | None = None
) -> dict[str, Any]:
    """Error envelope as produced by the management service."""
    return {"error": {"code": code, "message": message, "details": details, "request_id": None}}


class FakeManagementAPI:
    """In-memory stand-in for the management service's book endpoints."""

    def __init__(self) -> None:
        self.books: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self._counter = 0

    def add(self, **fields: Any) -> dict[str, Any]:
        self._counter += 1
        book = {"isbn": f"ISBN{self._counter:09d}", **fields}
        self.books[book["isbn"]] = book
        return book

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        isbn = request.url.path.removeprefix("/api/books").strip("/")

        if request.method == "GET" and not isbn:
            return httpx.Response(200, json=sorted(self.books.values(), key=lambda b: b["title"]))
        if request.method == "POST" and not isbn:
            body = json.loads(request.content)
            for existing in self.books.values():
                if all(existing[k] == body[k] for k in ("title", "author", "publish_date")):
                    existing.update(price=body["price"], category=body["category"])
                    return httpx.Response(201, json=existing)
            return httpx.Response(201, json=self.add(**body))

        if isbn not in self.books:
            return httpx.Response(
                404, json=error_body("NOT_FOUND", f"Book with ISBN '{isbn}' not found")
            )
        if request.method == "GET":
            return httpx.Response(200, json=self.books[isbn])
        if request.method == "PATCH":
            self.books[isbn].update(json.loads(request.content))
            return httpx.Response(200, json=self.books[isbn])
        if request.method == "DELETE":
            del self.books[isbn]
            return httpx.Response(204)
        return httpx.Response(405)


def make_catalogue_client(handler: Handler) -> CatalogueClient:
    """Real client wired to an in-process transport."""
    config = ClientConfig(base_url=MANAGEMENT_URL, username="admin", password="admin")
    return CatalogueClient(config, transport=httpx.MockTransport(handler))
