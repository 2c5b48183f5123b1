"""Turns catalogue errors into what the user sees.

The web routes never inspect HTTP statuses or exceptions themselves; they
hand every failed outcome to ``translate`` and render the returned action.
"""

import logging
from dataclasses import dataclass, field
from typing import TypeAlias, assert_never

from catalogue_web.errors import (
    BadRequest,
    CatalogueError,
    Conflict,
    NotFound,
    ServiceUnavailable,
    UpstreamError,
)
from catalogue_web.forms import BookForm, FormValidationError

logger = logging.getLogger(__name__)

BOOKS_URL = "/books"


@dataclass(frozen=True, slots=True)
class RenderError:
    """Show the error page with this status."""

    status_code: int
    error_type: str
    message: str


@dataclass(frozen=True, slots=True)
class RedirectWithFlash:
    """Redirect, carrying a one-shot message to the next page."""

    url: str
    message: str
    level: str = "error"


@dataclass(frozen=True, slots=True)
class RedisplayForm:
    """Show the submitted form again with its errors."""

    view: str
    form: BookForm
    field_errors: dict[str, str] = field(default_factory=dict)
    message: str = "Please correct the highlighted fields"


ViewAction: TypeAlias = RenderError | RedirectWithFlash | RedisplayForm


def translate(
    error: CatalogueError,
    *,
    form_view: str | None = None,
    form: BookForm | None = None,
) -> ViewAction:
    """Pick the user-visible action for a failed remote call.

    Args:
        error: The classified failure.
        form_view: View name of the form being submitted, if any.
        form: The submitted form, if any.

    Returns:
        The action to render.
    """
    match error:
        case NotFound(message=message):
            return RenderError(404, "not_found", message)
        case Conflict(message=message):
            return RedirectWithFlash(BOOKS_URL, message)
        case BadRequest(message=message, field_errors=field_errors):
            if form_view is not None and form is not None:
                return RedisplayForm(form_view, form, dict(field_errors), message)
            return RedirectWithFlash(BOOKS_URL, f"Invalid book data provided: {message}")
        case ServiceUnavailable(message=message):
            return RenderError(503, "service_unavailable", message)
        case UpstreamError(message=message) if error.is_server_error:
            return RenderError(500, "internal_error", message)
        case UpstreamError(message=message):
            return RedirectWithFlash(BOOKS_URL, f"An error occurred: {message}")
        case _:
            assert_never(error)


def translate_exception(exc: Exception, *, form_view: str | None = None) -> ViewAction:
    """Pick the user-visible action for an exception raised in the web tier.

    Local form validation failures redisplay the form; anything else is an
    internal error.
    """
    if isinstance(exc, FormValidationError) and form_view is not None:
        return RedisplayForm(form_view, exc.form, exc.field_errors)

    logger.error("Unhandled error in web tier: %r", exc, exc_info=exc)
    return RenderError(500, "internal_error", "An unexpected error occurred")
