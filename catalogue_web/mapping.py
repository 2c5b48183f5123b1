"""Explicit conversions between web forms, view models and wire models."""

from typing import Any

from catalogue_web.client.models import BookCreateRequest, BookResponse, BookUpdateRequest
from catalogue_web.forms import BookForm, clean_book_form, format_date


def form_to_create_request(form: BookForm) -> BookCreateRequest:
    """Validate a create form and build the request body.

    Raises:
        FormValidationError: If the form is invalid.
    """
    clean = clean_book_form(form)
    return BookCreateRequest(
        title=clean.title,
        author=clean.author,
        publish_date=clean.publish_date,
        price=clean.price,
        category=clean.category,
    )


def form_to_update_request(form: BookForm) -> BookUpdateRequest:
    """Validate an edit form and build a patch that sets every editable field.

    Raises:
        FormValidationError: If the form is invalid.
    """
    clean = clean_book_form(form)
    return BookUpdateRequest(
        title=clean.title,
        author=clean.author,
        publish_date=clean.publish_date,
        price=clean.price,
        category=clean.category,
    )


def response_to_form(book: BookResponse) -> BookForm:
    """Prefill an edit form from a stored book."""
    return BookForm(
        title=book.title,
        author=book.author,
        publish_date=format_date(book.publish_date),
        price=f"{book.price:.2f}",
        category=book.category.value,
    )


def response_to_view(book: BookResponse) -> dict[str, Any]:
    """List-row view model with display formatting applied."""
    return {
        "isbn": book.isbn,
        "title": book.title,
        "author": book.author,
        "publish_date": format_date(book.publish_date),
        "price": f"{book.price:.2f}",
        "category": book.category.value,
        "category_label": book.category.label,
    }
