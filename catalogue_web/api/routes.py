"""Book pages.

Routes are plain ``def`` functions: the management client is blocking and
FastAPI runs them in its threadpool.
"""

from fastapi import APIRouter, Request
from fastapi.responses import Response

from catalogue_web.api.deps import BookFormDep, CatalogueClientDep
from catalogue_web.errors import Success
from catalogue_web.forms import BookForm, FormValidationError
from catalogue_web.mapping import (
    form_to_create_request,
    form_to_update_request,
    response_to_form,
    response_to_view,
)
from catalogue_web.translator import BOOKS_URL, RedirectWithFlash, translate, translate_exception
from catalogue_web.views import category_choices, redirect_with_flash, render_action, render_view

router = APIRouter()

LIST_VIEW = "books/list"
CREATE_VIEW = "books/create"
EDIT_VIEW = "books/edit"


@router.get("", summary="Book list")
def list_books(request: Request, client: CatalogueClientDep) -> Response:
    """Show every book in the catalogue."""
    match client.list_books():
        case Success(value=books):
            return render_view(request, LIST_VIEW, {"books": [response_to_view(b) for b in books]})
        case error:
            action = translate(error)

    # Redirecting the list page to itself would loop; show the message in place.
    if isinstance(action, RedirectWithFlash):
        return render_view(
            request,
            LIST_VIEW,
            {"books": []},
            flash={"level": action.level, "message": action.message},
        )
    return render_action(request, action)


@router.get("/new", summary="New book form")
def new_book(request: Request) -> Response:
    """Show an empty create form."""
    return render_view(
        request,
        CREATE_VIEW,
        {"form": BookForm().model_dump(), "errors": {}, "categories": category_choices()},
    )


@router.post("", summary="Create book")
def create_book(request: Request, client: CatalogueClientDep, form: BookFormDep) -> Response:
    """Validate the submitted form and create the book."""
    try:
        payload = form_to_create_request(form)
    except FormValidationError as exc:
        return render_action(request, translate_exception(exc, form_view=CREATE_VIEW))

    match client.create_book(payload):
        case Success(value=book):
            return redirect_with_flash(
                BOOKS_URL, f"Book created successfully with ISBN: {book.isbn}"
            )
        case error:
            return render_action(request, translate(error, form_view=CREATE_VIEW, form=form))


@router.get("/{isbn}/edit", summary="Edit book form")
def edit_book(isbn: str, request: Request, client: CatalogueClientDep) -> Response:
    """Show the edit form prefilled with the stored book."""
    match client.get_book(isbn):
        case Success(value=book):
            return render_view(
                request,
                EDIT_VIEW,
                {
                    "isbn": isbn,
                    "form": response_to_form(book).model_dump(),
                    "errors": {},
                    "categories": category_choices(),
                },
            )
        case error:
            return render_action(request, translate(error))


@router.post("/{isbn}", summary="Update book")
def update_book(
    isbn: str,
    request: Request,
    client: CatalogueClientDep,
    form: BookFormDep,
) -> Response:
    """Validate the submitted form and save it over the stored book."""
    try:
        payload = form_to_update_request(form)
    except FormValidationError as exc:
        return render_action(request, translate_exception(exc, form_view=EDIT_VIEW), isbn=isbn)

    match client.update_book(isbn, payload):
        case Success():
            return redirect_with_flash(BOOKS_URL, "Book updated successfully")
        case error:
            return render_action(
                request,
                translate(error, form_view=EDIT_VIEW, form=form),
                isbn=isbn,
            )


@router.post("/{isbn}/delete", summary="Delete book")
def delete_book(isbn: str, request: Request, client: CatalogueClientDep) -> Response:
    """Delete the book and return to the list."""
    match client.delete_book(isbn):
        case Success():
            return redirect_with_flash(BOOKS_URL, "Book deleted successfully")
        case error:
            return render_action(request, translate(error))
