"""Web dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Form, Request

from catalogue_web.client.catalogue import CatalogueClient
from catalogue_web.forms import BookForm


def get_catalogue_client(request: Request) -> CatalogueClient:
    """Get the management client created at startup.

    Args:
        request: Current request.

    Returns:
        The shared CatalogueClient.
    """
    return request.app.state.catalogue_client


def get_book_form(
    title: Annotated[str, Form()] = "",
    author: Annotated[str, Form()] = "",
    publish_date: Annotated[str, Form()] = "",
    price: Annotated[str, Form()] = "",
    category: Annotated[str, Form()] = "",
) -> BookForm:
    """Bind the submitted book form; validation happens later so errors can be redisplayed."""
    return BookForm(
        title=title,
        author=author,
        publish_date=publish_date,
        price=price,
        category=category,
    )


# Type aliases for dependency injection
CatalogueClientDep = Annotated[CatalogueClient, Depends(get_catalogue_client)]
BookFormDep = Annotated[BookForm, Depends(get_book_form)]
