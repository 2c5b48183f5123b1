"""Book form binding and validation for the web service."""

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from catalogue_web.client.models import BookCategory

DATE_FORMAT = "%d/%m/%Y"
DEFAULT_AUTHOR = "Unknown"

_DATE_PATTERN = re.compile(r"^\d{2}/\d{2}/\d{4}$")
_LABELS = {
    "title": "Title",
    "author": "Author",
    "publish_date": "Publish date",
    "price": "Price",
    "category": "Category",
}


def format_date(value: date | None) -> str:
    """Render a date as dd/mm/yyyy; None renders as an empty string."""
    return value.strftime(DATE_FORMAT) if value is not None else ""


def parse_date(value: str) -> date:
    """Parse a dd/mm/yyyy string.

    Raises:
        ValueError: If the text is not a valid date in that format.
    """
    if not _DATE_PATTERN.match(value):
        raise ValueError("Publish date must be in dd/MM/yyyy format")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise ValueError("Invalid date format. Expected dd/MM/yyyy") from None


class BookForm(BaseModel):
    """Raw form fields, exactly as the user typed them.

    Kept as strings so a rejected submission can be redisplayed unchanged.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = ""
    author: str = ""
    publish_date: str = ""
    price: str = ""
    category: str = ""


class CleanBookForm(BaseModel):
    """Typed values of a form that passed validation."""

    title: str = Field(min_length=1, max_length=255)
    author: str = Field(max_length=255)
    publish_date: date
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    category: BookCategory

    @field_validator("publish_date", "price", "category", mode="before")
    @classmethod
    def require_value(cls, v: Any, info: ValidationInfo) -> Any:
        """Blank inputs get a plain 'is required' message instead of a parse error."""
        if v is None or (isinstance(v, str) and not v):
            raise ValueError(f"{_LABELS[info.field_name]} is required")
        return v

    @field_validator("author", mode="before")
    @classmethod
    def default_author(cls, v: Any) -> Any:
        return v or DEFAULT_AUTHOR

    @field_validator("publish_date", mode="before")
    @classmethod
    def parse_publish_date(cls, v: Any) -> Any:
        return parse_date(v) if isinstance(v, str) and v else v


class FormValidationError(Exception):
    """A submitted book form failed local validation.

    Attributes:
        form: The submitted form, for redisplay.
        field_errors: Messages keyed by form field name.
    """

    def __init__(self, form: BookForm, field_errors: dict[str, str]) -> None:
        self.form = form
        self.field_errors = field_errors
        super().__init__(f"Invalid book form: {', '.join(sorted(field_errors))}")


def clean_book_form(form: BookForm) -> CleanBookForm:
    """Validate a submitted form.

    Raises:
        FormValidationError: With one message per invalid field.
    """
    try:
        return CleanBookForm.model_validate(form.model_dump())
    except ValidationError as exc:
        raise FormValidationError(form, _field_errors(exc)) from exc


def _field_errors(exc: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc", ())
        field = str(loc[0]) if loc else "form"
        errors.setdefault(field, _message(field, error))
    return errors


def _message(field: str, error: Any) -> str:
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    if error["type"] in ("missing", "string_too_short"):
        return f"{_LABELS.get(field, field)} is required"
    return str(error["msg"])
