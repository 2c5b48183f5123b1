"""JSON view models, flash messages and rendering of translator actions.

Pages are returned as ``{"view": ..., "model": {...}, "flash": {...}}`` so
any front end can template them. Flash messages survive exactly one
redirect in a ``flash`` cookie.
"""

import base64
import json
from typing import Any, assert_never

from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from catalogue_web.client.models import BookCategory
from catalogue_web.translator import RedirectWithFlash, RedisplayForm, RenderError, ViewAction

FLASH_COOKIE = "flash"
ERROR_VIEW = "error"


def _encode_flash(level: str, message: str) -> str:
    raw = json.dumps({"level": level, "message": message}).encode()
    return base64.urlsafe_b64encode(raw).decode()


def _decode_flash(value: str | None) -> dict[str, str] | None:
    if not value:
        return None
    try:
        data = json.loads(base64.urlsafe_b64decode(value.encode()))
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def category_choices() -> list[dict[str, str]]:
    """Options for the category select box."""
    return [{"value": category.value, "label": category.label} for category in BookCategory]


def render_view(
    request: Request,
    view: str,
    model: dict[str, Any],
    *,
    status_code: int = status.HTTP_200_OK,
    flash: dict[str, str] | None = None,
) -> Response:
    """Render a page, consuming any pending flash message."""
    pending = flash or _decode_flash(request.cookies.get(FLASH_COOKIE))
    response = JSONResponse(
        status_code=status_code,
        content={"view": view, "model": model, "flash": pending},
    )
    if FLASH_COOKIE in request.cookies:
        response.delete_cookie(FLASH_COOKIE)
    return response


def redirect_with_flash(url: str, message: str, level: str = "success") -> Response:
    """Redirect with a See Other and stash a one-shot message."""
    response = RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(FLASH_COOKIE, _encode_flash(level, message), httponly=True)
    return response


def render_action(request: Request, action: ViewAction, **context: Any) -> Response:
    """Render a translator action.

    Args:
        request: Current request.
        action: What the translator decided to show.
        **context: Extra model entries for redisplayed forms, such as the ISBN.
    """
    match action:
        case RenderError(status_code=status_code, error_type=error_type, message=message):
            return render_view(
                request,
                ERROR_VIEW,
                {"status": status_code, "error_type": error_type, "message": message},
                status_code=status_code,
            )
        case RedirectWithFlash(url=url, message=message, level=level):
            return redirect_with_flash(url, message, level)
        case RedisplayForm(view=view, form=form, field_errors=field_errors, message=message):
            return render_view(
                request,
                view,
                {
                    **context,
                    "form": form.model_dump(),
                    "errors": field_errors,
                    "message": message,
                    "categories": category_choices(),
                },
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        case _:
            assert_never(action)
