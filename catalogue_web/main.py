"""FastAPI application factory for the web service."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import Response

from catalogue_common.logging import setup_logging
from catalogue_common.middleware import RequestLoggingMiddleware
from catalogue_web import __version__
from catalogue_web.api.routes import router as books_router
from catalogue_web.client.catalogue import CatalogueClient
from catalogue_web.config import settings
from catalogue_web.translator import translate_exception
from catalogue_web.views import render_action

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the management client once from settings and closes it on shutdown.
    """
    config = settings.client_config()
    logger.info(
        "Starting %s v%s against %s",
        settings.app_name,
        __version__,
        config.base_url,
    )
    app.state.catalogue_client = CatalogueClient(config)
    yield
    logger.info("Shutting down...")
    app.state.catalogue_client.close()


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    """Render anything that escaped a route as the internal error page."""
    return render_action(request, translate_exception(exc))


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance.
    """
    setup_logging(
        ["catalogue_web", "catalogue_common"],
        level=settings.log_level,
        log_format=settings.log_format,
    )

    app = FastAPI(
        title=settings.app_name,
        description="Book catalogue pages backed by the management service.",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url=None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )

    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(books_router, prefix="/books", tags=["Books"])

    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {"status": "healthy"}

    return app


# Application instance
app = create_app()
