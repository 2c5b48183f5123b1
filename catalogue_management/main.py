"""FastAPI application factory and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalogue_common.logging import setup_logging
from catalogue_common.middleware import RequestLoggingMiddleware
from catalogue_management import __version__
from catalogue_management.api.router import api_router
from catalogue_management.config import settings
from catalogue_management.core.exceptions import register_exception_handlers
from catalogue_management.database import engine
from catalogue_management.models import Base

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Creates missing tables on startup and disposes the engine on shutdown.
    """
    logger.info("Starting %s v%s (%s)", settings.app_name, __version__, settings.environment)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    logger.info("Shutting down...")
    await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance.
    """
    setup_logging(
        ["catalogue_management", "catalogue_common"],
        level=settings.log_level,
        log_format=settings.log_format,
    )

    app = FastAPI(
        title=settings.app_name,
        description="Book catalogue management API: create, look up, patch and delete books.",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")

    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {"status": "healthy"}

    return app


# Application instance
app = create_app()
