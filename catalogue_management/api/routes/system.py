"""Version and system endpoints."""

from fastapi import APIRouter

from catalogue_management import __version__
from catalogue_management.config import settings

router = APIRouter()


@router.get("/version")
async def get_version() -> dict[str, str]:
    """Get API version information.

    Returns:
        Version information including service version and environment.
    """
    return {
        "version": __version__,
        "environment": settings.environment,
    }
