"""API router aggregating all endpoints."""

from fastapi import APIRouter

from catalogue_management.api.routes import books, system

api_router = APIRouter()

api_router.include_router(
    system.router,
    prefix="",
    tags=["System"],
)

api_router.include_router(
    books.router,
    prefix="/books",
    tags=["Books"],
)
