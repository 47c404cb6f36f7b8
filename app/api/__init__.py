"""
API layer for the guestbook service.

Contains FastAPI routes and HTTP-related functionality.
"""

from fastapi import APIRouter
from app.api.routes import guestbook, health


def create_api_router() -> APIRouter:
    """Create the main API router with all sub-routers included."""
    api_router = APIRouter()

    api_router.include_router(health.router, tags=["Health"])
    api_router.include_router(guestbook.router, tags=["Guestbook"])

    return api_router


__all__ = ["create_api_router"]
