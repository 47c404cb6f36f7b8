"""
Health and diagnostics endpoints for the guestbook service.
"""

import os
import logging
from typing import Dict, Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from app.api.dependencies import get_list_store
from app.exceptions import NotFoundException
from app.settings import settings
from app.storage import ListStoreFacade
from app.storage.utils import redact_environment

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/hello",
    response_class=PlainTextResponse,
    summary="Liveness check",
)
async def hello() -> str:
    """Plain-text liveness string naming this host."""
    return f"Hello from guestbook. Your app is up! (Hostname: {settings.hostname})\n"


@router.get(
    "/info",
    response_class=PlainTextResponse,
    summary="Datastore info",
    description="""
    Redis INFO output from the primary, or a notice that this instance is
    running on its in-memory store.
    """,
)
async def info(store: ListStoreFacade = Depends(get_list_store)) -> str:
    return await store.backend_info()


@router.get(
    "/env",
    summary="Process environment",
    description="""
    Environment variables of this process. Values of variables whose names
    contain PASSWORD, SECRET, TOKEN or KEY are redacted. Disabled when
    GUESTBOOK_EXPOSE_ENV=false.
    """,
)
async def env() -> Dict[str, Any]:
    if not settings.api.expose_env:
        raise NotFoundException()
    return redact_environment(dict(os.environ))


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Storage health",
    responses={
        200: {
            "description": "Current storage mode",
            "content": {
                "application/json": {
                    "example": {
                        "status": "degraded",
                        "mode": "memory",
                        "primary": False,
                        "replica": False,
                        "hostname": "guestbook-7d9f",
                    }
                }
            },
        }
    },
)
async def health(store: ListStoreFacade = Depends(get_list_store)) -> Dict[str, Any]:
    """Always 200; ``degraded`` when no Redis connection is usable."""
    primary = store.manager.primary_healthy
    return {
        "status": "healthy" if primary else "degraded",
        "mode": store.mode,
        "primary": primary,
        "replica": store.manager.replica_healthy,
        "hostname": settings.hostname,
    }
