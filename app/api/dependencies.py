"""
API dependencies for the guestbook service.

Contains FastAPI dependencies for reaching the list store.
"""

import logging
from fastapi import Request

from app.storage import ListStoreFacade

logger = logging.getLogger(__name__)


def get_list_store(request: Request) -> ListStoreFacade:
    """Get the list store created during application startup.

    Returns:
        ListStoreFacade instance owned by the running app
    """
    return request.app.state.list_store


__all__ = ["get_list_store"]
