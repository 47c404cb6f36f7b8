"""
Guestbook list endpoints.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from app.api.dependencies import get_list_store
from app.storage import ListStoreFacade

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/lrange/{key}",
    response_model=List[str],
    summary="Read a list",
    description="""
    Returns every entry of the named list, oldest first.

    Served by the Redis replica when available, otherwise the primary,
    otherwise this instance's in-memory store. Unknown lists are empty.
    """,
)
async def lrange(
    key: str, store: ListStoreFacade = Depends(get_list_store)
) -> List[str]:
    return await store.read_list(key)


@router.get(
    "/rpush/{key}/{value}",
    response_model=List[str],
    summary="Append to a list",
    description="""
    Appends one entry to the named list and returns the whole list.

    Writes go to the Redis primary; if it is unavailable or the write fails,
    the entry is kept in this instance's in-memory store instead.
    """,
)
async def rpush(
    key: str, value: str, store: ListStoreFacade = Depends(get_list_store)
) -> List[str]:
    return await store.append_to_list(key, value)
