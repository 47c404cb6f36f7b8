"""
Factory for list store creation.

ARCHITECTURE:
=============
The guestbook stores lists in a three-tier system:

1. REPLICA: Redis read replica (preferred for reads)
2. PRIMARY: Redis master (all writes, reads when no replica)
3. FALLBACK: In-memory store (when Redis is unconfigured or failing)

The factory builds one ConnectionManager and one ListStoreFacade per
process. The caller owns the returned facade (the FastAPI app keeps it on
``app.state``) and must call ``close_list_store`` at shutdown.
"""

import logging
from typing import Optional

from app.settings import StoreConfig
from app.storage.connection import ConnectionManager
from app.storage.facade import ListStoreFacade
from app.storage.fallback import InMemoryListStore

logger = logging.getLogger(__name__)


async def create_list_store(config: Optional[StoreConfig]) -> ListStoreFacade:
    """Connect to Redis as configured and wrap the result in a facade.

    Connection failures are absorbed: the returned facade always works,
    using the in-memory store for whatever Redis can't serve.

    Args:
        config: Redis inputs from settings (None for in-memory only)

    Returns:
        ListStoreFacade ready to serve requests
    """
    manager = ConnectionManager(config)
    await manager.connect()

    facade = ListStoreFacade(manager, InMemoryListStore())

    if facade.mode == "memory":
        logger.warning("[FALLBACK ACTIVATED] Using in-memory list store")
        logger.warning("Guestbook entries will not persist across server restarts")
    else:
        logger.info(f"[SUCCESS] List store ready, reads served by {facade.mode}")

    return facade


async def close_list_store(facade: ListStoreFacade) -> None:
    """Release Redis connections held by the facade."""
    await facade.manager.close()
