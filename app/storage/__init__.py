"""
Storage module for guestbook lists.

Architecture:
- connection.py: Redis primary/replica connection manager
- primary/: Redis list backend
- fallback/: In-memory list store
- facade.py: Routing and fallback policy
- factory.py: Builds the facade at startup
"""

from app.storage.connection import (
    ConnectionHandle,
    ConnectionManager,
    resolve_configuration,
)
from app.storage.facade import IN_MEMORY_NOTICE, ListStoreFacade
from app.storage.factory import close_list_store, create_list_store
from app.storage.fallback import InMemoryListStore
from app.storage.models import (
    ConnectionRole,
    ConnectionState,
    ConnectionTarget,
    Outcome,
    OutcomeKind,
)
from app.storage.primary import RedisListBackend

__all__ = [
    "ConnectionHandle",
    "ConnectionManager",
    "ConnectionRole",
    "ConnectionState",
    "ConnectionTarget",
    "IN_MEMORY_NOTICE",
    "InMemoryListStore",
    "ListStoreFacade",
    "Outcome",
    "OutcomeKind",
    "RedisListBackend",
    "close_list_store",
    "create_list_store",
    "resolve_configuration",
]
