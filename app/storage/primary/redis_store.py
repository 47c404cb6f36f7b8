"""
============================================================================
PRIMARY IMPLEMENTATION: Redis List Backend
============================================================================

Issues the guestbook's list commands against one Redis connection handle
(primary or replica) and reports every call as an ``Outcome``:

* RPUSH   - append one entry
* LRANGE  - read a whole list
* INFO    - server information for the /info route

Nothing here raises for Redis failures and nothing here decides what to do
about them; the facade reads the outcome and picks the fallback.

See: app/storage/facade.py for routing and fallback logic
See: app/storage/connection.py for how handles are created
"""

import logging
from typing import List

from redis.exceptions import RedisError

from app.exceptions import BackendIOError, ConnectError
from app.metrics import guestbook_backend_operations_total
from app.storage.connection import ConnectionHandle
from app.storage.models import Outcome
from app.storage.utils import format_info

logger = logging.getLogger(__name__)

# Decoding errors count as backend failures so a bad entry never escapes
BACKEND_ERRORS = (RedisError, OSError, UnicodeError)


class RedisListBackend:
    """List commands over a single Redis connection handle."""

    def __init__(self, handle: ConnectionHandle):
        self.handle = handle

    @property
    def name(self) -> str:
        return self.handle.role.value

    def _unavailable(self) -> Outcome:
        return Outcome.connect_error(
            ConnectError(f"Redis {self.name} is not connected")
        )

    def _failed(self, operation: str, error: Exception) -> Outcome:
        logger.error(f"Redis {self.name} {operation} error: {error}")
        guestbook_backend_operations_total.labels(
            backend=self.name, operation=operation, status="error"
        ).inc()
        return Outcome.io_error(BackendIOError(f"{operation} on {self.name}: {error}"))

    def _succeeded(self, operation: str, value) -> Outcome:
        guestbook_backend_operations_total.labels(
            backend=self.name, operation=operation, status="ok"
        ).inc()
        return Outcome.ok(value)

    async def read(self, key: str) -> Outcome:
        """LRANGE key 0 -1."""
        if not self.handle.is_healthy:
            return self._unavailable()

        try:
            entries = await self.handle.client.lrange(key, 0, -1)
        except BACKEND_ERRORS as e:
            return self._failed("read", e)

        return self._succeeded("read", list(entries or []))

    async def push(self, key: str, value: str) -> Outcome:
        """RPUSH key value. The outcome value is the new list length."""
        if not self.handle.is_healthy:
            return self._unavailable()

        try:
            length = await self.handle.client.rpush(key, value)
        except BACKEND_ERRORS as e:
            return self._failed("append", e)

        return self._succeeded("append", length)

    async def info(self) -> Outcome:
        """INFO rendered as plain text."""
        if not self.handle.is_healthy:
            return self._unavailable()

        try:
            info = await self.handle.client.info()
        except BACKEND_ERRORS as e:
            return self._failed("info", e)

        return self._succeeded("info", format_info(info))
