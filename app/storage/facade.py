"""
List Store Facade: the only storage API the HTTP layer talks to.

Routing policy, evaluated on every call from current connection health:

    reads:   replica -> primary -> in-memory
    writes:  primary -> in-memory        (the replica is never written)

A Redis command that fails demotes its connection for the rest of the
process and the request is answered from the in-memory store instead.

One inconsistency is accepted: if RPUSH succeeds on the primary but the
LRANGE read-back fails, the entry exists in Redis AND is appended to the
in-memory store, and the caller sees the in-memory list.
"""

import logging
from typing import List, Optional

from app.metrics import guestbook_backend_operations_total, guestbook_fallback_total
from app.storage.connection import ConnectionHandle, ConnectionManager
from app.storage.fallback import InMemoryListStore
from app.storage.models import Outcome, OutcomeKind
from app.storage.primary import RedisListBackend

logger = logging.getLogger(__name__)

IN_MEMORY_NOTICE = "In-memory datastore (not redis)\n"


class ListStoreFacade:
    """Read/append API with replica, primary and in-memory fallback."""

    def __init__(
        self,
        manager: ConnectionManager,
        fallback: Optional[InMemoryListStore] = None,
    ):
        self.manager = manager
        self.fallback = fallback if fallback is not None else InMemoryListStore()

    @property
    def mode(self) -> str:
        """Backend a read would use right now."""
        if self.manager.replica_healthy:
            return "replica"
        if self.manager.primary_healthy:
            return "primary"
        return "memory"

    def _read_backend(self) -> Optional[RedisListBackend]:
        if self.manager.replica_healthy:
            return RedisListBackend(self.manager.replica)
        if self.manager.primary_healthy:
            return RedisListBackend(self.manager.primary)
        return None

    def _write_backend(self) -> Optional[RedisListBackend]:
        if self.manager.primary_healthy:
            return RedisListBackend(self.manager.primary)
        return None

    def _absorb(self, handle: ConnectionHandle, outcome: Outcome) -> None:
        """Record a non-ok outcome against its connection."""
        if outcome.kind is OutcomeKind.IO_ERROR:
            self.manager.mark_failed(handle, outcome.error)
        else:
            logger.warning(f"Redis {handle.role.value} unavailable: {outcome.error}")

    def _fallback_read(self, key: str, reason: str) -> List[str]:
        guestbook_fallback_total.labels(operation="read", reason=reason).inc()
        guestbook_backend_operations_total.labels(
            backend="memory", operation="read", status="ok"
        ).inc()
        return self.fallback.get(key)

    def _fallback_append(self, key: str, value: str, reason: str) -> List[str]:
        guestbook_fallback_total.labels(operation="append", reason=reason).inc()
        guestbook_backend_operations_total.labels(
            backend="memory", operation="append", status="ok"
        ).inc()
        return self.fallback.append(key, value)

    async def read_list(self, key: str) -> List[str]:
        """Return every entry of ``key``. Never raises."""
        backend = self._read_backend()
        if backend is None:
            return self._fallback_read(key, "unconfigured")

        outcome = await backend.read(key)
        if outcome.kind is OutcomeKind.OK:
            return outcome.value

        self._absorb(backend.handle, outcome)
        return self._fallback_read(key, outcome.kind.value)

    async def append_to_list(self, key: str, value: str) -> List[str]:
        """Append ``value`` to ``key`` and return the full list. Never raises."""
        backend = self._write_backend()
        if backend is None:
            return self._fallback_append(key, value, "unconfigured")

        outcome = await backend.push(key, value)
        if outcome.kind is OutcomeKind.OK:
            outcome = await backend.read(key)

        if outcome.kind is OutcomeKind.OK:
            return outcome.value

        self._absorb(backend.handle, outcome)
        return self._fallback_append(key, value, outcome.kind.value)

    async def backend_info(self) -> str:
        """Primary INFO text, or a notice that the in-memory store is in use."""
        backend = self._write_backend()
        if backend is None:
            return IN_MEMORY_NOTICE

        outcome = await backend.info()
        if outcome.kind is OutcomeKind.OK:
            return outcome.value

        self._absorb(backend.handle, outcome)
        return IN_MEMORY_NOTICE
