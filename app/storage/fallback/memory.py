"""
============================================================================
FALLBACK IMPLEMENTATION: In-Memory List Store (High-Availability)
============================================================================

This is the FALLBACK list storage backend that serves requests Redis can't.

PURPOSE:
--------
Keeps the guestbook operational when Redis is unconfigured, unreachable, or
fails mid-request, with zero external dependencies.

FEATURES:
---------
* Zero Dependencies: No external services required
* High Concurrency: 16-shard architecture reduces lock contention
* Append-only: get and append are the only operations

LIMITATIONS:
------------
* Non-Persistent: Lists lost on server restart
* Single-Instance: Every process has its own independent contents
* Memory-Bound: Limited by available RAM

See: app/storage/facade.py for when this store is used
"""

import logging
import threading
import zlib
from typing import Dict, List

logger = logging.getLogger(__name__)


class InMemoryListStore:
    """In-memory list storage with sharding for concurrent appends.

    Uses 16 shards to reduce lock contention.
    """

    NUM_SHARDS = 16

    def __init__(self):
        """Initialize in-memory store."""
        # List storage shards: key -> entries
        self._shards: List[Dict[str, List[str]]] = [{} for _ in range(self.NUM_SHARDS)]
        self._shard_locks: List[threading.RLock] = [threading.RLock() for _ in range(self.NUM_SHARDS)]
        logger.info(f"Started sharded in-memory list store ({self.NUM_SHARDS} shards)")

    def _get_shard_index(self, key: str) -> int:
        """Get shard index for a string key."""
        return zlib.crc32(key.encode()) % self.NUM_SHARDS

    def get(self, key: str) -> List[str]:
        """Return a snapshot of the list, or an empty list for unseen keys."""
        shard_idx = self._get_shard_index(key)
        with self._shard_locks[shard_idx]:
            return list(self._shards[shard_idx].get(key, ()))

    def append(self, key: str, value: str) -> List[str]:
        """Append a value, creating the list if needed.

        Returns:
            Snapshot of the list after the append
        """
        shard_idx = self._get_shard_index(key)
        with self._shard_locks[shard_idx]:
            entries = self._shards[shard_idx].setdefault(key, [])
            entries.append(value)
            snapshot = list(entries)

        logger.debug(f"Appended to in-memory list {key!r} (Shard {shard_idx}, {len(snapshot)} entries)")
        return snapshot

    def key_count(self) -> int:
        """Get total number of lists across all shards."""
        count = 0
        for i in range(self.NUM_SHARDS):
            with self._shard_locks[i]:
                count += len(self._shards[i])
        return count
