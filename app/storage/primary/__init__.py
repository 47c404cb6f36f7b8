"""
PRIMARY Implementation: Redis List Backend

This package contains the Redis implementation used for both the writable
primary and the read-only replica connection.

See redis_store.py for implementation details.
"""

from .redis_store import RedisListBackend

__all__ = ["RedisListBackend"]
