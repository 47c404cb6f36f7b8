"""
FALLBACK Implementation: In-Memory List Store

This package contains the high-availability fallback implementation.
Used when:
- No Redis connection is configured
- The Redis primary failed to connect or failed later
- A Redis command fails during a request

See memory.py for implementation details.
"""

from .memory import InMemoryListStore

__all__ = ["InMemoryListStore"]
