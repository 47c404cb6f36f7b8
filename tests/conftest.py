"""
Shared pytest fixtures for guestbook tests.

This file contains reusable fixtures for:
- FastAPI test client (in-memory mode, no Redis)
- Fake Redis clients and pre-wired connection handles
- Environment setup
"""

import os
from typing import Dict, Generator, List, Optional
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

# Settings are read at import time; make sure no developer Redis leaks in.
for _name in (
    "REDIS_MASTER_SERVICE_HOST",
    "REDIS_MASTER_SERVICE_PORT",
    "REDIS_MASTER_SERVICE_PASSWORD",
    "REDIS_MASTER_PORT",
):
    os.environ.pop(_name, None)
os.environ["GUESTBOOK_EXPOSE_ENV"] = "true"


# ============================================================================
# Fake Redis
# ============================================================================


class FakeRedisLists:
    """Async stand-in for the handful of redis commands the app issues."""

    def __init__(self):
        self.lists: Dict[str, List[str]] = {}
        self.ping = AsyncMock(return_value=True)
        self.aclose = AsyncMock()
        self.rpush = AsyncMock(side_effect=self._rpush)
        self.lrange = AsyncMock(side_effect=self._lrange)
        self.info = AsyncMock(
            return_value={"redis_version": "7.2.4", "role": "master", "connected_clients": 2}
        )

    async def _rpush(self, key: str, value: str) -> int:
        self.lists.setdefault(key, []).append(value)
        return len(self.lists[key])

    async def _lrange(self, key: str, start: int, end: int) -> List[str]:
        assert (start, end) == (0, -1)
        return list(self.lists.get(key, []))


@pytest.fixture
def fake_redis():
    """Factory for independent fake Redis clients."""
    return FakeRedisLists


@pytest.fixture
def make_handle():
    """Build a ConnectionHandle already in the given state."""
    from app.storage import ConnectionHandle, ConnectionState, ConnectionTarget

    def _make(role, client=None, state: Optional[ConnectionState] = None):
        handle = ConnectionHandle(role, ConnectionTarget(host=role.value, port=6379))
        handle.client = client
        handle.state = state or (
            ConnectionState.CONNECTED if client is not None else ConnectionState.ERRORED
        )
        return handle

    return _make


@pytest.fixture
def make_facade(make_handle):
    """Build a ListStoreFacade over optional primary/replica clients."""
    from app.storage import (
        ConnectionManager,
        ConnectionRole,
        InMemoryListStore,
        ListStoreFacade,
    )

    def _make(primary=None, replica=None):
        manager = ConnectionManager(None)
        if primary is not None:
            manager.primary = make_handle(ConnectionRole.PRIMARY, primary)
        if replica is not None:
            manager.replica = make_handle(ConnectionRole.REPLICA, replica)
        return ListStoreFacade(manager, InMemoryListStore())

    return _make


# ============================================================================
# FastAPI Test Client
# ============================================================================


@pytest.fixture
def client(monkeypatch) -> Generator[TestClient, None, None]:
    """
    FastAPI test client running in in-memory mode.

    The lifespan runs on entry, so every test gets a fresh list store.
    """
    from app.main import app
    from app.settings import StoreConfig, settings

    monkeypatch.setattr(
        settings,
        "store",
        StoreConfig(
            master_host=None, master_port=None, master_password=None, alternate_port=None
        ),
    )

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
