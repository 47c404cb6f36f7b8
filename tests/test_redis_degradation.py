"""
Tests for Redis degradation and fallback scenarios.

Verifies that the application gracefully handles Redis unavailability:
- Store creation falls back to in-memory when Redis can't be reached
- Requests keep working after Redis fails mid-flight
- Health reports degraded status
- Shutdown releases connections
"""

import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError


def _alternate_port_config():
    from app.settings import StoreConfig

    return StoreConfig(
        master_host=None, master_port=None, master_password=None, alternate_port="6379"
    )


@pytest.mark.integration
@pytest.mark.storage
class TestListStoreCreation:
    """create_list_store with reachable and unreachable Redis."""

    @pytest.mark.asyncio
    async def test_unreachable_redis_yields_memory_mode(self, fake_redis):
        from app.storage import create_list_store

        master = fake_redis()
        master.ping.side_effect = RedisConnectionError("Connection refused")

        with patch("app.storage.connection.aioredis.from_url", return_value=master):
            facade = await create_list_store(_alternate_port_config())

        assert facade.mode == "memory"
        assert await facade.append_to_list("guests", "alice") == ["alice"]

    @pytest.mark.asyncio
    async def test_reachable_primary_without_replica(self, fake_redis):
        from app.storage import create_list_store

        master, slave = fake_redis(), fake_redis()
        slave.ping.side_effect = RedisConnectionError("Name or service not known")

        def from_url(url, **kwargs):
            return slave if "redis-slave" in url else master

        with patch("app.storage.connection.aioredis.from_url", side_effect=from_url):
            facade = await create_list_store(_alternate_port_config())

        assert facade.mode == "primary"
        await facade.append_to_list("guests", "alice")
        assert master.lists["guests"] == ["alice"]
        assert facade.fallback.key_count() == 0

    @pytest.mark.asyncio
    async def test_close_list_store_releases_connections(self, fake_redis):
        from app.storage import close_list_store, create_list_store

        master = fake_redis()

        with patch("app.storage.connection.aioredis.from_url", return_value=master):
            facade = await create_list_store(_alternate_port_config())
            await close_list_store(facade)

        # primary and replica share the patched client here
        assert master.aclose.await_count == 2


@pytest.mark.integration
@pytest.mark.api
class TestEndpointsDuringRedisOutage:
    """HTTP behavior when Redis fails after startup."""

    @pytest.fixture
    def redis_client(self, monkeypatch, fake_redis):
        from app.main import app
        from app.settings import settings

        master = fake_redis()
        slave = fake_redis()
        slave.ping.side_effect = RedisConnectionError("Name or service not known")

        def from_url(url, **kwargs):
            return slave if "redis-slave" in url else master

        monkeypatch.setattr(settings, "store", _alternate_port_config())

        with patch("app.storage.connection.aioredis.from_url", side_effect=from_url):
            with TestClient(app, raise_server_exceptions=False) as test_client:
                yield test_client, master

    def test_redis_serves_requests_while_healthy(self, redis_client):
        client, master = redis_client

        assert client.get("/rpush/guestbook/alice").json() == ["alice"]
        assert master.lists["guestbook"] == ["alice"]
        assert client.get("/health").json()["status"] == "healthy"
        assert "redis_version" in client.get("/info").text

    def test_write_failure_degrades_instead_of_erroring(self, redis_client):
        client, master = redis_client
        master.rpush.side_effect = RedisConnectionError("Connection dropped")

        response = client.get("/rpush/guestbook/alice")

        assert response.status_code == 200
        assert response.json() == ["alice"]
        assert client.get("/health").json()["mode"] == "memory"
        assert client.get("/lrange/guestbook").json() == ["alice"]
        assert client.get("/info").text == "In-memory datastore (not redis)\n"

    def test_read_failure_degrades_instead_of_erroring(self, redis_client):
        client, master = redis_client
        master.lrange.side_effect = RedisConnectionError("Connection dropped")

        response = client.get("/lrange/guestbook")

        assert response.status_code == 200
        assert response.json() == []

    def test_undecodable_entry_is_not_a_server_error(self, redis_client):
        client, master = redis_client
        client.get("/rpush/guestbook/alice")
        master.lrange.side_effect = UnicodeDecodeError(
            "utf-8", b"\xff\xfe legacy", 0, 1, "invalid start byte"
        )

        response = client.get("/lrange/guestbook")

        assert response.status_code == 200
        assert isinstance(response.json(), list)
