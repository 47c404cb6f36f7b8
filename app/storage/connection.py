"""
Store Connection Manager.

Resolves the Redis configuration into at most two connections:

1. PRIMARY: writable, target taken from the environment
2. REPLICA: read-only, fixed well-known address, only tried once the
   primary is up

Connections are made once at startup. A handle that fails (at connect time
or on any later command) is marked ERRORED and stays that way until the
process restarts; nothing re-probes it in the background.
"""

import logging
from typing import Optional

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from app.exceptions import ConnectError
from app.metrics import guestbook_backend_healthy
from app.settings import StoreConfig
from app.storage.models import (
    ConnectionRole,
    ConnectionState,
    ConnectionTarget,
    Outcome,
)

logger = logging.getLogger(__name__)

# Used when only REDIS_MASTER_PORT is present
DEFAULT_PRIMARY_TARGET = ConnectionTarget(host="redis-master", port=6379)

# Replica address is not configurable
REPLICA_TARGET = ConnectionTarget(host="redis-slave", port=6379)


def resolve_configuration(config: Optional[StoreConfig]) -> Optional[ConnectionTarget]:
    """Turn raw Redis inputs into a primary connection target.

    Args:
        config: Values read from the environment (None means nothing set)

    Returns:
        - explicit target when host, port and password are all present
        - the well-known redis-master target when only the alternate-port
          signal is present
        - None otherwise, which selects in-memory mode
    """
    if config is None:
        return None

    if config.master_host and config.master_port and config.master_password:
        try:
            port = int(config.master_port)
        except ValueError:
            logger.warning(
                f"Ignoring non-numeric REDIS_MASTER_SERVICE_PORT: {config.master_port!r}"
            )
            return None
        return ConnectionTarget(
            host=config.master_host, port=port, password=config.master_password
        )

    if config.alternate_port:
        return DEFAULT_PRIMARY_TARGET

    return None


class ConnectionHandle:
    """A single Redis connection and its health state."""

    def __init__(self, role: ConnectionRole, target: ConnectionTarget):
        self.role = role
        self.target = target
        self.state = ConnectionState.UNINITIALIZED
        self.client: Optional[aioredis.Redis] = None
        self.last_error: Optional[Exception] = None

    @property
    def is_healthy(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    async def open(self) -> Outcome:
        """Create the client and confirm it with PING."""
        try:
            # Entries written by other clients may not be valid UTF-8
            self.client = aioredis.from_url(
                self.target.url, decode_responses=True, encoding_errors="replace"
            )
            await self.client.ping()
        except (RedisError, OSError, ValueError) as e:
            self.mark_errored(e)
            return Outcome.connect_error(
                ConnectError(f"{self.role.value} {self.target.safe_url}: {e}")
            )

        self.state = ConnectionState.CONNECTED
        guestbook_backend_healthy.labels(role=self.role.value).set(1)
        return Outcome.ok(self)

    def mark_errored(self, error: Exception) -> bool:
        """Demote the handle. Returns True only on the first failure."""
        if self.state is ConnectionState.ERRORED:
            return False
        self.state = ConnectionState.ERRORED
        self.last_error = error
        guestbook_backend_healthy.labels(role=self.role.value).set(0)
        return True

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()
            self.client = None


class ConnectionManager:
    """Owns the primary and replica handles for the lifetime of the process."""

    def __init__(self, config: Optional[StoreConfig] = None):
        self._config = config
        self.target: Optional[ConnectionTarget] = None
        self.primary: Optional[ConnectionHandle] = None
        self.replica: Optional[ConnectionHandle] = None

    @property
    def primary_healthy(self) -> bool:
        return self.primary is not None and self.primary.is_healthy

    @property
    def replica_healthy(self) -> bool:
        return self.replica is not None and self.replica.is_healthy

    async def connect(self) -> None:
        """Resolve configuration and open the connections it allows."""
        self.target = resolve_configuration(self._config)

        if self.target is None:
            logger.info("Redis URL: Not found, using in-memory storage")
            return

        logger.info(f"Redis URL: {self.target.safe_url}")

        outcome = await self.connect_primary(self.target)
        if outcome.is_ok:
            await self.connect_replica()

    async def connect_primary(self, target: ConnectionTarget) -> Outcome:
        """Open the writable connection. Failure is logged, never raised."""
        self.primary = ConnectionHandle(ConnectionRole.PRIMARY, target)
        outcome = await self.primary.open()

        if outcome.is_ok:
            logger.info("Connected to Redis master")
        else:
            logger.warning(
                f"[FALLBACK ACTIVATED] Redis not available, using in-memory storage: {outcome.error}"
            )
        return outcome

    async def connect_replica(self) -> Outcome:
        """Open the read-only connection; only attempted after the primary."""
        if not self.primary_healthy:
            return Outcome.connect_error(
                ConnectError("replica skipped: primary is not connected")
            )

        self.replica = ConnectionHandle(ConnectionRole.REPLICA, REPLICA_TARGET)
        outcome = await self.replica.open()

        if outcome.is_ok:
            logger.info("Connected to Redis slave")
        else:
            logger.info("Redis slave not available, using master for reads")
        return outcome

    def mark_failed(self, handle: ConnectionHandle, error: Exception) -> None:
        """Take a handle out of rotation after a failed command."""
        if handle.mark_errored(error):
            logger.error(
                f"Redis {handle.role.value} error, disabling connection: {error}"
            )

    async def close(self) -> None:
        """Release live connections. Errors are logged, not raised."""
        for handle in (self.replica, self.primary):
            if handle is None:
                continue
            try:
                await handle.close()
                logger.info(f"Closed Redis {handle.role.value} connection")
            except Exception as e:
                logger.warning(f"Error closing Redis {handle.role.value} connection: {e}")
