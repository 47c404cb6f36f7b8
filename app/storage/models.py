"""
Storage data models: connection targets, connection state and call outcomes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from app.logging_config import mask_secret_url

T = TypeVar("T")


@dataclass(frozen=True)
class ConnectionTarget:
    """Where a Redis connection should point."""

    host: str
    port: int
    password: Optional[str] = None

    @property
    def url(self) -> str:
        """Redis connection URL (contains the password; never log it raw)."""
        if self.password:
            return f"redis://:{self.password}@{self.host}:{self.port}"
        return f"redis://{self.host}:{self.port}"

    @property
    def safe_url(self) -> str:
        """URL suitable for log lines."""
        return mask_secret_url(self.url)


class ConnectionRole(str, Enum):
    PRIMARY = "primary"
    REPLICA = "replica"


class ConnectionState(str, Enum):
    """Lifecycle of a connection handle.

    ``ERRORED`` is terminal: a handle is never re-probed within the process.
    """

    UNINITIALIZED = "uninitialized"
    CONNECTED = "connected"
    ERRORED = "errored"


class OutcomeKind(str, Enum):
    OK = "ok"
    CONNECT_ERROR = "connect_error"
    IO_ERROR = "io_error"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a single backend call.

    Backend call sites return one of these instead of raising, so callers
    branch on ``kind`` explicitly.
    """

    kind: OutcomeKind
    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def ok(cls, value: Any) -> "Outcome":
        return cls(kind=OutcomeKind.OK, value=value)

    @classmethod
    def connect_error(cls, error: Exception) -> "Outcome":
        return cls(kind=OutcomeKind.CONNECT_ERROR, error=error)

    @classmethod
    def io_error(cls, error: Exception) -> "Outcome":
        return cls(kind=OutcomeKind.IO_ERROR, error=error)

    @property
    def is_ok(self) -> bool:
        return self.kind is OutcomeKind.OK
