from fastapi import Request
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


class GuestbookException(Exception):
    """Base exception for the guestbook service"""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(GuestbookException):
    """Route exists but is switched off"""

    def __init__(self, message: str = "Not Found"):
        super().__init__(message, status_code=404)


class StorageError(Exception):
    """Redis failure carried inside an Outcome; never raised to HTTP callers"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConnectError(StorageError):
    """Could not establish a Redis connection"""


class BackendIOError(StorageError):
    """A command against a live Redis connection failed"""


async def guestbook_exception_handler(request: Request, exc: GuestbookException):
    """Handle custom guestbook exceptions"""
    logger.error(
        f"Guestbook Exception: {exc.message}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "client_ip": getattr(request.client, "host", None),
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.message,
            "type": exc.__class__.__name__,
        },
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.exception(
        f"Unexpected error: {str(exc)}",
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    # Don't leak implementation details
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An internal error occurred. Please try again later.",
        },
    )
