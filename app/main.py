"""
Guestbook - Main Application

Application setup, storage lifecycle and middleware configuration.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from app.api import create_api_router
from app.middleware.logging import LoggingMiddleware
from app.middleware.tracing import RequestTracingMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware
from app.settings import settings
from app.config_validator import validate_config
from app.logging_config import setup_logging
from app.storage import close_list_store, create_list_store

from app.exceptions import (
    GuestbookException,
    guestbook_exception_handler,
    generic_exception_handler,
)

# Configure logging (JSON in production, redacted text otherwise)
setup_logging()
logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# Lifespan event handler
# ------------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect storage on startup, release it on shutdown."""
    logger.info("Starting application...")
    validate_config(settings.store)

    # Connections are made exactly once per process
    app.state.list_store = await create_list_store(settings.store)

    yield

    # Shutdown: runs on SIGTERM/SIGINT under uvicorn
    logger.info("Initiating graceful shutdown...")
    try:
        await close_list_store(app.state.list_store)
    except Exception as e:
        logger.warning(f"Error closing list storage: {e}")

    logger.info("Graceful shutdown complete")


# ------------------------------------------------------------------------------
# FastAPI app setup
# ------------------------------------------------------------------------------

app = FastAPI(
    title=settings.api.title,
    description=settings.api.description,
    version=settings.api.version,
    lifespan=lifespan,
)

# ------------------------------------------------------------------------------
# Exception Handlers
# ------------------------------------------------------------------------------

app.add_exception_handler(GuestbookException, guestbook_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# ------------------------------------------------------------------------------
# Middleware configuration
# ------------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
    max_age=600,  # Cache preflight requests for 10 minutes
)

app.add_middleware(RequestTracingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(LoggingMiddleware)

# ------------------------------------------------------------------------------
# Prometheus metrics
# ------------------------------------------------------------------------------

Instrumentator().instrument(app).expose(app)

# ------------------------------------------------------------------------------
# Routes
# ------------------------------------------------------------------------------

api_router = create_api_router()
app.include_router(api_router)

logger.info(f"Application configured: {settings.api.title} v{settings.api.version}")


if __name__ == "__main__":
    logger.info(f"Guestbook server is running on port {settings.api.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.api.port)
