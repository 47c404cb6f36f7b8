"""
Application settings for the guestbook service.

Loads configuration from environment variables (.env file) with sensible defaults.
All settings can be overridden via environment variables.
"""

import os
from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import List, Optional
from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


def _env_or_none(name: str) -> Optional[str]:
    """Read an environment variable, treating empty strings as unset."""
    value = os.getenv(name)
    return value if value else None


class APISettings(BaseModel):
    """API and server settings."""

    title: str = Field(default="Guestbook", description="API title")
    description: str = Field(
        default="Append-only guestbook lists backed by Redis with in-memory fallback.",
        description="API description",
    )
    version: str = Field(default="1.0.0", description="API version")
    port: int = Field(
        default=int(os.getenv("PORT", "3000")),
        description="Listen port when started as a module",
    )
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            url.strip()
            for url in os.getenv("ALLOWED_ORIGINS", "*").split(",")
            if url.strip()
        ],
        description="Allowed CORS origins",
    )
    expose_env: bool = Field(
        default=os.getenv("GUESTBOOK_EXPOSE_ENV", "true").lower() == "true",
        description="Serve the /env diagnostics route",
    )

    @field_validator("port")
    def validate_port(cls, v):
        if not 0 < v < 65536:
            raise ValueError("port must be between 1 and 65535")
        return v


class StoreConfig(BaseModel):
    """Raw Redis connection inputs, exactly as supplied by the environment.

    Resolution into a connection target lives in
    ``app.storage.connection.resolve_configuration`` so it can be exercised
    without touching the process environment.
    """

    master_host: Optional[str] = Field(
        default_factory=lambda: _env_or_none("REDIS_MASTER_SERVICE_HOST"),
        description="Primary Redis host",
    )
    master_port: Optional[str] = Field(
        default_factory=lambda: _env_or_none("REDIS_MASTER_SERVICE_PORT"),
        description="Primary Redis port",
    )
    master_password: Optional[str] = Field(
        default_factory=lambda: _env_or_none("REDIS_MASTER_SERVICE_PASSWORD"),
        description="Primary Redis password",
    )
    alternate_port: Optional[str] = Field(
        default_factory=lambda: _env_or_none("REDIS_MASTER_PORT"),
        description="When set alone, selects the well-known redis-master address",
    )

    model_config = ConfigDict(frozen=True)


class Settings(BaseModel):
    """Global application configuration.

    Configuration priority:
    1. Environment variables (.env file or system)
    2. Defaults specified below
    """

    api: APISettings = Field(
        default_factory=APISettings, description="API and server configuration"
    )

    store: StoreConfig = Field(
        default_factory=StoreConfig, description="Redis connection inputs"
    )

    hostname: str = Field(
        default_factory=lambda: os.getenv("HOSTNAME", "unknown"),
        description="Host identifier reported by /hello",
    )

    model_config = ConfigDict(
        extra="forbid",  # Prevent typos in environment variables
        validate_assignment=True,  # Validate on attribute assignment
    )


# Global settings instance
settings = Settings()
