"""
Environment variable validation for the guestbook service.

Nothing here is fatal: a missing or partial Redis configuration is a valid
way to run (in-memory mode). The validator only makes the chosen mode and
any half-finished configuration visible in the startup log.

Called automatically during application startup in app/main.py.
"""

import logging
from typing import List

from app.settings import StoreConfig

logger = logging.getLogger(__name__)

# ==============================================================================
# Documentation of All Environment Variables
# ==============================================================================

ENV_VAR_DOCUMENTATION = """
## Redis (all optional; none set means in-memory storage)
- REDIS_MASTER_SERVICE_HOST: Primary Redis host
- REDIS_MASTER_SERVICE_PORT: Primary Redis port
- REDIS_MASTER_SERVICE_PASSWORD: Primary Redis password
- REDIS_MASTER_PORT: When set without the three above, use redis://redis-master:6379

## HTTP
- PORT: Listen port when run with `python -m app.main` (default 3000)
- ALLOWED_ORIGINS: Comma-separated CORS origins (default *)
- GUESTBOOK_EXPOSE_ENV: Serve /env (default true)
- HOSTNAME: Host identifier shown by /hello

## General
- ENV: Environment type (production, development)
- LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
- LOG_FORMAT: json or text (default json when ENV=production)
"""

EXPLICIT_TARGET_VARS = {
    "master_host": "REDIS_MASTER_SERVICE_HOST",
    "master_port": "REDIS_MASTER_SERVICE_PORT",
    "master_password": "REDIS_MASTER_SERVICE_PASSWORD",
}


def missing_target_vars(config: StoreConfig) -> List[str]:
    """Names of the explicit-target variables that are unset."""
    return [
        env_name
        for field_name, env_name in EXPLICIT_TARGET_VARS.items()
        if not getattr(config, field_name)
    ]


def validate_config(config: StoreConfig) -> None:
    """
    Log which storage mode the Redis variables select.

    Warns when some, but not all, of the explicit-target variables are set,
    since that silently falls through to the alternate-port rule or to
    in-memory mode.
    """
    missing = missing_target_vars(config)

    if not missing:
        logger.info("Redis configuration: explicit primary target")
        return

    if len(missing) < len(EXPLICIT_TARGET_VARS):
        logger.warning(
            f"Partial Redis configuration ignored, missing: {', '.join(missing)}"
        )

    if config.alternate_port:
        logger.info("Redis configuration: REDIS_MASTER_PORT set, using redis-master")
    else:
        logger.info("Redis configuration: none, using in-memory storage")
