"""
Helper functions for list storage.
"""

import re
from typing import Any, Dict

from app.logging_config import REDACTED, mask_secret_url

_SECRET_NAME = re.compile(r"PASSWORD|SECRET|TOKEN|KEY", re.IGNORECASE)


def redact_environment(environ: Dict[str, str]) -> Dict[str, Any]:
    """Copy an environment mapping, redacting secret-looking values.

    A variable is treated as secret when its name contains PASSWORD, SECRET,
    TOKEN or KEY. Redis URLs embedded in other values lose their password.
    """
    redacted = {}
    for name, value in environ.items():
        if _SECRET_NAME.search(name):
            redacted[name] = REDACTED
        else:
            redacted[name] = mask_secret_url(value)
    return redacted


def format_info(info: Dict[str, Any]) -> str:
    """Render a parsed Redis INFO mapping as ``key:value`` lines."""
    lines = []
    for key, value in info.items():
        if isinstance(value, dict):
            value = ",".join(f"{k}={v}" for k, v in value.items())
        lines.append(f"{key}:{value}")
    return "\n".join(lines) + "\n"
