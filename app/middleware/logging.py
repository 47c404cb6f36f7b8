import json
import logging
import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware

# One JSON line per request, routed through the handlers set up by
# app.logging_config.setup_logging.
json_logger = logging.getLogger("app.access")


def _request_line(request, request_id: str, status_code: int, start: float) -> str:
    return json.dumps(
        {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status": status_code,
            "elapsed_ms": int((time.perf_counter() - start) * 1000),
            "client_ip": request.headers.get("x-forwarded-for")
            or getattr(request.client, "host", None),
        },
        separators=(",", ":"),
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    FastAPI/Starlette middleware to log a single JSON line for each HTTP request.

    Logs:
        - request_id (from RequestTracingMiddleware, else a fresh UUID4)
        - method, path, status
        - elapsed_ms (wall time)
        - client_ip
    """

    async def dispatch(self, request, call_next):
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            rid = getattr(request.state, "request_id", None) or str(uuid.uuid4())
            json_logger.info(_request_line(request, rid, 500, start))
            raise

        rid = getattr(request.state, "request_id", None) or str(uuid.uuid4())
        json_logger.info(_request_line(request, rid, response.status_code, start))
        return response
