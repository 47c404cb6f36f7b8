from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers to all responses.

    Headers added:
    - X-Content-Type-Options: nosniff
    - X-Frame-Options: SAMEORIGIN
    - Referrer-Policy: no-referrer
    - Content-Security-Policy: same-origin scripts, inline styles allowed
    """

    CONTENT_SECURITY_POLICY = "; ".join(
        [
            "default-src 'self'",
            "style-src 'self' 'unsafe-inline' https://afeld.github.io",
            "script-src 'self'",
            "img-src 'self' data: https:",
        ]
    )

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Content-Security-Policy"] = self.CONTENT_SECURITY_POLICY

        return response
