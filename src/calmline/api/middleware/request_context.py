"""
Request Context Middleware

Outermost per-request wrapper for the API:
- Correlation ID taken from X-Correlation-ID or generated
- One access log line per request (method, path, status, latency)
- Security headers on every response, HSTS in production
- Unhandled exceptions turned into a sanitized 500 body

PRIVACY: Request and response bodies are never read here. Only the
path and status reach the logs, never the message being assessed.
"""

import time
from typing import Optional
from uuid import uuid4

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from calmline.config.logging_config import get_logger, bind_correlation_id, clear_context

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "X-Permitted-Cross-Domain-Policies": "none",
}

HSTS_HEADER = ("Strict-Transport-Security", "max-age=31536000; includeSubDomains")

# Correlation IDs longer than this are replaced, not echoed
MAX_CORRELATION_ID_LENGTH = 128


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Correlation, access logging, security headers and error shielding.

    Usage:
        app.add_middleware(RequestContextMiddleware, enable_hsts=settings.is_production())
    """

    def __init__(self, app: ASGIApp, enable_hsts: bool = False) -> None:
        super().__init__(app)
        self.headers = dict(SECURITY_HEADERS)
        if enable_hsts:
            self.headers[HSTS_HEADER[0]] = HSTS_HEADER[1]

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        correlation_id = _correlation_id(request.headers.get(CORRELATION_HEADER))
        bind_correlation_id(correlation_id)
        started = time.perf_counter()

        try:
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "Unhandled exception",
                    path=request.url.path,
                    method=request.method,
                    error_type=type(e).__name__,
                    exc_info=e,
                )
                response = JSONResponse(
                    status_code=500,
                    content={
                        "error": "Internal server error",
                        "correlation_id": correlation_id,
                        "message": "An unexpected error occurred. Please try again.",
                    },
                )

            response.headers[CORRELATION_HEADER] = correlation_id
            for name, value in self.headers.items():
                response.headers.setdefault(name, value)

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            return response

        finally:
            clear_context()


def _correlation_id(incoming: Optional[str]) -> str:
    if incoming and len(incoming) <= MAX_CORRELATION_ID_LENGTH and incoming.isprintable():
        return incoming
    return str(uuid4())
