"""
Request logging middleware.
"""

import time
from fastapi import Request
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware


def _level_for(status: int) -> str:
    if status >= 500:
        return "ERROR"
    if status >= 400:
        return "WARNING"
    return "INFO"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one http_request event per request with status and duration."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000)
            anon_id = getattr(request.state, "anon_id", None)
            logger.bind(
                event="http_request",
                method=request.method,
                path=request.url.path,
                status=status,
                duration_ms=duration_ms,
                anon_id=anon_id,
            ).log(
                _level_for(status),
                f"{request.method} {request.url.path} {status} {duration_ms}ms anon_id={anon_id}",
            )
