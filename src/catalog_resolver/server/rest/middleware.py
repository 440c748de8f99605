"""Request timing middleware."""

from __future__ import annotations

import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger(__name__)

TIMING_HEADER = "X-Process-Time-Ms"


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Stamp each response with its duration and log it.

    Server errors log at warning so degraded catalog lookups stand out.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        elapsed = (time.monotonic() - start) * 1000
        response.headers[TIMING_HEADER] = f"{elapsed:.1f}"
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "%s %s → %d (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        return response
