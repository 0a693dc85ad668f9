"""
Request logging middleware.

Logs every request on the way in and its status and duration on the way out.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("shopfront.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        logger.info(f"{request.method} - {request.url.path}")
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"Completed {request.method} {request.url.path} "
            f"-> {response.status_code} in {elapsed_ms:.1f}ms"
        )
        return response
