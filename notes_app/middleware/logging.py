"""
Simple Notes — Request Logging Middleware
==========================================

What:  One access log line per request to the notes page.
How:   Times the rest of the stack, then logs method, path, status, duration,
       request ID and client. Redirects also log their target, so a stored
       note shows up as `POST / 303 -> /?status=success_add`.
       Level follows the status class: 5xx → ERROR, 4xx → WARNING, else INFO.

Request bodies are never logged (they hold the users' note text).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notes_app.middleware.request_id import request_id_var

logger = logging.getLogger("notes_app.access")


def level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes the access log line for each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        target = response.headers.get("location")
        logger.log(
            level_for(status),
            "%s %s %d%s %.1fms [%s] from %s",
            request.method,
            request.url.path,
            status,
            f" -> {target}" if target else "",
            duration_ms,
            request_id_var.get(""),
            request.client.host if request.client else "unknown",
        )
        return response
