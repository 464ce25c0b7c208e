"""
Simple Notes — Request ID Middleware
=====================================

What:  Assigns a short correlation ID to each request and returns it in the
       `X-Request-ID` response header.
How:   Reuses a client-supplied X-Request-ID once it is reduced to letters,
       digits and dashes (it is echoed in headers and on error pages);
       otherwise generates one. Stored in a ContextVar for loggers and the
       error handlers, and in request.state.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Request-ID"
MAX_LENGTH = 64

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def clean_request_id(raw: str) -> str:
    """Keep only characters that are harmless in headers, logs and HTML."""
    return "".join(ch for ch in raw if (ch.isascii() and ch.isalnum()) or ch == "-")[:MAX_LENGTH]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags every request with an ID and echoes it back to the client."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = clean_request_id(request.headers.get(HEADER, "")) or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[HEADER] = rid
        return response
