"""
SnipBin Backend: Request ID Middleware
========================================

What:  Assigns a correlation ID to each request, echoes it back in the
       X-Request-ID response header and stamps it on every log record.
Why:   Lets a 500 seen by a client be matched with the storage error logged
       for the same request, and ties "Snippet <key> created/viewed" lines
       to the upload or paste that caused them.
How:   Reuses an incoming X-Request-ID when it is a short token of safe
       characters, otherwise generates a short UUID. The ID lives in a
       ContextVar read by RequestIDLogFilter, and in request.state.
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client-supplied IDs end up in log lines and response headers
_SAFE_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(incoming: Optional[str]) -> str:
    """Incoming X-Request-ID if usable, else a fresh 8-char ID."""
    if incoming and _SAFE_ID_RE.match(incoming):
        return incoming
    return new_request_id()


class RequestIDLogFilter(logging.Filter):
    """Adds `request_id` to each record ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get("X-Request-ID"))

        # Not reset afterwards: the outermost error handler logs with it
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers["X-Request-ID"] = rid
        return response
