"""Request ID tracing middleware — every response carries X-Request-ID."""
from __future__ import annotations

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# Read by the logging filter so every log line names its request
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_MAX_CLIENT_ID = 128


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Honor a client-supplied X-Request-ID (if sane) or mint a UUID4."""

    async def dispatch(self, request: Request, call_next) -> Response:
        incoming = request.headers.get("x-request-id", "")
        rid = incoming if 0 < len(incoming) <= _MAX_CLIENT_ID else str(uuid.uuid4())
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = rid
        return response
