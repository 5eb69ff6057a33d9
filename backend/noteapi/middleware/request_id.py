"""
NoteAPI Backend — Request ID Middleware
=========================================

What:  Assigns a correlation ID to each incoming request and echoes it back.
Why:   Lets an operator match an access log line, an AuthGate failure log and
       the client's report of a failed call.
How:   Reuses a client-sent X-Request-ID or generates a short UUID, stores it
       in a ContextVar, returns it in the response header.
When:  Outermost application middleware (runs before logging and the AuthGate).
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Use the client's X-Request-ID header when present
        2. Otherwise generate the first 8 characters of a UUID4
        3. Store in ContextVar so the access log and AuthGate failures share it
        4. Add to response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])

        request_id_var.set(rid)

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid

        return response
