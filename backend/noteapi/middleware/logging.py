"""
NoteAPI Backend — Request Logging Middleware
==============================================

What:  One access log line per HTTP request, with status and duration.
Why:   Makes 401/403/500 bursts from the AuthGate visible without enabling
       DEBUG logging.
How:   Times the downstream call and logs on logger `noteapi.access`, with
       the level chosen by status class. 401/403 answers under the notes
       prefix are tagged `auth-rejected`, so an operator can grep for
       clients using a revoked or missing token.
When:  After RequestIDMiddleware (uses request ID for correlation).

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, IP, request ID, auth rejection
    ❌ Don't log: request body, the authorization header (it is the credential)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from noteapi.middleware.request_id import request_id_var

logger = logging.getLogger("noteapi.access")

AUTH_REJECTION_STATUSES = {401, 403}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status, duration and client of each request.

    Levels:
        5xx → ERROR, 4xx → WARNING, otherwise INFO.
    GET /health is not logged.
    """

    def __init__(self, app: ASGIApp, protected_prefix: str = "/notes"):
        super().__init__(app)
        self.protected_prefix = protected_prefix.rstrip("/")

    def is_auth_rejection(self, path: str, status: int) -> bool:
        """True for 401/403 answers on paths the AuthGate guards."""
        if status not in AUTH_REJECTION_STATUSES:
            return False
        return path == self.protected_prefix or path.startswith(self.protected_prefix + "/")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path == "/health":
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        # request.client may be None in testing
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        status = response.status_code
        auth_rejected = self.is_auth_rejection(path, status)

        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s%s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            " auth-rejected" if auth_rejected else "",
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "auth_rejected": auth_rejected,
            },
        )

        return response
