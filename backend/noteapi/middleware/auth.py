"""
NoteAPI Backend — Interceptor Pipeline and AuthGate
=====================================================

What:  An ordered pipeline of request interceptors, and the AuthGate
       interceptor that checks the authorization header against the admin
       allow-list.
Why:   Every /notes handler requires an admin token. Running the check once,
       ahead of routing, keeps the six handlers free of auth code.
How:   Each interceptor returns either None ("continue") or a terminal
       Response. InterceptorMiddleware runs them in order for paths under
       its protected prefix and returns the first terminal response; if all
       continue, the request proceeds to the router.

AuthGate decision table:
    no / empty authorization header   → 401 "Unauthorized"
    allow-list lookup raises          → 500 "Internal Server Error" (logged)
    token not on the allow-list       → 403 "Forbidden"
    otherwise                         → continue

Why responses are built here (not by the global exception handlers):
    Middleware runs outside FastAPI's route exception handling, so an
    exception raised in dispatch() would never reach the handlers
    registered in main.py.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

from noteapi.exceptions import (
    ForbiddenError,
    InternalError,
    NoteAPIError,
    UnauthorizedError,
)
from noteapi.middleware.request_id import request_id_var
from noteapi.services.admin_directory import AdminDirectory

logger = logging.getLogger(__name__)


class Interceptor(ABC):
    """A pipeline stage that may end the request early."""

    @abstractmethod
    async def intercept(self, request: Request) -> Optional[Response]:
        """Return None to continue, or the Response to send instead."""
        ...


class AuthGate(Interceptor):
    """
    Admits a request only if its authorization header is an admin token.

    The allow-list is fetched from the AdminDirectory on every request, so
    changes to the directory apply immediately.
    """

    def __init__(self, directory: AdminDirectory):
        self.directory = directory

    async def authorize(self, request: Request) -> str:
        """
        Check the request and return the accepted token.

        Raises:
            UnauthorizedError: No authorization header.
            InternalError:     The allow-list lookup failed.
            ForbiddenError:    The token is not on the allow-list.
        """
        token = request.headers.get("authorization")
        if not token:
            raise UnauthorizedError()

        try:
            admins = await self.directory.get_admins()
        except Exception as e:
            logger.error(
                "[%s] Admin allow-list lookup failed: %s",
                request_id_var.get(""),
                str(e),
                exc_info=True,
            )
            raise InternalError(context={"error_type": type(e).__name__}) from e

        if token not in admins:
            raise ForbiddenError()
        return token

    async def intercept(self, request: Request) -> Optional[Response]:
        try:
            await self.authorize(request)
        except NoteAPIError as exc:
            return PlainTextResponse(exc.message, status_code=exc.status_code)
        return None


class InterceptorMiddleware(BaseHTTPMiddleware):
    """
    Runs interceptors in order for requests whose path is under `path_prefix`.

    Paths outside the prefix (e.g. /health, /docs) bypass the pipeline.
    """

    def __init__(
        self,
        app: ASGIApp,
        interceptors: Sequence[Interceptor],
        path_prefix: str = "/notes",
    ):
        super().__init__(app)
        self.interceptors = list(interceptors)
        self.path_prefix = path_prefix.rstrip("/")

    def _is_protected(self, path: str) -> bool:
        return path == self.path_prefix or path.startswith(self.path_prefix + "/")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self._is_protected(request.url.path):
            return await call_next(request)

        for interceptor in self.interceptors:
            response = await interceptor.intercept(request)
            if response is not None:
                return response

        return await call_next(request)
