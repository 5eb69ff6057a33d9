"""
NoteAPI Backend — Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for every error the API reports.
Why:   Each exception carries its HTTP status and the exact plain-text body
       clients receive, so handlers and the AuthGate never format errors ad hoc.
How:   Each exception class carries a message, a status code and an optional
       context dict. Global exception handlers (registered in main.py) turn
       them into PlainTextResponses; the AuthGate does the same inside the
       interceptor pipeline.
Who:   Raised by the AuthGate, admin directories and note routes.

Exception Hierarchy:
    NoteAPIError (base)               → 500
    ├── UnauthorizedError             → 401 "Unauthorized"
    ├── ForbiddenError                → 403 "Forbidden"
    ├── InternalError                 → 500 "Internal Server Error"
    │   └── AdminDirectoryError       → 500 (allow-list lookup failed)
    └── NotFoundError                 → 404 (route-specific message)
"""

from typing import Any, Dict, Optional


class NoteAPIError(Exception):
    """
    Base exception for all NoteAPI application errors.

    Attributes:
        message:      Body returned to the client (plain text)
        status_code:  HTTP status the error maps to
        context:      Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "Internal Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class UnauthorizedError(NoteAPIError):
    """
    Raised when a request carries no authorization header.

    HTTP:    401 Unauthorized
    """

    status_code = 401

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Unauthorized", context=context)


class ForbiddenError(NoteAPIError):
    """
    Raised when the authorization token is not on the admin allow-list.

    HTTP:    403 Forbidden
    """

    status_code = 403

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Forbidden", context=context)


class InternalError(NoteAPIError):
    """
    Raised when the server cannot complete a request for reasons the client
    cannot fix. The body is always generic; details live in `context` and logs.

    HTTP:    500 Internal Server Error
    """

    status_code = 500

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Internal Server Error", context=context)


class AdminDirectoryError(InternalError):
    """
    Raised when the admin allow-list cannot be read.

    When:    Admin file missing or unreadable, invalid JSON, wrong payload shape.
    HTTP:    500 Internal Server Error (via the AuthGate)
    """

    def __init__(self, reason: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(context=ctx)
        self.reason = reason

    def __str__(self) -> str:
        return self.reason


class NotFoundError(NoteAPIError):
    """
    Raised when no Note exists for the requested id.

    The message is chosen by the route: reads and mutations answer with
    different texts, so the route passes the full body in.

    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        message: str,
        note_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = "note"
        ctx["note_id"] = note_id
        super().__init__(message=message, context=ctx)
