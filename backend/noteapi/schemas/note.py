"""
NoteAPI Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract for notes.
Why:   Automatic serialization and OpenAPI doc generation.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate Swagger/OpenAPI documentation automatically.

Design Decision:
    Body fields are optional on every write. Create and Replace store a
    missing field as null; Partial update keeps the current value instead.
    Present fields must be strings, otherwise FastAPI answers 422.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Domain / Response Models
# ══════════════════════════════════════════════════════════════════════════


class Note(BaseModel):
    """
    What:  A stored note.
    Who:   Held by NoteStore; returned by GET /notes and GET /notes/{id}.

    Invariant: `id` is assigned by the store and never changes afterwards.
    """
    id: int = Field(description="Store-assigned note identifier")
    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note body text")
    user: Optional[str] = Field(default=None, description="Owner identifier")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteWrite(BaseModel):
    """
    What:  Request body for POST /notes, PUT /notes/{id} and PATCH /notes/{id}.
    """
    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note body text")
    user: Optional[str] = Field(default=None, description="Owner identifier")


# ══════════════════════════════════════════════════════════════════════════
# Health
# ══════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health for monitoring and container health checks.
    """
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    note_count: int = Field(description="Number of notes currently stored")
    admin_directory: str = Field(description="Allow-list status: available, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
