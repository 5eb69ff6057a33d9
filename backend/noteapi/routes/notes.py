"""
NoteAPI Backend — Notes Route Handlers
========================================

What:  The six note operations under /notes.
Why:   The whole public surface of the service apart from /health.
How:   Each handler parses its inputs, makes one or two NoteStore calls and
       returns. Authorization has already happened in the AuthGate.

Route Inventory:
    POST   /notes        create          → 204
    GET    /notes        list own notes  → 200 JSON array
    GET    /notes/{id}   fetch one       → 200 Note | 404 text
    PUT    /notes/{id}   replace         → 204 | 404 text
    PATCH  /notes/{id}   partial update  → 204 | 404 text
    DELETE /notes/{id}   remove          → 204 | 404 text

Path ids:
    The id segment is parsed like an integer prefix: "12" and "12abc" both
    address note 12. A segment without leading digits addresses no note, and
    the 404 text renders it as "NaN". Only ASCII digits count.

Trailing slashes:
    POST /notes/ and GET /notes/ are served directly (no redirect).
"""

import logging
import re
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Response

from noteapi.exceptions import NotFoundError
from noteapi.schemas.note import Note, NoteWrite
from noteapi.services.note_store import NoteStore, get_note_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["Notes"])

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_note_id(raw: str) -> Optional[int]:
    """
    Parse the leading integer of a path segment.

    Returns None (the not-a-number case) when `raw` does not start with
    digits after optional whitespace and sign.
    """
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1))


def format_note_id(note_id: Optional[int]) -> str:
    return "NaN" if note_id is None else str(note_id)


def _missing_for_read(note_id: Optional[int]) -> NotFoundError:
    return NotFoundError(
        message=f"Note with ID {format_note_id(note_id)} was not found.",
        note_id=note_id,
    )


def _missing_for_write(note_id: Optional[int]) -> NotFoundError:
    return NotFoundError(
        message=f"Die Notiz mit ID {format_note_id(note_id)} wurde nicht gefunden.",
        note_id=note_id,
    )


@router.post("/", status_code=204, response_class=Response, include_in_schema=False)
@router.post(
    "",
    status_code=204,
    response_class=Response,
    summary="Create a note",
)
async def create_note(
    payload: Optional[NoteWrite] = None,
    store: NoteStore = Depends(get_note_store),
) -> Response:
    """Store a new note; the store assigns its id. Missing fields are stored as null."""
    body = payload or NoteWrite()
    note = store.add(body.title, body.content, body.user)
    logger.info("Created note %d", note.id)
    return Response(status_code=204)


@router.get("/", response_model=List[Note], include_in_schema=False)
@router.get(
    "",
    response_model=List[Note],
    summary="List the caller's notes",
)
async def list_notes(
    authorization: str = Header(),
    store: NoteStore = Depends(get_note_store),
) -> List[Note]:
    """
    Return every note whose `user` equals the caller's authorization header.

    The header value doubles as the owner key; no other notes are returned.
    """
    return [note for note in store.get_all() if note.user == authorization]


@router.get(
    "/{note_id}",
    response_model=Note,
    responses={404: {"description": "Note not found", "content": {"text/plain": {}}}},
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    store: NoteStore = Depends(get_note_store),
) -> Note:
    parsed = parse_note_id(note_id)
    note = store.get_by_id(parsed)
    if note is None:
        raise _missing_for_read(parsed)
    return note


@router.put(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Note not found", "content": {"text/plain": {}}}},
    summary="Replace a note",
)
async def replace_note(
    note_id: str,
    payload: Optional[NoteWrite] = None,
    store: NoteStore = Depends(get_note_store),
) -> Response:
    """Overwrite title, content and user. Missing fields become null."""
    parsed = parse_note_id(note_id)
    if store.get_by_id(parsed) is None:
        raise _missing_for_write(parsed)

    body = payload or NoteWrite()
    store.update(parsed, body.title, body.content, body.user)
    logger.info("Replaced note %d", parsed)
    return Response(status_code=204)


@router.patch(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Note not found", "content": {"text/plain": {}}}},
    summary="Partially update a note",
)
async def patch_note(
    note_id: str,
    payload: Optional[NoteWrite] = None,
    store: NoteStore = Depends(get_note_store),
) -> Response:
    """Overwrite only the fields present (and non-null) in the body."""
    parsed = parse_note_id(note_id)
    current = store.get_by_id(parsed)
    if current is None:
        raise _missing_for_write(parsed)

    body = payload or NoteWrite()
    store.update(
        parsed,
        body.title if body.title is not None else current.title,
        body.content if body.content is not None else current.content,
        body.user if body.user is not None else current.user,
    )
    logger.info("Patched note %d", parsed)
    return Response(status_code=204)


@router.delete(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Note not found", "content": {"text/plain": {}}}},
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    store: NoteStore = Depends(get_note_store),
) -> Response:
    parsed = parse_note_id(note_id)
    if store.get_by_id(parsed) is None:
        raise _missing_for_write(parsed)

    store.remove_by_id(parsed)
    logger.info("Deleted note %d", parsed)
    return Response(status_code=204)
