"""
NoteAPI Backend — In-Memory Note Store
========================================

What:  Owns every Note and exposes the five data-access operations the
       routes need (get_all, get_by_id, add, update, remove_by_id).
Why:   Keeps storage behind one object so routes never touch shared state
       directly, and tests can build a fresh store per case.
Who:   Created by the app factory and attached to `app.state.note_store`;
       injected into route handlers via `get_note_store`.
When:  Lives as long as the app instance; cleared on shutdown.

Concurrency:
    All methods are synchronous and run on the event loop thread, so each
    call is atomic. There is no transaction spanning a lookup and the
    following update/remove: two requests may both pass the existence check
    before either mutates.
"""

import logging
from typing import Dict, List, Optional

from fastapi import Request

from noteapi.schemas.note import Note

logger = logging.getLogger(__name__)


class NoteStore:
    """
    In-memory note collection keyed by id.

    Ids come from a counter starting at 1 and are never reused, even after
    deletion. Reads return copies; the stored instances are only changed
    through `update`.
    """

    def __init__(self) -> None:
        self._notes: Dict[int, Note] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._notes)

    def get_all(self) -> List[Note]:
        """Return copies of all notes in insertion order."""
        return [note.model_copy() for note in self._notes.values()]

    def get_by_id(self, note_id: Optional[int]) -> Optional[Note]:
        """Return a copy of the note with `note_id`, or None."""
        if note_id is None:
            return None
        note = self._notes.get(note_id)
        return note.model_copy() if note is not None else None

    def add(
        self,
        title: Optional[str],
        content: Optional[str],
        user: Optional[str],
    ) -> Note:
        """
        Insert a new note and assign its id.

        Returns:
            A copy of the stored note (with its new id).
        """
        note = Note(id=self._next_id, title=title, content=content, user=user)
        self._notes[note.id] = note
        self._next_id += 1
        logger.debug("Note %d added", note.id)
        return note.model_copy()

    def update(
        self,
        note_id: int,
        title: Optional[str],
        content: Optional[str],
        user: Optional[str],
    ) -> None:
        """Overwrite title, content and user of an existing note; no-op if missing."""
        note = self._notes.get(note_id)
        if note is None:
            return
        note.title = title
        note.content = content
        note.user = user
        logger.debug("Note %d updated", note_id)

    def remove_by_id(self, note_id: int) -> None:
        """Delete the note with `note_id`; no-op if missing."""
        if self._notes.pop(note_id, None) is not None:
            logger.debug("Note %d removed", note_id)

    def clear(self) -> None:
        """Drop every note. Called on application shutdown."""
        self._notes.clear()


# ── FastAPI Dependency ────────────────────────────────────────────────────
def get_note_store(request: Request) -> NoteStore:
    """
    FastAPI dependency returning the store owned by the running app.

    Example usage in a route:
        @router.get("")
        async def list_notes(store: NoteStore = Depends(get_note_store)):
            return store.get_all()
    """
    return request.app.state.note_store
