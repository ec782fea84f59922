"""
Ownership guard for single-note routes.

Lookup ends in exactly one of three states: the note does not exist, it
belongs to someone else, or the requester owns it. Collection routes never
go through here; they are scoped by the authenticated identity directly.
"""
import enum
import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from notes_database.repository import NoteRepository

from .dependencies import get_db
from .errors import ForbiddenError, NotFoundError
from .security import CurrentUser, get_current_user

logger = logging.getLogger(__name__)


class NoteAccess(enum.Enum):
    AUTHORIZED = "authorized"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


# PUBLIC_INTERFACE
def check_note_access(notes: NoteRepository, note_id: int, requester_id: int):
    """Returns (NoteAccess, note); note is None unless access is AUTHORIZED."""
    note = notes.find_by_id(note_id)
    if note is None:
        return NoteAccess.NOT_FOUND, None
    if note.user_id != requester_id:
        return NoteAccess.FORBIDDEN, None
    return NoteAccess.AUTHORIZED, note


# PUBLIC_INTERFACE
def get_owned_note(
    note_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Dependency resolving the path note for its owner, or raising 404/403."""
    access, note = check_note_access(NoteRepository(db), note_id, current_user.id)
    if access is NoteAccess.NOT_FOUND:
        raise NotFoundError("Note not found")
    if access is NoteAccess.FORBIDDEN:
        logger.warning(
            "Denied access to note owned by another user",
            extra={"note_id": note_id, "user_id": current_user.id},
        )
        raise ForbiddenError()
    return note
