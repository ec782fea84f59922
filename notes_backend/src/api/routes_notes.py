from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from notes_database.repository import NoteChanges, NoteRecord, NoteRepository

from .dependencies import get_db
from .ownership import get_owned_note
from .schemas import (
    MessageResponse,
    NoteCreate,
    NoteListResponse,
    NoteMessageResponse,
    NoteResponse,
    NoteUpdate,
    TagListResponse,
)
from .security import CurrentUser, get_current_user

router = APIRouter(prefix="/api/notes", tags=["Notes"])


# PUBLIC_INTERFACE
@router.post("", response_model=NoteMessageResponse, status_code=status.HTTP_201_CREATED, summary="Create a new note")
def create_note(
    note: NoteCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Create a new note for the authenticated user.
    """
    created = NoteRepository(db).create(current_user.id, note.title, note.content, note.tags)
    return {"message": "Note created successfully", "note": created}

# PUBLIC_INTERFACE
@router.get("", response_model=NoteListResponse, summary="List the user's notes")
def list_notes(
    search: Optional[str] = Query(None, description="Search in title and content"),
    tag: Optional[str] = Query(None, description="Filter by tag"),
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    limit: Optional[str] = Query(None, description="Items per page (default 20, max 100)"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Get one page of the authenticated user's notes, most recently updated first.
    Unusable page/limit values fall back to their defaults.
    """
    result = NoteRepository(db).find_all_by_user(
        current_user.id, search=search, tag=tag, page=page, limit=limit
    )
    return {"notes": result.notes, "pagination": result.pagination()}

# PUBLIC_INTERFACE
@router.get("/tags", response_model=TagListResponse, summary="List distinct tags")
def list_tags(db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    """
    Distinct tags across the user's notes, sorted ascending.
    """
    return {"tags": NoteRepository(db).get_all_tags_by_user(current_user.id)}

# PUBLIC_INTERFACE
@router.get("/{note_id}", response_model=NoteResponse, summary="Get a single note")
def get_note(note: NoteRecord = Depends(get_owned_note)):
    return {"note": note}

# PUBLIC_INTERFACE
@router.put("/{note_id}", response_model=NoteMessageResponse, summary="Update a note")
def update_note(
    note_update: NoteUpdate,
    note: NoteRecord = Depends(get_owned_note),
    db: Session = Depends(get_db),
):
    """
    Partially update a note: only the fields sent are changed.
    """
    changes = NoteChanges(**note_update.model_dump(exclude_none=True))
    updated = NoteRepository(db).update(note.id, changes)
    return {"message": "Note updated successfully", "note": updated}

# PUBLIC_INTERFACE
@router.delete("/{note_id}", response_model=MessageResponse, summary="Delete a note")
def delete_note(note: NoteRecord = Depends(get_owned_note), db: Session = Depends(get_db)):
    NoteRepository(db).delete(note.id)
    return {"message": "Note deleted successfully"}
