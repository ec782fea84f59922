import pytest

from notes_backend.src.api.errors import ForbiddenError, NotFoundError
from notes_backend.src.api.ownership import NoteAccess, check_note_access, get_owned_note
from notes_backend.src.api.security import CurrentUser


def test_owner_is_authorized(notes_repo, owner):
    note = notes_repo.create(owner.id, "t", "c")
    access, resolved = check_note_access(notes_repo, note.id, owner.id)
    assert access is NoteAccess.AUTHORIZED
    assert resolved == note

def test_other_user_is_forbidden(notes_repo, owner, other_owner):
    note = notes_repo.create(owner.id, "t", "c")
    assert check_note_access(notes_repo, note.id, other_owner.id) == (NoteAccess.FORBIDDEN, None)

def test_missing_note_is_not_found(notes_repo, owner):
    assert check_note_access(notes_repo, 999, owner.id) == (NoteAccess.NOT_FOUND, None)

def test_dependency_raises_typed_errors(db_session, notes_repo, owner, other_owner):
    note = notes_repo.create(owner.id, "t", "c")
    assert get_owned_note(note.id, db=db_session, current_user=CurrentUser(id=owner.id)) == note
    with pytest.raises(ForbiddenError):
        get_owned_note(note.id, db=db_session, current_user=CurrentUser(id=other_owner.id))
    with pytest.raises(NotFoundError):
        get_owned_note(note.id + 1, db=db_session, current_user=CurrentUser(id=owner.id))

def test_deleted_note_is_not_found_for_owner(notes_repo, owner):
    note = notes_repo.create(owner.id, "t", "c")
    notes_repo.delete(note.id)
    assert check_note_access(notes_repo, note.id, owner.id)[0] is NoteAccess.NOT_FOUND
