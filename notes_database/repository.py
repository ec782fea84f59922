"""
Data access for users and notes.

Every note query that takes an owner id is scoped to that owner. Tags are
stored denormalized as a JSON array string; this module is the only place
that serializes and deserializes them.
"""
import json
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError

from notes_database.exceptions import DuplicateRecordError
from notes_database.models import Note, User, utcnow

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100
# SQLite INTEGER is a signed 64-bit value
SQLITE_MAX_INT = 2 ** 63 - 1
MAX_PAGE = SQLITE_MAX_INT // MAX_LIMIT


def serialize_tags(tags):
    return json.dumps(list(tags or []))


def deserialize_tags(raw):
    if not raw:
        return []
    return json.loads(raw)


def coerce_positive_int(value, default, maximum=None):
    """Returns value as an int in [1, maximum], or default when it is missing or unusable."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < 1 or (maximum is not None and number > maximum):
        return default
    return number


def _storable_id(value):
    return isinstance(value, int) and 1 <= value <= SQLITE_MAX_INT


def _commit(session):
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        if "unique" in str(exc.orig).lower():
            logger.warning("Unique constraint violated: %s", exc.orig)
            raise DuplicateRecordError() from exc
        raise


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class NoteRecord:
    """A note detached from the session, with tags as a list."""
    id: int
    user_id: int
    title: str
    content: str
    tags: List[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, note):
        return cls(
            id=note.id,
            user_id=note.user_id,
            title=note.title,
            content=note.content,
            tags=deserialize_tags(note.tags),
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class NoteChanges:
    """
    Partial update for a note. A field is applied only when it is not None.
    """
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = None

    def is_empty(self):
        return self.title is None and self.content is None and self.tags is None

    def as_columns(self):
        columns = {}
        if self.title is not None:
            columns["title"] = self.title
        if self.content is not None:
            columns["content"] = self.content
        if self.tags is not None:
            columns["tags"] = serialize_tags(self.tags)
        return columns


# PUBLIC_INTERFACE
@dataclass
class NotePage:
    notes: List[NoteRecord]
    page: int
    limit: int
    total: int
    total_pages: int = field(init=False)

    def __post_init__(self):
        self.total_pages = math.ceil(self.total / self.limit) if self.limit else 0

    def pagination(self):
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
        }


# PUBLIC_INTERFACE
class NoteRepository:
    """Owner-scoped note queries on top of a SQLAlchemy session."""

    def __init__(self, session):
        self.session = session

    def create(self, owner_id, title, content, tags=None):
        """
        Inserts a note and returns it freshly loaded.

        created_at and updated_at receive the same timestamp.
        """
        now = utcnow()
        note = Note(
            user_id=owner_id,
            title=title,
            content=content,
            tags=serialize_tags(tags),
            created_at=now,
            updated_at=now,
        )
        self.session.add(note)
        _commit(self.session)
        logger.info("Created note", extra={"note_id": note.id, "user_id": owner_id})
        return self.find_by_id(note.id)

    def find_by_id(self, note_id):
        """Returns the note or None. Ownership is not checked here."""
        if not _storable_id(note_id):
            return None
        note = self.session.get(Note, note_id, populate_existing=True)
        if note is None:
            return None
        return NoteRecord.from_model(note)

    def _filtered(self, owner_id, search=None, tag=None):
        query = self.session.query(Note).filter(Note.user_id == owner_id)
        if search:
            query = query.filter(
                or_(
                    Note.title.icontains(search, autoescape=True),
                    Note.content.icontains(search, autoescape=True),
                )
            )
        if tag:
            # Match the JSON-quoted element so "wo" never hits "work".
            query = query.filter(func.instr(Note.tags, json.dumps(tag)) > 0)
        return query

    def find_all_by_user(self, owner_id, search=None, tag=None, page=None, limit=None):
        """
        Returns one page of the owner's notes, most recently updated first.

        page and limit fall back to 1 and 20 when missing, non-numeric or < 1;
        limit is capped at 100. A page whose offset would not fit in SQLite
        falls back to 1. Pages past the end come back empty.
        """
        page = coerce_positive_int(page, DEFAULT_PAGE, maximum=MAX_PAGE)
        limit = min(coerce_positive_int(limit, DEFAULT_LIMIT), MAX_LIMIT)

        query = self._filtered(owner_id, search=search, tag=tag)
        total = query.order_by(None).count()
        notes = (
            query.order_by(Note.updated_at.desc(), Note.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return NotePage(
            notes=[NoteRecord.from_model(note) for note in notes],
            page=page,
            limit=limit,
            total=total,
        )

    def update(self, note_id, changes):
        """
        Applies the fields present in changes and bumps updated_at.

        With nothing to apply the note is returned as is, without a write.
        Returns None if the note does not exist.
        """
        if changes.is_empty() or not _storable_id(note_id):
            return self.find_by_id(note_id)
        columns = changes.as_columns()
        columns["updated_at"] = utcnow()
        self.session.query(Note).filter(Note.id == note_id).update(
            columns, synchronize_session=False
        )
        _commit(self.session)
        logger.info("Updated note", extra={"note_id": note_id})
        return self.find_by_id(note_id)

    def delete(self, note_id):
        """Deletes the note. Returns False if there was nothing to delete."""
        if not _storable_id(note_id):
            return False
        deleted = self.session.query(Note).filter(Note.id == note_id).delete(
            synchronize_session=False
        )
        _commit(self.session)
        if deleted:
            logger.info("Deleted note", extra={"note_id": note_id})
        return bool(deleted)

    def get_all_tags_by_user(self, owner_id):
        rows = self.session.query(Note.tags).filter(Note.user_id == owner_id).all()
        tags = set()
        for (raw,) in rows:
            tags.update(deserialize_tags(raw))
        return sorted(tags)


# PUBLIC_INTERFACE
class UserRepository:
    """User lookups and registration."""

    def __init__(self, session):
        self.session = session

    def create(self, username, email, hashed_password):
        user = User(username=username, email=email, hashed_password=hashed_password)
        self.session.add(user)
        _commit(self.session)
        self.session.refresh(user)
        logger.info("Registered user", extra={"user_id": user.id})
        return user

    def find_by_id(self, user_id):
        return self.session.get(User, user_id)

    def find_by_email(self, email):
        return self.session.query(User).filter(User.email == email).first()

    def find_by_username(self, username):
        return self.session.query(User).filter(User.username == username).first()
