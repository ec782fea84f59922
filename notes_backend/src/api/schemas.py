"""Pydantic models for request validation and response serialization."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class UserBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=30, description="User's username")
    email: EmailStr

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v):
        return _strip(v)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v):
        return v.lower()

class UserCreate(UserBase):
    password: str = Field(..., min_length=6, max_length=128)

class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v):
        return v.lower()

class UserOut(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class AuthResponse(BaseModel):
    message: str
    user: UserOut
    token: str

class ProfileResponse(BaseModel):
    user: UserOut


class NoteCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, description="Note content")
    tags: List[str] = Field(default_factory=list)

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _strip(v)

class NoteUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    tags: Optional[List[str]] = None

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _strip(v)

class NoteOut(BaseModel):
    id: int
    user_id: int
    title: str
    content: str
    tags: List[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class NoteResponse(BaseModel):
    note: NoteOut

class NoteMessageResponse(BaseModel):
    message: str
    note: NoteOut

class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int

class NoteListResponse(BaseModel):
    notes: List[NoteOut]
    pagination: Pagination

class TagListResponse(BaseModel):
    tags: List[str]

class MessageResponse(BaseModel):
    message: str
