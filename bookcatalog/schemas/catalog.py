"""Schemas for the secondary catalog resources: authors, publishers, genres."""

import uuid
from datetime import date, datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class MessageOut(SQLModel):
    message: str


# ─────────────────────────────
#   AUTHORS
# ─────────────────────────────

class AuthorCreate(SQLModel):
    name: str = Field(min_length=2, max_length=100)
    last_name: str = Field(min_length=2, max_length=100)
    birth_date: Optional[date] = None
    biography: Optional[str] = None
    nationality: Optional[str] = Field(default=None, min_length=2, max_length=50)
    is_active: bool = True


class AuthorUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    birth_date: Optional[date] = None
    biography: Optional[str] = None
    nationality: Optional[str] = Field(default=None, min_length=2, max_length=50)
    is_active: Optional[bool] = None


class AuthorRead(SQLModel):
    id: uuid.UUID
    name: str
    last_name: str
    birth_date: Optional[date] = None
    biography: Optional[str] = None
    nationality: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


# ─────────────────────────────
#   PUBLISHERS
# ─────────────────────────────

class PublisherCreate(SQLModel):
    name: str = Field(min_length=2, max_length=100)
    country: Optional[str] = Field(default=None, min_length=2, max_length=100)
    foundation_year: Optional[int] = None
    description: Optional[str] = None
    website: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = True


class PublisherUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    country: Optional[str] = Field(default=None, min_length=2, max_length=100)
    foundation_year: Optional[int] = None
    description: Optional[str] = None
    website: Optional[str] = Field(default=None, max_length=255)
    is_active: Optional[bool] = None


class PublisherRead(SQLModel):
    id: uuid.UUID
    name: str
    country: Optional[str] = None
    foundation_year: Optional[int] = None
    description: Optional[str] = None
    website: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


# ─────────────────────────────
#   GENRES
# ─────────────────────────────

class GenreCreate(SQLModel):
    name: str = Field(min_length=2, max_length=50)
    description: Optional[str] = None
    is_active: bool = True


class GenreUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class GenreRead(SQLModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
