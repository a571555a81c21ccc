import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from sqlmodel import SQLModel, Field


# ─────────────────────────────
#   INPUT
# ─────────────────────────────

class BookBase(SQLModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    isbn: Optional[str] = Field(default=None, min_length=10, max_length=20)
    publication_year: Optional[int] = Field(default=None, ge=1000, le=date.today().year)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(default=0, ge=0)
    image_url: Optional[str] = Field(default=None, max_length=500)
    is_available: bool = True


class BookCreate(BookBase):
    author_id: uuid.UUID
    publisher_id: uuid.UUID
    genre_id: uuid.UUID


class BookUpdate(SQLModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    isbn: Optional[str] = Field(default=None, min_length=10, max_length=20)
    publication_year: Optional[int] = Field(default=None, ge=1000, le=date.today().year)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    image_url: Optional[str] = Field(default=None, max_length=500)
    is_available: Optional[bool] = None
    author_id: Optional[uuid.UUID] = None
    publisher_id: Optional[uuid.UUID] = None
    genre_id: Optional[uuid.UUID] = None


class BookFilter(SQLModel):
    """Filtros y orden del listado; la paginación viaja aparte."""

    search: Optional[str] = None
    author_id: Optional[uuid.UUID] = None
    publisher_id: Optional[uuid.UUID] = None
    genre_id: Optional[uuid.UUID] = None
    min_price: Optional[Decimal] = Field(default=None, ge=0)
    max_price: Optional[Decimal] = Field(default=None, ge=0)
    min_publication_year: Optional[int] = None
    max_publication_year: Optional[int] = None
    available_only: Optional[bool] = None
    sort_by: str = "createdAt"
    sort_order: Literal["ASC", "DESC"] = "DESC"


# ─────────────────────────────
#   OUTPUT
# ─────────────────────────────

class AuthorSummary(SQLModel):
    name: str
    last_name: Optional[str] = None


class NamedSummary(SQLModel):
    name: str


class BookRead(SQLModel):
    id: uuid.UUID
    title: str
    description: Optional[str] = None
    isbn: Optional[str] = None
    publication_year: Optional[int] = None
    price: float
    stock_quantity: int
    image_url: Optional[str] = None
    is_available: bool
    author_id: uuid.UUID
    publisher_id: uuid.UUID
    genre_id: uuid.UUID
    author_name: Optional[str] = None
    publisher_name: Optional[str] = None
    genre_name: Optional[str] = None
    author: Optional[AuthorSummary] = None
    publisher: Optional[NamedSummary] = None
    genre: Optional[NamedSummary] = None
    created_at: datetime
    updated_at: datetime


class BookPage(SQLModel):
    data: List[BookRead]
    total: int
    page: int
    total_pages: int


class ImageUploadRead(SQLModel):
    image_url: str
