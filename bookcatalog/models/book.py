import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Index
from sqlmodel import SQLModel, Field


class Book(SQLModel, table=True):
    __tablename__ = "books"
    __table_args__ = (Index("ix_books_title_author_genre", "title", "author_id", "genre_id"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)

    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)
    # Unique across live and soft-deleted rows
    isbn: Optional[str] = Field(default=None, max_length=20, unique=True)
    publication_year: Optional[int] = Field(default=None)
    price: Decimal = Field(max_digits=10, decimal_places=2)
    stock_quantity: int = Field(default=0)
    image_url: Optional[str] = Field(default=None, max_length=500)
    is_available: bool = Field(default=True)

    author_id: uuid.UUID = Field(foreign_key="authors.id", ondelete="RESTRICT", index=True)
    publisher_id: uuid.UUID = Field(foreign_key="publishers.id", ondelete="RESTRICT", index=True)
    genre_id: uuid.UUID = Field(foreign_key="genres.id", ondelete="RESTRICT", index=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    deleted_at: Optional[datetime] = Field(default=None)
