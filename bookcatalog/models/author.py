import uuid
from datetime import date, datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class Author(SQLModel, table=True):
    __tablename__ = "authors"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)

    name: str = Field(max_length=100)
    last_name: str = Field(max_length=100, index=True)
    birth_date: Optional[date] = Field(default=None)
    biography: Optional[str] = Field(default=None)
    nationality: Optional[str] = Field(default=None, max_length=50)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    deleted_at: Optional[datetime] = Field(default=None)
