import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class Publisher(SQLModel, table=True):
    __tablename__ = "publishers"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)

    name: str = Field(max_length=100, index=True)
    country: Optional[str] = Field(default=None, max_length=100)
    foundation_year: Optional[int] = Field(default=None)
    description: Optional[str] = Field(default=None)
    website: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    deleted_at: Optional[datetime] = Field(default=None)
