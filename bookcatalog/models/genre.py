import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class Genre(SQLModel, table=True):
    __tablename__ = "genres"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)

    name: str = Field(max_length=50, index=True)
    description: Optional[str] = Field(default=None)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    deleted_at: Optional[datetime] = Field(default=None)
