import uuid
from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)

    # Always stored lower-cased; see services.auth_service.normalize_email
    email: str = Field(index=True, unique=True, max_length=255)
    password_hash: str
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    role: UserRole = Field(default=UserRole.USER)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    deleted_at: Optional[datetime] = Field(default=None)
