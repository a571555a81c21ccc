import re
import uuid

from pydantic import EmailStr, field_validator
from sqlmodel import SQLModel, Field

from ..models.user import UserRole

# Mayúscula, minúscula y un número o carácter especial
_PASSWORD_RE = re.compile(r"^(?=.*[A-Z])(?=.*[a-z])(?=.*(\d|\W)).*$")


class RegisterIn(SQLModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)
    first_name: str = Field(min_length=2, max_length=50)
    last_name: str = Field(min_length=2, max_length=50)

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not _PASSWORD_RE.match(value):
            raise ValueError(
                "La contraseña debe contener al menos una mayúscula, una minúscula "
                "y un número o carácter especial"
            )
        return value


class LoginIn(SQLModel):
    email: EmailStr
    password: str


class UserPublic(SQLModel):
    id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    role: UserRole


class AuthOut(SQLModel):
    access_token: str
    token_type: str = "bearer"
    user: UserPublic


class TokenOut(SQLModel):
    access_token: str
    token_type: str
