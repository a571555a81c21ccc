import hashlib
import hmac
import os
from typing import NewType
import uuid

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session
from jose.exceptions import ExpiredSignatureError, JWTError

from ..config import settings
from ..database import get_session
from ..models.user import User
from ..repositories.base import UserRepository
from .errors import UnauthorizedError
from .jwt import decode_access_token


ALGORITHM = "pbkdf2_sha256"
ITERATIONS = 100_000
SALT_BYTES = 16

# Distinct types so a plaintext can never be stored, and a hash never re-hashed.
PlaintextPassword = NewType("PlaintextPassword", str)
PasswordHash = NewType("PasswordHash", str)


def _pbkdf2_hash(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, ITERATIONS)


def hash_password(password: PlaintextPassword) -> PasswordHash:
    salt = os.urandom(SALT_BYTES)
    digest = _pbkdf2_hash(password, salt)
    return PasswordHash(f"{ALGORITHM}${salt.hex()}${digest.hex()}")


def verify_password(password: PlaintextPassword, stored: PasswordHash) -> bool:
    try:
        algorithm, salt_hex, hash_hex = stored.strip().split("$")
    except ValueError:
        return False
    if algorithm != ALGORITHM:
        return False
    try:
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    candidate = _pbkdf2_hash(password, salt)
    return hmac.compare_digest(candidate, expected)


oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.api_prefix}/auth/token")


def get_current_user(
    token: str = Depends(oauth2_scheme),
    session: Session = Depends(get_session),
) -> User:
    try:
        payload = decode_access_token(token)
    except ExpiredSignatureError:
        raise UnauthorizedError("Token expirado")
    except JWTError:
        raise UnauthorizedError("Token inválido")

    sub = payload.get("sub")
    if sub is None:
        raise UnauthorizedError("Token inválido: falta el sujeto")
    try:
        user_id = uuid.UUID(str(sub))
    except ValueError:
        raise UnauthorizedError("Token inválido: formato de sujeto incorrecto")

    user = UserRepository(session).get(user_id)
    if user is None or not user.is_active:
        raise UnauthorizedError("Usuario no encontrado")
    return user
