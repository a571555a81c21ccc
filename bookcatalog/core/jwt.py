from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import jwt

from ..config import settings


def create_access_token(data: Dict[str, Any]) -> str:
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"iat": int(now.timestamp()), "exp": int(expire.timestamp())})
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> Dict[str, Any]:
    """Raises ``jose.JWTError`` (incl. ``ExpiredSignatureError``) on a bad token."""
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])


def token_for_user(user) -> str:
    """Firma un token con el contrato {sub, email, role}."""
    return create_access_token({"sub": str(user.id), "email": user.email, "role": user.role.value})
