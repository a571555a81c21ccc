import logging
import uuid
from datetime import datetime

from sqlmodel import Session

from ..core.errors import ConflictError, UnauthorizedError
from ..core.jwt import token_for_user
from ..core.security import PasswordHash, PlaintextPassword, hash_password, verify_password
from ..models.user import User, UserRole
from ..repositories.base import UserRepository
from ..schemas.auth import AuthOut, LoginIn, RegisterIn, UserPublic

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Credenciales inválidas"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def to_public(user: User) -> UserPublic:
    return UserPublic(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
    )


def _auth_out(user: User) -> AuthOut:
    return AuthOut(access_token=token_for_user(user), user=to_public(user))


class AuthService:
    def __init__(self, session: Session):
        self.users = UserRepository(session)

    def register(self, payload: RegisterIn) -> AuthOut:
        email = normalize_email(payload.email)
        if self.users.find_by_email(email, include_deleted=True) is not None:
            logger.warning("Registration rejected, email already taken: %s", email)
            raise ConflictError("El email ya está registrado")

        now = datetime.utcnow()
        user = User(
            id=uuid.uuid4(),
            email=email,
            password_hash=hash_password(PlaintextPassword(payload.password)),
            first_name=payload.first_name,
            last_name=payload.last_name,
            role=UserRole.USER,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        user = self.users.save(user, touch=False)
        logger.info("User registered: %s", user.id)
        return _auth_out(user)

    def authenticate(self, email: str, password: str) -> User:
        user = self.users.find_by_email(normalize_email(email))
        if user is None or not user.is_active:
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not verify_password(PlaintextPassword(password), PasswordHash(user.password_hash)):
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return user

    def login(self, payload: LoginIn) -> AuthOut:
        user = self.authenticate(payload.email, payload.password)
        return _auth_out(user)

    def get_profile(self, user_id: uuid.UUID) -> AuthOut:
        """Devuelve el perfil con un token recién firmado."""
        user = self.users.get(user_id)
        if user is None:
            raise UnauthorizedError("Usuario no encontrado")
        return _auth_out(user)
