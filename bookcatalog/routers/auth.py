from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session

from ..core.jwt import token_for_user
from ..core.security import get_current_user
from ..database import get_session
from ..models.user import User
from ..schemas.auth import AuthOut, LoginIn, RegisterIn, TokenOut
from ..services.auth_service import AuthService


router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(session)


@router.post(
    "/register",
    response_model=AuthOut,
    status_code=status.HTTP_201_CREATED,
)
def register_user(
    payload: RegisterIn,
    service: AuthService = Depends(get_auth_service),
):
    """Registrar un usuario nuevo (rol `user`) y devolver su token."""
    return service.register(payload)


@router.post(
    "/login",
    response_model=AuthOut,
    status_code=status.HTTP_200_OK,
)
def login(payload: LoginIn, service: AuthService = Depends(get_auth_service)):
    return service.login(payload)


@router.get(
    "/profile",
    response_model=AuthOut,
    status_code=status.HTTP_200_OK,
)
def profile(
    current_user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    """Perfil del usuario autenticado con un token refrescado."""
    return service.get_profile(current_user.id)


@router.post(
    "/token",
    response_model=TokenOut,
    status_code=status.HTTP_200_OK,
)
def token(form_data: OAuth2PasswordRequestForm = Depends(), service: AuthService = Depends(get_auth_service)):
    # OAuth2PasswordRequestForm usa 'username' como el campo de email
    user = service.authenticate(form_data.username, form_data.password)
    return TokenOut(access_token=token_for_user(user), token_type="bearer")
