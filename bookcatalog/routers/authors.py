import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from ..core.security import get_current_user
from ..database import get_session
from ..schemas.catalog import AuthorCreate, AuthorRead, AuthorUpdate, MessageOut
from ..services.catalog_service import AuthorService

router = APIRouter(
    prefix="/authors",
    tags=["authors"],
    dependencies=[Depends(get_current_user)],
)


def get_author_service(session: Session = Depends(get_session)) -> AuthorService:
    return AuthorService(session)


@router.post(
    "",
    response_model=AuthorRead,
    status_code=status.HTTP_201_CREATED,
)
def create_author(payload: AuthorCreate, service: AuthorService = Depends(get_author_service)):
    return service.create(payload)


@router.get(
    "",
    response_model=List[AuthorRead],
)
def list_authors(search: Optional[str] = None, service: AuthorService = Depends(get_author_service)):
    """Autores vivos ordenados por apellido; `search` filtra por nombre o apellido."""
    return service.find_all(search)


@router.get("/export/csv")
def export_authors_csv(search: Optional[str] = None, service: AuthorService = Depends(get_author_service)):
    return Response(
        content=service.export_csv(search),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=autores.csv"},
    )


@router.get(
    "/{author_id}",
    response_model=AuthorRead,
)
def get_author(author_id: uuid.UUID, service: AuthorService = Depends(get_author_service)):
    return service.find_one(author_id)


@router.put(
    "/{author_id}",
    response_model=AuthorRead,
)
def update_author(
    author_id: uuid.UUID,
    payload: AuthorUpdate,
    service: AuthorService = Depends(get_author_service),
):
    return service.update(author_id, payload)


@router.delete(
    "/{author_id}",
    response_model=MessageOut,
)
def delete_author(author_id: uuid.UUID, service: AuthorService = Depends(get_author_service)):
    """Soft delete; se rechaza mientras algún libro lo referencie."""
    return service.remove(author_id)
