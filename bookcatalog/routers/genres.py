import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from ..core.security import get_current_user
from ..database import get_session
from ..schemas.catalog import GenreCreate, GenreRead, GenreUpdate, MessageOut
from ..services.catalog_service import GenreService

router = APIRouter(
    prefix="/genres",
    tags=["genres"],
    dependencies=[Depends(get_current_user)],
)


def get_genre_service(session: Session = Depends(get_session)) -> GenreService:
    return GenreService(session)


@router.post(
    "",
    response_model=GenreRead,
    status_code=status.HTTP_201_CREATED,
)
def create_genre(payload: GenreCreate, service: GenreService = Depends(get_genre_service)):
    return service.create(payload)


@router.get(
    "",
    response_model=List[GenreRead],
)
def list_genres(search: Optional[str] = None, service: GenreService = Depends(get_genre_service)):
    return service.find_all(search)


@router.get("/export/csv")
def export_genres_csv(search: Optional[str] = None, service: GenreService = Depends(get_genre_service)):
    return Response(
        content=service.export_csv(search),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=generos.csv"},
    )


@router.get(
    "/{genre_id}",
    response_model=GenreRead,
)
def get_genre(genre_id: uuid.UUID, service: GenreService = Depends(get_genre_service)):
    return service.find_one(genre_id)


@router.put(
    "/{genre_id}",
    response_model=GenreRead,
)
def update_genre(
    genre_id: uuid.UUID,
    payload: GenreUpdate,
    service: GenreService = Depends(get_genre_service),
):
    return service.update(genre_id, payload)


@router.delete(
    "/{genre_id}",
    response_model=MessageOut,
)
def delete_genre(genre_id: uuid.UUID, service: GenreService = Depends(get_genre_service)):
    return service.remove(genre_id)
