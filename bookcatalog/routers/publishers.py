import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from ..core.security import get_current_user
from ..database import get_session
from ..schemas.catalog import PublisherCreate, PublisherRead, PublisherUpdate, MessageOut
from ..services.catalog_service import PublisherService

router = APIRouter(
    prefix="/publishers",
    tags=["publishers"],
    dependencies=[Depends(get_current_user)],
)


def get_publisher_service(session: Session = Depends(get_session)) -> PublisherService:
    return PublisherService(session)


@router.post(
    "",
    response_model=PublisherRead,
    status_code=status.HTTP_201_CREATED,
)
def create_publisher(payload: PublisherCreate, service: PublisherService = Depends(get_publisher_service)):
    return service.create(payload)


@router.get(
    "",
    response_model=List[PublisherRead],
)
def list_publishers(search: Optional[str] = None, service: PublisherService = Depends(get_publisher_service)):
    """Editoriales vivas ordenadas por nombre."""
    return service.find_all(search)


@router.get("/export/csv")
def export_publishers_csv(search: Optional[str] = None, service: PublisherService = Depends(get_publisher_service)):
    return Response(
        content=service.export_csv(search),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=editoriales.csv"},
    )


@router.get(
    "/{publisher_id}",
    response_model=PublisherRead,
)
def get_publisher(publisher_id: uuid.UUID, service: PublisherService = Depends(get_publisher_service)):
    return service.find_one(publisher_id)


@router.put(
    "/{publisher_id}",
    response_model=PublisherRead,
)
def update_publisher(
    publisher_id: uuid.UUID,
    payload: PublisherUpdate,
    service: PublisherService = Depends(get_publisher_service),
):
    return service.update(publisher_id, payload)


@router.delete(
    "/{publisher_id}",
    response_model=MessageOut,
)
def delete_publisher(publisher_id: uuid.UUID, service: PublisherService = Depends(get_publisher_service)):
    return service.remove(publisher_id)
