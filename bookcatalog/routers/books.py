import uuid
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Literal, Optional

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status
from sqlmodel import Session

from ..core.errors import ValidationFailedError
from ..core.security import get_current_user
from ..database import get_session
from ..schemas.book import BookCreate, BookFilter, BookPage, BookRead, BookUpdate, ImageUploadRead
from ..schemas.catalog import MessageOut
from ..services.book_service import BookService

router = APIRouter(
    prefix="/books",
    tags=["books"],
    dependencies=[Depends(get_current_user)],
)

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5 MB
IMAGE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
}


def get_book_service(session: Session = Depends(get_session)) -> BookService:
    return BookService(session)


def book_filters(
    search: Optional[str] = None,
    author_id: Optional[uuid.UUID] = None,
    publisher_id: Optional[uuid.UUID] = None,
    genre_id: Optional[uuid.UUID] = None,
    min_price: Optional[Decimal] = Query(default=None, ge=0),
    max_price: Optional[Decimal] = Query(default=None, ge=0),
    min_publication_year: Optional[int] = Query(default=None, ge=1000),
    max_publication_year: Optional[int] = Query(default=None, le=date.today().year),
    available_only: Optional[bool] = None,
    sort_by: str = "createdAt",
    sort_order: Literal["ASC", "DESC"] = "DESC",
) -> BookFilter:
    return BookFilter(
        search=search,
        author_id=author_id,
        publisher_id=publisher_id,
        genre_id=genre_id,
        min_price=min_price,
        max_price=max_price,
        min_publication_year=min_publication_year,
        max_publication_year=max_publication_year,
        available_only=available_only,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.post(
    "",
    response_model=BookRead,
    status_code=status.HTTP_201_CREATED,
)
def create_book(payload: BookCreate, service: BookService = Depends(get_book_service)):
    return service.create(payload)


@router.get(
    "",
    response_model=BookPage,
)
def list_books(
    filters: BookFilter = Depends(book_filters),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    service: BookService = Depends(get_book_service),
):
    """
    Listar libros con filtros, orden y paginación.

    - Siempre excluye los libros con deleted_at (soft delete).
    - `total` cuenta todos los que cumplen el filtro, no solo la página.
    """
    return service.find_all(filters, page=page, limit=limit)


@router.get("/export/csv")
def export_books_csv(
    filters: BookFilter = Depends(book_filters),
    service: BookService = Depends(get_book_service),
):
    return Response(
        content=service.export_csv(filters),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=libros.csv"},
    )


@router.get(
    "/{book_id}",
    response_model=BookRead,
)
def get_book(book_id: uuid.UUID, service: BookService = Depends(get_book_service)):
    return service.find_one(book_id)


@router.patch(
    "/{book_id}",
    response_model=BookRead,
)
def update_book(
    book_id: uuid.UUID,
    payload: BookUpdate,
    service: BookService = Depends(get_book_service),
):
    """Actualizar parcialmente un libro; los campos omitidos conservan su valor."""
    return service.update(book_id, payload)


@router.delete(
    "/{book_id}",
    response_model=MessageOut,
)
def delete_book(book_id: uuid.UUID, service: BookService = Depends(get_book_service)):
    return service.remove(book_id)


@router.post(
    "/upload-image/{book_id}",
    response_model=ImageUploadRead,
    status_code=status.HTTP_200_OK,
)
def upload_image(
    book_id: uuid.UUID,
    image: UploadFile = File(...),
    service: BookService = Depends(get_book_service),
):
    """Sube la imagen de portada (jpeg/png/gif, máx. 5 MB)."""
    content_type = (image.content_type or "").lower()
    if content_type not in IMAGE_EXTENSIONS:
        raise ValidationFailedError("Tipo de archivo no permitido")

    data = image.file.read(MAX_IMAGE_BYTES + 1)
    if len(data) == 0:
        raise ValidationFailedError("Archivo vacío")
    if len(data) > MAX_IMAGE_BYTES:
        raise ValidationFailedError("Archivo demasiado grande (max 5MB)")

    ext = Path(image.filename or "").suffix.lower() or IMAGE_EXTENSIONS[content_type]
    if ext not in set(IMAGE_EXTENSIONS.values()) | {".jpeg"}:
        ext = IMAGE_EXTENSIONS[content_type]
    return ImageUploadRead(image_url=service.attach_image(book_id, data, ext))
