import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from sqlmodel import Session

from ..config import settings
from ..core.errors import ConflictError, NotFoundError
from ..models.book import Book
from ..repositories.base import AuthorRepository, GenreRepository, PublisherRepository
from ..repositories.book_repo import BookRepository, BookRow, total_pages
from ..schemas.book import AuthorSummary, BookCreate, BookFilter, BookPage, BookRead, BookUpdate, NamedSummary
from . import export_service

logger = logging.getLogger(__name__)

BOOK_NOT_FOUND = "Libro no encontrado"
ISBN_TAKEN = "El ISBN ya está registrado"

# Export takes every match, not a page.
EXPORT_LIMIT = 10000


def to_read(row: BookRow) -> BookRead:
    book, author, publisher, genre = row
    return BookRead(
        id=book.id,
        title=book.title,
        description=book.description,
        isbn=book.isbn,
        publication_year=book.publication_year,
        price=float(book.price),
        stock_quantity=book.stock_quantity,
        image_url=book.image_url,
        is_available=book.is_available,
        author_id=book.author_id,
        publisher_id=book.publisher_id,
        genre_id=book.genre_id,
        author_name=f"{author.name} {author.last_name}" if author else None,
        publisher_name=publisher.name if publisher else None,
        genre_name=genre.name if genre else None,
        author=AuthorSummary(name=author.name, last_name=author.last_name) if author else None,
        publisher=NamedSummary(name=publisher.name) if publisher else None,
        genre=NamedSummary(name=genre.name) if genre else None,
        created_at=book.created_at,
        updated_at=book.updated_at,
    )


class BookService:
    def __init__(self, session: Session):
        self.books = BookRepository(session)
        self.authors = AuthorRepository(session)
        self.publishers = PublisherRepository(session)
        self.genres = GenreRepository(session)

    # ─────────────────────────────
    #   QUERIES
    # ─────────────────────────────

    def find_all(self, filters: BookFilter, page: int = 1, limit: int = 10) -> BookPage:
        rows, total = self.books.search(filters, page=page, limit=limit)
        return BookPage(
            data=[to_read(row) for row in rows],
            total=total,
            page=page,
            total_pages=total_pages(total, limit),
        )

    def find_one(self, book_id: uuid.UUID) -> BookRead:
        row = self.books.get_with_relations(book_id)
        if row is None:
            raise NotFoundError(BOOK_NOT_FOUND)
        return to_read(row)

    def export_csv(self, filters: BookFilter) -> bytes:
        rows, _ = self.books.search(filters, page=1, limit=EXPORT_LIMIT)
        books = [to_read(row) for row in rows]
        return export_service.to_csv(export_service.format_books(books), export_service.BOOK_HEADERS)

    # ─────────────────────────────
    #   MUTATIONS
    # ─────────────────────────────

    def _validate_relations(self, author_id: uuid.UUID, publisher_id: uuid.UUID, genre_id: uuid.UUID) -> None:
        # Order matters: the first missing relation is the one reported.
        if not self.authors.exists(author_id):
            raise NotFoundError("Autor no encontrado", relation="author")
        if not self.publishers.exists(publisher_id):
            raise NotFoundError("Editorial no encontrada", relation="publisher")
        if not self.genres.exists(genre_id):
            raise NotFoundError("Género no encontrado", relation="genre")

    def _ensure_isbn_free(self, isbn: Optional[str]) -> None:
        if isbn and self.books.isbn_taken(isbn):
            logger.warning("ISBN already registered: %s", isbn)
            raise ConflictError(ISBN_TAKEN)

    def create(self, payload: BookCreate) -> BookRead:
        self._validate_relations(payload.author_id, payload.publisher_id, payload.genre_id)
        self._ensure_isbn_free(payload.isbn)

        now = datetime.utcnow()
        book = Book(
            id=uuid.uuid4(),
            title=payload.title,
            description=payload.description,
            isbn=payload.isbn,
            publication_year=payload.publication_year,
            price=payload.price,
            stock_quantity=payload.stock_quantity,
            image_url=payload.image_url,
            is_available=payload.is_available,
            author_id=payload.author_id,
            publisher_id=payload.publisher_id,
            genre_id=payload.genre_id,
            created_at=now,
            updated_at=now,
        )
        book = self.books.save(book, touch=False)
        logger.info("Book created: %s", book.id)
        # Re-read joined so the response carries display names.
        return self.find_one(book.id)

    def update(self, book_id: uuid.UUID, payload: BookUpdate) -> BookRead:
        book = self.books.get(book_id)
        if book is None:
            raise NotFoundError(BOOK_NOT_FOUND)

        fields = payload.model_fields_set

        if {"author_id", "publisher_id", "genre_id"} & fields:
            self._validate_relations(
                payload.author_id or book.author_id,
                payload.publisher_id or book.publisher_id,
                payload.genre_id or book.genre_id,
            )

        if payload.isbn and payload.isbn != book.isbn:
            self._ensure_isbn_free(payload.isbn)

        # Required columns only change to a real value; nullable ones may be cleared.
        if payload.title is not None:
            book.title = payload.title
        if "description" in fields:
            book.description = payload.description
        if "isbn" in fields:
            book.isbn = payload.isbn
        if "publication_year" in fields:
            book.publication_year = payload.publication_year
        if payload.price is not None:
            book.price = payload.price
        if payload.stock_quantity is not None:
            book.stock_quantity = payload.stock_quantity
        if "image_url" in fields:
            book.image_url = payload.image_url
        if payload.is_available is not None:
            book.is_available = payload.is_available
        if payload.author_id is not None:
            book.author_id = payload.author_id
        if payload.publisher_id is not None:
            book.publisher_id = payload.publisher_id
        if payload.genre_id is not None:
            book.genre_id = payload.genre_id

        self.books.save(book)
        logger.info("Book updated: %s", book_id)
        return self.find_one(book_id)

    def remove(self, book_id: uuid.UUID) -> dict:
        book = self.books.get(book_id)
        if book is None:
            raise NotFoundError(BOOK_NOT_FOUND)
        self.books.soft_delete(book)
        logger.info("Book soft-deleted: %s", book_id)
        return {"message": "Libro eliminado exitosamente"}

    def attach_image(self, book_id: uuid.UUID, data: bytes, ext: str) -> str:
        """Guarda la imagen bajo UPLOAD_DIR/books y registra su ruta pública."""
        book = self.books.get(book_id)
        if book is None:
            raise NotFoundError(BOOK_NOT_FOUND)

        base_dir = Path(settings.upload_dir) / "books"
        base_dir.mkdir(parents=True, exist_ok=True)

        filename = f"{book_id}-{int(datetime.utcnow().timestamp() * 1000)}{ext}"
        with open(base_dir / filename, "wb") as f:
            f.write(data)

        book.image_url = f"/uploads/books/{filename}"
        self.books.save(book)
        logger.info("Image stored for book %s: %s", book_id, book.image_url)
        return book.image_url
