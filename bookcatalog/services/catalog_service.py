"""
Services for authors, publishers and genres.

They share list/get/remove behaviour through ``CatalogEntityService``; each
subclass spells out its own create and per-field update.
"""

import logging
import uuid
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from sqlalchemy import func, or_
from sqlmodel import Session, SQLModel

from ..core.errors import ConflictError, NotFoundError
from ..models.author import Author
from ..models.book import Book
from ..models.genre import Genre
from ..models.publisher import Publisher
from ..repositories.base import AuthorRepository, GenreRepository, PublisherRepository, SoftDeleteRepository
from ..repositories.book_repo import BookRepository, search_term
from ..schemas.catalog import (
    AuthorCreate,
    AuthorUpdate,
    GenreCreate,
    GenreUpdate,
    PublisherCreate,
    PublisherUpdate,
)
from . import export_service

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=SQLModel)


class CatalogEntityService(Generic[EntityT]):
    repository_class = SoftDeleteRepository
    # Name of the Book column that references this entity
    book_field: Optional[str] = None
    not_found_message = "Registro no encontrado"
    in_use_message = "El registro tiene libros asociados"
    deleted_message = "Registro eliminado exitosamente"
    csv_headers: List[str] = []

    def __init__(self, session: Session):
        self.repo = self.repository_class(session)
        self.books = BookRepository(session)

    def search_predicate(self, term: str):
        raise NotImplementedError

    def order_by(self):
        raise NotImplementedError

    def format_rows(self, entities: List[EntityT]) -> list:
        raise NotImplementedError

    def find_all(self, search: Optional[str] = None) -> List[EntityT]:
        criteria = []
        if search:
            criteria.append(self.search_predicate(search_term(search)))
        return self.repo.list(*criteria, order_by=self.order_by())

    def find_one(self, entity_id: uuid.UUID) -> EntityT:
        entity = self.repo.get(entity_id)
        if entity is None:
            raise NotFoundError(self.not_found_message)
        return entity

    def remove(self, entity_id: uuid.UUID) -> dict:
        entity = self.find_one(entity_id)
        in_use = self.books.count_live_referencing(getattr(Book, self.book_field), entity_id)
        if in_use:
            logger.warning("Refusing to delete %s %s: %d books reference it", self.repo.model.__name__, entity_id, in_use)
            raise ConflictError(self.in_use_message)
        self.repo.soft_delete(entity)
        logger.info("%s soft-deleted: %s", self.repo.model.__name__, entity_id)
        return {"message": self.deleted_message}

    def export_csv(self, search: Optional[str] = None) -> bytes:
        return export_service.to_csv(self.format_rows(self.find_all(search)), self.csv_headers)

    def _insert(self, entity: EntityT) -> EntityT:
        now = datetime.utcnow()
        entity.created_at = now
        entity.updated_at = now
        entity = self.repo.save(entity, touch=False)
        logger.info("%s created: %s", self.repo.model.__name__, entity.id)
        return entity


class AuthorService(CatalogEntityService[Author]):
    repository_class = AuthorRepository
    book_field = "author_id"
    not_found_message = "Autor no encontrado"
    in_use_message = "No se puede eliminar el autor: tiene libros asociados"
    deleted_message = "Autor eliminado exitosamente"
    csv_headers = export_service.AUTHOR_HEADERS

    def search_predicate(self, term: str):
        return or_(func.lower(Author.name).like(term), func.lower(Author.last_name).like(term))

    def order_by(self):
        return Author.last_name.asc()

    def format_rows(self, entities):
        return export_service.format_authors(entities)

    def create(self, payload: AuthorCreate) -> Author:
        return self._insert(
            Author(
                name=payload.name,
                last_name=payload.last_name,
                birth_date=payload.birth_date,
                biography=payload.biography,
                nationality=payload.nationality,
                is_active=payload.is_active,
            )
        )

    def update(self, author_id: uuid.UUID, payload: AuthorUpdate) -> Author:
        author = self.find_one(author_id)
        fields = payload.model_fields_set
        if payload.name is not None:
            author.name = payload.name
        if payload.last_name is not None:
            author.last_name = payload.last_name
        if "birth_date" in fields:
            author.birth_date = payload.birth_date
        if "biography" in fields:
            author.biography = payload.biography
        if "nationality" in fields:
            author.nationality = payload.nationality
        if payload.is_active is not None:
            author.is_active = payload.is_active
        return self.repo.save(author)


class PublisherService(CatalogEntityService[Publisher]):
    repository_class = PublisherRepository
    book_field = "publisher_id"
    not_found_message = "Editorial no encontrada"
    in_use_message = "No se puede eliminar la editorial: tiene libros asociados"
    deleted_message = "Editorial eliminada exitosamente"
    csv_headers = export_service.PUBLISHER_HEADERS

    def search_predicate(self, term: str):
        return func.lower(Publisher.name).like(term)

    def order_by(self):
        return Publisher.name.asc()

    def format_rows(self, entities):
        return export_service.format_publishers(entities)

    def create(self, payload: PublisherCreate) -> Publisher:
        return self._insert(
            Publisher(
                name=payload.name,
                country=payload.country,
                foundation_year=payload.foundation_year,
                description=payload.description,
                website=payload.website,
                is_active=payload.is_active,
            )
        )

    def update(self, publisher_id: uuid.UUID, payload: PublisherUpdate) -> Publisher:
        publisher = self.find_one(publisher_id)
        fields = payload.model_fields_set
        if payload.name is not None:
            publisher.name = payload.name
        if "country" in fields:
            publisher.country = payload.country
        if "foundation_year" in fields:
            publisher.foundation_year = payload.foundation_year
        if "description" in fields:
            publisher.description = payload.description
        if "website" in fields:
            publisher.website = payload.website
        if payload.is_active is not None:
            publisher.is_active = payload.is_active
        return self.repo.save(publisher)


class GenreService(CatalogEntityService[Genre]):
    repository_class = GenreRepository
    book_field = "genre_id"
    not_found_message = "Género no encontrado"
    in_use_message = "No se puede eliminar el género: tiene libros asociados"
    deleted_message = "Género eliminado exitosamente"
    csv_headers = export_service.GENRE_HEADERS

    def search_predicate(self, term: str):
        return func.lower(Genre.name).like(term)

    def order_by(self):
        return Genre.name.asc()

    def format_rows(self, entities):
        return export_service.format_genres(entities)

    def create(self, payload: GenreCreate) -> Genre:
        return self._insert(
            Genre(
                name=payload.name,
                description=payload.description,
                is_active=payload.is_active,
            )
        )

    def update(self, genre_id: uuid.UUID, payload: GenreUpdate) -> Genre:
        genre = self.find_one(genre_id)
        fields = payload.model_fields_set
        if payload.name is not None:
            genre.name = payload.name
        if "description" in fields:
            genre.description = payload.description
        if payload.is_active is not None:
            genre.is_active = payload.is_active
        return self.repo.save(genre)
