"""
Catalog query engine for books.

Each present filter becomes one independent SQL predicate; the list is
AND-ed once, so the count query and the page query always share the same
filter. Author, publisher and genre are LEFT joined on every read so their
display names are available, and a soft-deleted relation joins as NULL.
"""

import math
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import and_, func, or_
from sqlmodel import select

from ..models.author import Author
from ..models.book import Book
from ..models.genre import Genre
from ..models.publisher import Publisher
from ..schemas.book import BookFilter
from .base import SoftDeleteRepository

# (book, author | None, publisher | None, genre | None)
BookRow = Tuple[Book, Optional[Author], Optional[Publisher], Optional[Genre]]

SORT_COLUMNS = {
    "title": Book.title,
    "price": Book.price,
    "publicationYear": Book.publication_year,
    "publication_year": Book.publication_year,
    "createdAt": Book.created_at,
    "created_at": Book.created_at,
}


def search_term(search: str) -> str:
    return f"%{search.lower()}%"


def build_predicates(filters: BookFilter) -> list:
    """One predicate per filter that is set, soft-delete exclusion first."""
    predicates = [Book.deleted_at.is_(None)]

    if filters.search:
        term = search_term(filters.search)
        predicates.append(
            or_(
                func.lower(Book.title).like(term),
                func.lower(Book.isbn).like(term),
                func.lower(Author.name).like(term),
                func.lower(Author.last_name).like(term),
            )
        )
    if filters.author_id is not None:
        predicates.append(Book.author_id == filters.author_id)
    if filters.publisher_id is not None:
        predicates.append(Book.publisher_id == filters.publisher_id)
    if filters.genre_id is not None:
        predicates.append(Book.genre_id == filters.genre_id)
    if filters.min_price is not None:
        predicates.append(Book.price >= filters.min_price)
    if filters.max_price is not None:
        predicates.append(Book.price <= filters.max_price)
    if filters.min_publication_year is not None:
        predicates.append(Book.publication_year >= filters.min_publication_year)
    if filters.max_publication_year is not None:
        predicates.append(Book.publication_year <= filters.max_publication_year)
    if filters.available_only:
        predicates.append(Book.is_available.is_(True))

    return predicates


def order_clause(sort_by: str, sort_order: str):
    column = SORT_COLUMNS.get(sort_by, Book.created_at)
    return column.asc() if sort_order.upper() == "ASC" else column.desc()


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def _with_relations(statement):
    return (
        statement.outerjoin(Author, and_(Book.author_id == Author.id, Author.deleted_at.is_(None)))
        .outerjoin(Publisher, and_(Book.publisher_id == Publisher.id, Publisher.deleted_at.is_(None)))
        .outerjoin(Genre, and_(Book.genre_id == Genre.id, Genre.deleted_at.is_(None)))
    )


class BookRepository(SoftDeleteRepository[Book]):
    model = Book

    def search(self, filters: BookFilter, page: int = 1, limit: int = 10) -> Tuple[List[BookRow], int]:
        where = and_(*build_predicates(filters))

        count_stmt = _with_relations(select(func.count()).select_from(Book)).where(where)
        total = self.session.exec(count_stmt).one()

        page_stmt = (
            _with_relations(select(Book, Author, Publisher, Genre).select_from(Book))
            .where(where)
            .order_by(order_clause(filters.sort_by, filters.sort_order), Book.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        rows = [tuple(row) for row in self.session.exec(page_stmt).all()]
        return rows, total

    def get_with_relations(self, book_id: uuid.UUID) -> Optional[BookRow]:
        statement = _with_relations(select(Book, Author, Publisher, Genre).select_from(Book)).where(
            Book.id == book_id, Book.deleted_at.is_(None)
        )
        row = self.session.exec(statement).first()
        return tuple(row) if row is not None else None

    def isbn_taken(self, isbn: str) -> bool:
        return self.find_first(Book.isbn == isbn, include_deleted=True) is not None

    def count_live_referencing(self, column, target_id: uuid.UUID) -> int:
        statement = select(func.count()).select_from(Book).where(
            column == target_id, Book.deleted_at.is_(None)
        )
        return self.session.exec(statement).one()
