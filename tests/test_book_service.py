import uuid
from decimal import Decimal

import pytest

from bookcatalog.core.errors import ConflictError, NotFoundError
from bookcatalog.repositories.book_repo import BookRepository
from bookcatalog.schemas.book import BookCreate, BookUpdate
from bookcatalog.services.book_service import BookService


def _payload(relations, **overrides):
    a, p, g = relations
    data = {
        "title": "T",
        "price": Decimal("10"),
        "author_id": a.id,
        "publisher_id": p.id,
        "genre_id": g.id,
    }
    data.update(overrides)
    return BookCreate(**data)


def test_create_returns_joined_projection(session, relations):
    book = BookService(session).create(_payload(relations))

    assert book.author_name == "Jane Doe"
    assert book.price == 10.0
    assert book.stock_quantity == 0
    assert book.is_available is True
    assert book.author_id == relations[0].id


def test_missing_author_is_reported_first(session, relations):
    payload = _payload(
        relations,
        author_id=uuid.uuid4(),
        publisher_id=uuid.uuid4(),
        genre_id=uuid.uuid4(),
    )
    with pytest.raises(NotFoundError) as exc:
        BookService(session).create(payload)
    assert exc.value.relation == "author"


@pytest.mark.parametrize("field,relation", [("publisher_id", "publisher"), ("genre_id", "genre")])
def test_missing_relation_is_named(session, relations, field, relation):
    with pytest.raises(NotFoundError) as exc:
        BookService(session).create(_payload(relations, **{field: uuid.uuid4()}))
    assert exc.value.relation == relation


def test_failed_validation_writes_nothing(session, relations):
    with pytest.raises(NotFoundError):
        BookService(session).create(_payload(relations, genre_id=uuid.uuid4()))
    assert BookRepository(session).list() == []


def test_duplicate_isbn_conflicts(session, relations):
    service = BookService(session)
    service.create(_payload(relations, isbn="9781234567890"))
    with pytest.raises(ConflictError):
        service.create(_payload(relations, title="Other", isbn="9781234567890"))


def test_isbn_of_soft_deleted_book_stays_reserved(session, relations):
    service = BookService(session)
    book = service.create(_payload(relations, isbn="9781234567890"))
    service.remove(book.id)
    with pytest.raises(ConflictError):
        service.create(_payload(relations, isbn="9781234567890"))


def test_books_without_isbn_do_not_conflict(session, relations):
    service = BookService(session)
    service.create(_payload(relations))
    service.create(_payload(relations, title="Also no isbn"))
    assert len(BookRepository(session).list()) == 2


def test_update_isbn_owned_by_another_book_conflicts(session, relations):
    service = BookService(session)
    service.create(_payload(relations, isbn="9781111111111"))
    mine = service.create(_payload(relations, isbn="9782222222222"))

    with pytest.raises(ConflictError):
        service.update(mine.id, BookUpdate(isbn="9781111111111"))

    same = service.update(mine.id, BookUpdate(isbn="9782222222222", title="Renamed"))
    assert same.isbn == "9782222222222"
    assert same.title == "Renamed"


def test_update_is_a_partial_merge(session, relations):
    service = BookService(session)
    book = service.create(_payload(relations, description="Long text", stock_quantity=4))

    updated = service.update(book.id, BookUpdate(price=Decimal("12.50")))

    assert updated.price == 12.5
    assert updated.title == "T"
    assert updated.description == "Long text"
    assert updated.stock_quantity == 4


def test_update_can_clear_optional_fields(session, relations):
    service = BookService(session)
    book = service.create(_payload(relations, description="Long text"))
    updated = service.update(book.id, BookUpdate(description=None))
    assert updated.description is None
    assert updated.title == "T"


def test_update_revalidates_relations(session, relations):
    service = BookService(session)
    book = service.create(_payload(relations))
    with pytest.raises(NotFoundError) as exc:
        service.update(book.id, BookUpdate(genre_id=uuid.uuid4()))
    assert exc.value.relation == "genre"
    assert service.find_one(book.id).genre_id == relations[2].id


def test_update_missing_book(session):
    with pytest.raises(NotFoundError):
        BookService(session).update(uuid.uuid4(), BookUpdate(title="x"))


def test_remove_soft_deletes(session, relations):
    service = BookService(session)
    book = service.create(_payload(relations))

    assert service.remove(book.id) == {"message": "Libro eliminado exitosamente"}

    with pytest.raises(NotFoundError):
        service.find_one(book.id)
    with pytest.raises(NotFoundError):
        service.remove(book.id)

    repo = BookRepository(session)
    assert repo.get(book.id) is None
    kept = repo.get(book.id, include_deleted=True)
    assert kept is not None
    assert kept.deleted_at is not None


def test_attach_image_records_public_path(session, relations, tmp_path, monkeypatch):
    from bookcatalog.config import settings

    monkeypatch.setattr(settings, "upload_dir", str(tmp_path))
    service = BookService(session)
    book = service.create(_payload(relations))

    url = service.attach_image(book.id, b"\x89PNG fake", ".png")

    assert url.startswith(f"/uploads/books/{book.id}-")
    assert url.endswith(".png")
    assert (tmp_path / "books" / url.rsplit("/", 1)[1]).read_bytes() == b"\x89PNG fake"
    assert service.find_one(book.id).image_url == url
