from decimal import Decimal

import pytest

from bookcatalog.models.book import Book
from bookcatalog.repositories.base import AuthorRepository
from bookcatalog.repositories.book_repo import BookRepository, build_predicates, order_clause, total_pages
from bookcatalog.schemas.book import BookFilter
from bookcatalog.schemas.catalog import AuthorCreate
from bookcatalog.services.book_service import BookService
from bookcatalog.services.catalog_service import AuthorService


def test_only_soft_delete_predicate_without_filters():
    assert len(build_predicates(BookFilter())) == 1


def test_one_predicate_per_filter():
    filters = BookFilter(
        search="x",
        min_price=Decimal("1"),
        max_price=Decimal("2"),
        min_publication_year=1990,
        max_publication_year=2000,
        available_only=True,
    )
    assert len(build_predicates(filters)) == 7


def test_available_only_false_adds_nothing():
    assert len(build_predicates(BookFilter(available_only=False))) == 1


def test_unknown_sort_falls_back_to_created_at():
    clause = order_clause("bogus", "ASC")
    assert clause.element.key == Book.created_at.key
    assert str(order_clause("price", "ASC")).endswith("ASC")
    assert str(order_clause("price", "DESC")).endswith("DESC")


@pytest.mark.parametrize("total,limit,expected", [(0, 10, 0), (10, 10, 1), (11, 10, 2), (1, 100, 1)])
def test_total_pages(total, limit, expected):
    assert total_pages(total, limit) == expected


def test_sort_by_price_ascending(session, make_book):
    make_book(title="Expensive", price="39.99")
    make_book(title="Cheap", price="29.99")

    page = BookService(session).find_all(BookFilter(sort_by="price", sort_order="ASC"))

    assert [b.price for b in page.data] == [29.99, 39.99]


def test_sort_by_title_descending(session, make_book):
    for title in ("B", "C", "A"):
        make_book(title=title)
    page = BookService(session).find_all(BookFilter(sort_by="title", sort_order="DESC"))
    assert [b.title for b in page.data] == ["C", "B", "A"]


def test_total_is_independent_of_pagination(session, make_book):
    for i in range(7):
        make_book(title=f"Book {i}", price=str(i))

    service = BookService(session)
    first = service.find_all(BookFilter(sort_by="price", sort_order="ASC"), page=1, limit=3)
    last = service.find_all(BookFilter(sort_by="price", sort_order="ASC"), page=3, limit=3)
    beyond = service.find_all(BookFilter(), page=9, limit=3)

    assert first.total == last.total == beyond.total == 7
    assert first.total_pages == 3
    assert [b.title for b in first.data] == ["Book 0", "Book 1", "Book 2"]
    assert [b.title for b in last.data] == ["Book 6"]
    assert beyond.data == []


def test_search_matches_title_isbn_and_author_case_insensitively(session, relations, make_book):
    _, p, g = relations
    other = AuthorService(session).create(AuthorCreate(name="Gabriel", last_name="Marquez"))
    make_book(title="Cien Años", isbn="9780000000001", author_id=other.id)
    make_book(title="Dune", isbn="9780000000002")

    service = BookService(session)
    assert [b.title for b in service.find_all(BookFilter(search="DUNE")).data] == ["Dune"]
    assert [b.title for b in service.find_all(BookFilter(search="marq")).data] == ["Cien Años"]
    assert [b.title for b in service.find_all(BookFilter(search="0000002")).data] == ["Dune"]
    assert service.find_all(BookFilter(search="jane doe")).total == 0
    assert service.find_all(BookFilter(search="doe")).total == 1


def test_search_is_anded_with_other_filters(session, make_book):
    make_book(title="Alpha", price="5")
    make_book(title="Alpha Two", price="50")
    page = BookService(session).find_all(BookFilter(search="alpha", min_price=Decimal("10")))
    assert [b.title for b in page.data] == ["Alpha Two"]


def test_relation_filters(session, relations, make_book):
    other = AuthorService(session).create(AuthorCreate(name="Other", last_name="Writer"))
    make_book(title="Mine")
    make_book(title="Theirs", author_id=other.id)

    service = BookService(session)
    assert [b.title for b in service.find_all(BookFilter(author_id=other.id)).data] == ["Theirs"]
    assert service.find_all(BookFilter(publisher_id=relations[1].id)).total == 2
    assert service.find_all(BookFilter(genre_id=relations[2].id)).total == 2


def test_price_and_year_ranges(session, make_book):
    make_book(title="Old", price="10", publication_year=1950)
    make_book(title="Mid", price="20", publication_year=1990)
    make_book(title="New", price="30", publication_year=2020)

    service = BookService(session)
    by_price = service.find_all(BookFilter(min_price=Decimal("15"), max_price=Decimal("30"), sort_by="price", sort_order="ASC"))
    assert [b.title for b in by_price.data] == ["Mid", "New"]

    by_year = service.find_all(BookFilter(min_publication_year=1950, max_publication_year=1990, sort_by="publicationYear", sort_order="ASC"))
    assert [b.title for b in by_year.data] == ["Old", "Mid"]


def test_available_only(session, make_book):
    make_book(title="In stock")
    make_book(title="Gone", is_available=False)
    page = BookService(session).find_all(BookFilter(available_only=True))
    assert [b.title for b in page.data] == ["In stock"]


def test_soft_deleted_books_are_excluded(session, make_book):
    kept = make_book(title="Kept")
    dropped = make_book(title="Dropped")
    BookService(session).remove(dropped.id)

    page = BookService(session).find_all(BookFilter())
    assert page.total == 1
    assert page.data[0].id == kept.id


def test_projection_includes_display_names(session, make_book):
    book = make_book(title="T")
    assert book.author_name == "Jane Doe"
    assert book.publisher_name == "Acme"
    assert book.genre_name == "Fiction"
    assert book.author.last_name == "Doe"
    assert book.genre.name == "Fiction"


def test_soft_deleted_relation_is_not_loaded(session, relations, make_book):
    book = make_book()
    authors = AuthorRepository(session)
    authors.soft_delete(authors.get(relations[0].id))

    rows, total = BookRepository(session).search(BookFilter())
    assert total == 1
    _, author, publisher, _ = rows[0]
    assert author is None
    assert publisher is not None

    read = BookService(session).find_one(book.id)
    assert read.author is None
    assert read.author_name is None
    assert read.author_id == relations[0].id
