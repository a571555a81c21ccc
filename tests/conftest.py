import os
import tempfile
from decimal import Decimal

# Settings are read at import time, so the environment must be ready first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="bookcatalog-uploads-")
os.environ["API_PREFIX"] = "/api/v1"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from bookcatalog.database import get_session
from bookcatalog.main import app
from bookcatalog.models import author, book, genre, publisher, user  # noqa: F401
from bookcatalog.schemas.book import BookCreate
from bookcatalog.schemas.catalog import AuthorCreate, GenreCreate, PublisherCreate
from bookcatalog.services.book_service import BookService
from bookcatalog.services.catalog_service import AuthorService, GenreService, PublisherService

API = "/api/v1"


@pytest.fixture
def engine():
    # Un único motor en memoria por test
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture
def client(session):
    def _get_session_override():
        yield session

    app.dependency_overrides[get_session] = _get_session_override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    response = client.post(
        f"{API}/auth/register",
        json={
            "email": "reader@example.com",
            "password": "Passw0rd!",
            "first_name": "Ada",
            "last_name": "Reader",
        },
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def relations(session):
    """Autor, editorial y género listos para colgar libros."""
    a = AuthorService(session).create(AuthorCreate(name="Jane", last_name="Doe"))
    p = PublisherService(session).create(PublisherCreate(name="Acme", foundation_year=2000))
    g = GenreService(session).create(GenreCreate(name="Fiction"))
    return a, p, g


@pytest.fixture
def make_book(session, relations):
    a, p, g = relations
    service = BookService(session)

    def _make(title="T", price="10", **overrides):
        data = {
            "title": title,
            "price": Decimal(str(price)),
            "author_id": a.id,
            "publisher_id": p.id,
            "genre_id": g.id,
        }
        data.update(overrides)
        return service.create(BookCreate(**data))

    return _make
