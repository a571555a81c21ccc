"""
CSV export.

Rows are plain dicts keyed by the human-readable column label; ``to_csv``
writes the header row followed by one line per record. Missing optional
values become empty strings and dates are rendered as ``YYYY-MM-DD``.
"""

import csv
import io
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..models.author import Author
from ..models.genre import Genre
from ..models.publisher import Publisher
from ..schemas.book import BookRead

CSV_ENCODING = "utf-8"

BOOK_HEADERS = [
    "Título",
    "Autor",
    "Editorial",
    "Género",
    "ISBN",
    "Año de Publicación",
    "Precio",
    "Stock",
    "Disponible",
    "Fecha de Creación",
]

AUTHOR_HEADERS = [
    "Nombre",
    "Apellido",
    "Fecha de Nacimiento",
    "Biografía",
    "Nacionalidad",
    "Fecha de Creación",
]

PUBLISHER_HEADERS = [
    "Nombre",
    "País",
    "Año de Fundación",
    "Descripción",
    "Sitio Web",
    "Fecha de Creación",
]

GENRE_HEADERS = [
    "Nombre",
    "Descripción",
    "Fecha de Creación",
]

YES, NO = "Sí", "No"


def format_date(value: Optional[date]) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def _text(value: Any) -> Any:
    return "" if value is None else value


def format_books(books: Iterable[BookRead]) -> List[Dict[str, Any]]:
    return [
        {
            "Título": book.title,
            "Autor": _text(book.author_name),
            "Editorial": _text(book.publisher_name),
            "Género": _text(book.genre_name),
            "ISBN": _text(book.isbn),
            "Año de Publicación": _text(book.publication_year),
            "Precio": book.price,
            "Stock": book.stock_quantity,
            "Disponible": YES if book.is_available else NO,
            "Fecha de Creación": format_date(book.created_at),
        }
        for book in books
    ]


def format_authors(authors: Iterable[Author]) -> List[Dict[str, Any]]:
    return [
        {
            "Nombre": author.name,
            "Apellido": author.last_name,
            "Fecha de Nacimiento": format_date(author.birth_date),
            "Biografía": _text(author.biography),
            "Nacionalidad": _text(author.nationality),
            "Fecha de Creación": format_date(author.created_at),
        }
        for author in authors
    ]


def format_publishers(publishers: Iterable[Publisher]) -> List[Dict[str, Any]]:
    return [
        {
            "Nombre": publisher.name,
            "País": _text(publisher.country),
            "Año de Fundación": _text(publisher.foundation_year),
            "Descripción": _text(publisher.description),
            "Sitio Web": _text(publisher.website),
            "Fecha de Creación": format_date(publisher.created_at),
        }
        for publisher in publishers
    ]


def format_genres(genres: Iterable[Genre]) -> List[Dict[str, Any]]:
    return [
        {
            "Nombre": genre.name,
            "Descripción": _text(genre.description),
            "Fecha de Creación": format_date(genre.created_at),
        }
        for genre in genres
    ]


def to_csv(rows: Iterable[Dict[str, Any]], headers: Sequence[str]) -> bytes:
    """Serialize rows to CSV bytes.

    Any writer error propagates; no partial buffer is ever returned.
    """
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=list(headers), extrasaction="raise")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return output.getvalue().encode(CSV_ENCODING)
