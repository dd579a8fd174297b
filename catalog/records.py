"""Catalog records and their derived display fields.

Records are plain dataclasses shared by every store. References to other
records are kept as identifiers (``author_id``, ``genre_ids``, ``book_id``);
stores fill the matching display attributes (``author``, ``genres``,
``book``) when asked to resolve them, without touching the identifiers.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable, List, Optional

STATUS_CHOICES = ("Available", "Maintenance", "Loaned", "Reserved")
DEFAULT_STATUS = "Maintenance"

AUTHORS_URL = "/authors"
GENRES_URL = "/genres"
BOOKS_URL = "/books"
BOOKINSTANCES_URL = "/bookinstances"


@dataclass
class Author:
    first_name: str = ""
    family_name: str = ""
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None
    id: Optional[str] = None


@dataclass
class Genre:
    name: str = ""
    id: Optional[str] = None
    # form state only, never persisted
    checked: bool = field(default=False, compare=False)


@dataclass
class Book:
    title: str = ""
    author_id: str = ""
    summary: str = ""
    isbn: str = ""
    genre_ids: List[str] = field(default_factory=list)
    id: Optional[str] = None
    author: Optional[Author] = field(default=None, compare=False, repr=False)
    genres: List[Genre] = field(default_factory=list, compare=False, repr=False)


@dataclass
class BookInstance:
    book_id: str = ""
    imprint: str = ""
    status: str = DEFAULT_STATUS
    due_back: Optional[date] = field(default_factory=date.today)
    id: Optional[str] = None
    book: Optional[Book] = field(default=None, compare=False, repr=False)


# --- Derived fields ---

def author_name(author: Author) -> str:
    return f"{author.family_name}, {author.first_name}"


def author_url(author: Author) -> str:
    return f"/author/{author.id}"


def genre_url(genre: Genre) -> str:
    return f"/genre/{genre.id}"


def book_url(book: Book) -> str:
    return f"/book/{book.id}"


def bookinstance_url(instance: BookInstance) -> str:
    return f"/bookinstance/{instance.id}"


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_date(value: Optional[date]) -> str:
    """Human-readable date, e.g. ``June 5th, 1990``; empty for no date."""
    if value is None:
        return ""
    return f"{value.strftime('%B')} {_ordinal(value.day)}, {value.year}"


def iso_date(value: Optional[date]) -> str:
    """``YYYY-MM-DD`` for form pre-fill; empty for no date."""
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d")


def date_of_birth_formatted(author: Author) -> str:
    return format_date(author.date_of_birth)


def date_of_death_formatted(author: Author) -> str:
    return format_date(author.date_of_death)


def author_lifespan(author: Author) -> str:
    if author.date_of_birth is None and author.date_of_death is None:
        return ""
    return f"{format_date(author.date_of_birth)} - {format_date(author.date_of_death)}"


def due_back_formatted(instance: BookInstance) -> str:
    return format_date(instance.due_back)


def mark_checked(genres: Iterable[Genre], selected_ids: Iterable[str]) -> List[Genre]:
    """Copies of ``genres`` with ``checked`` set where the id was selected."""
    selected = {str(genre_id) for genre_id in selected_ids}
    return [replace(genre, checked=str(genre.id) in selected) for genre in genres]


TEMPLATE_HELPERS = {
    "author_name": author_name,
    "author_url": author_url,
    "author_lifespan": author_lifespan,
    "genre_url": genre_url,
    "book_url": book_url,
    "bookinstance_url": bookinstance_url,
    "format_date": format_date,
    "iso_date": iso_date,
    "date_of_birth_formatted": date_of_birth_formatted,
    "date_of_death_formatted": date_of_death_formatted,
    "due_back_formatted": due_back_formatted,
}
