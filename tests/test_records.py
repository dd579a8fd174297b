from datetime import date

import pytest

from catalog.records import (
    Author, Book, BookInstance, Genre, author_lifespan, author_name, author_url, book_url,
    bookinstance_url, due_back_formatted, format_date, genre_url, iso_date, mark_checked,
)


def test_author_name_is_family_then_first():
    assert author_name(Author("Isaac", "Asimov")) == "Asimov, Isaac"


def test_canonical_urls_use_the_id():
    assert author_url(Author(id="a1")) == "/author/a1"
    assert genre_url(Genre(id="g1")) == "/genre/g1"
    assert book_url(Book(id="b1")) == "/book/b1"
    assert bookinstance_url(BookInstance(id="i1")) == "/bookinstance/i1"


@pytest.mark.parametrize("value, expected", [
    (date(1990, 6, 5), "June 5th, 1990"),
    (date(1920, 1, 1), "January 1st, 1920"),
    (date(1920, 1, 2), "January 2nd, 1920"),
    (date(1920, 1, 3), "January 3rd, 1920"),
    (date(1920, 1, 11), "January 11th, 1920"),
    (date(1920, 1, 12), "January 12th, 1920"),
    (date(1920, 1, 22), "January 22nd, 1920"),
    (date(1992, 4, 30), "April 30th, 1992"),
])
def test_format_date(value, expected):
    assert format_date(value) == expected


def test_missing_dates_format_as_empty():
    assert format_date(None) == ""
    assert iso_date(None) == ""
    assert author_lifespan(Author("A", "B")) == ""


def test_iso_date_for_form_prefill():
    assert iso_date(date(1973, 6, 6)) == "1973-06-06"


def test_author_lifespan():
    author = Author("Isaac", "Asimov", date(1920, 1, 2), date(1992, 4, 6))
    assert author_lifespan(author) == "January 2nd, 1920 - April 6th, 1992"


def test_instance_defaults():
    instance = BookInstance(book_id="b1", imprint="Tor")
    assert instance.status == "Maintenance"
    assert instance.due_back == date.today()
    assert due_back_formatted(instance) == format_date(date.today())


def test_mark_checked_returns_copies():
    genres = [Genre(name="Fantasy", id="g1"), Genre(name="Poetry", id="g2")]

    marked = mark_checked(genres, ["g2"])

    assert [g.checked for g in marked] == [False, True]
    assert not any(g.checked for g in genres)
