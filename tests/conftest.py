from datetime import date
from types import SimpleNamespace

import pytest

from catalog import create_app
from catalog.config import TestingConfig
from catalog.records import Author, Book, BookInstance, Genre
from catalog.store import MemoryStore


@pytest.fixture
def store():
    return MemoryStore()


def _fill(store):
    asimov = store.authors.insert(Author("Isaac", "Asimov", date(1920, 1, 2), date(1992, 4, 6)))
    bova = store.authors.insert(Author("Ben", "Bova", date(1932, 11, 8)))
    scifi = store.genres.insert(Genre(name="Science Fiction"))
    fantasy = store.genres.insert(Genre(name="Fantasy"))
    poetry = store.genres.insert(Genre(name="French Poetry"))
    foundation = store.books.insert(Book(title="Foundation", author_id=asimov.id,
                                         summary="The Galactic Empire is dying.",
                                         isbn="9780553293357", genre_ids=[scifi.id]))
    apes = store.books.insert(Book(title="Apes and Angels", author_id=bova.id,
                                   summary="Humankind headed out to the stars.",
                                   isbn="9780765379528", genre_ids=[scifi.id, fantasy.id]))
    copy = store.instances.insert(BookInstance(book_id=foundation.id, imprint="Bantam, 1991.",
                                               status="Available"))
    return SimpleNamespace(asimov=asimov, bova=bova, scifi=scifi, fantasy=fantasy, poetry=poetry,
                           foundation=foundation, apes=apes, copy=copy)


@pytest.fixture
def library(store):
    """A small catalog in the memory store."""
    return _fill(store)


@pytest.fixture
def app():
    return create_app(TestingConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sql_store(app):
    with app.app_context():
        yield app.extensions['catalog.store']


@pytest.fixture
def sql_library(sql_store):
    return _fill(sql_store)
