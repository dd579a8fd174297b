"""Store backed by the Flask-SQLAlchemy models in ``catalog.models``."""

from __future__ import annotations

from contextlib import contextmanager

from flask import current_app
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from .. import models, records
from ..errors import StoreFailure
from ..models import db
from .base import Repository, Store


@contextmanager
def store_errors(action: str):
    try:
        yield
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StoreFailure(f"Database error during {action}") from exc


# --- Row -> record conversion ---

def author_record(row: models.Author) -> records.Author:
    return records.Author(
        first_name=row.first_name,
        family_name=row.family_name,
        date_of_birth=row.date_of_birth,
        date_of_death=row.date_of_death,
        id=row.id,
    )


def genre_record(row: models.Genre) -> records.Genre:
    return records.Genre(name=row.name, id=row.id)


def book_record(row: models.Book, populate=frozenset()) -> records.Book:
    book = records.Book(
        title=row.title,
        author_id=row.author_id,
        summary=row.summary,
        isbn=row.isbn,
        genre_ids=[genre.id for genre in row.genres],
        id=row.id,
    )
    if "author" in populate and row.author is not None:
        book.author = author_record(row.author)
    if "genres" in populate:
        book.genres = [genre_record(genre) for genre in row.genres]
    return book


def instance_record(row: models.BookInstance, populate=frozenset()) -> records.BookInstance:
    instance = records.BookInstance(
        book_id=row.book_id,
        imprint=row.imprint,
        status=row.status,
        due_back=row.due_back,
        id=row.id,
    )
    if "book" in populate and row.book is not None:
        instance.book = book_record(row.book)
    return instance


class SQLRepository(Repository):
    model = None
    # record field -> criterion factory, for fields that are not plain columns
    criteria = {}

    def to_record(self, row, populate):
        raise NotImplementedError

    def apply(self, row, record):
        raise NotImplementedError

    def _where(self, query, where):
        for key, value in (where or {}).items():
            if key in self.criteria:
                query = query.where(self.criteria[key](value))
            else:
                query = query.where(getattr(self.model, key) == value)
        return query

    def _ordering(self, order_by):
        column = getattr(self.model, order_by.lstrip("-"))
        return column.desc() if order_by.startswith("-") else column.asc()

    def get(self, record_id, populate=()):
        with store_errors(f"{self.model.__tablename__} lookup"):
            row = db.session.get(self.model, record_id)
            if row is None:
                return None
            return self.to_record(row, set(populate))

    def find(self, where=None, order_by=None, populate=()):
        query = self._where(select(self.model), where)
        if order_by:
            query = query.order_by(self._ordering(order_by))
        populate = set(populate)
        with store_errors(f"{self.model.__tablename__} query"):
            return [self.to_record(row, populate) for row in db.session.scalars(query).all()]

    def count(self, where=None):
        query = self._where(select(func.count()).select_from(self.model), where)
        with store_errors(f"{self.model.__tablename__} count"):
            return db.session.scalar(query)

    def insert(self, record):
        with store_errors(f"{self.model.__tablename__} insert"):
            row = self.model(id=models.new_id())
            self.apply(row, record)
            db.session.add(row)
            db.session.commit()
            return self.to_record(row, set())

    def update(self, record_id, record):
        with store_errors(f"{self.model.__tablename__} update"):
            row = db.session.get(self.model, record_id)
            if row is None:
                return None
            self.apply(row, record)
            db.session.commit()
            return self.to_record(row, set())

    def delete(self, record_id):
        with store_errors(f"{self.model.__tablename__} delete"):
            row = db.session.get(self.model, record_id)
            if row is None:
                return False
            db.session.delete(row)
            db.session.commit()
            return True


class AuthorRepository(SQLRepository):
    model = models.Author

    def to_record(self, row, populate):
        return author_record(row)

    def apply(self, row, record):
        row.first_name = record.first_name
        row.family_name = record.family_name
        row.date_of_birth = record.date_of_birth
        row.date_of_death = record.date_of_death


class GenreRepository(SQLRepository):
    model = models.Genre

    def to_record(self, row, populate):
        return genre_record(row)

    def apply(self, row, record):
        row.name = record.name


class BookRepository(SQLRepository):
    model = models.Book
    criteria = {"genre_ids": lambda genre_id: models.Book.genres.any(models.Genre.id == genre_id)}

    def to_record(self, row, populate):
        return book_record(row, populate)

    def apply(self, row, record):
        row.title = record.title
        row.author_id = record.author_id
        row.summary = record.summary
        row.isbn = record.isbn
        if record.genre_ids:
            query = select(models.Genre).where(models.Genre.id.in_(record.genre_ids))
            row.genres = list(db.session.scalars(query).all())
        else:
            row.genres = []


class BookInstanceRepository(SQLRepository):
    model = models.BookInstance

    def to_record(self, row, populate):
        return instance_record(row, populate)

    def apply(self, row, record):
        row.book_id = record.book_id
        row.imprint = record.imprint
        row.status = record.status
        row.due_back = record.due_back


class SQLStore(Store):
    def __init__(self, app=None, executor=None):
        super().__init__(
            authors=AuthorRepository(),
            genres=GenreRepository(),
            books=BookRepository(),
            instances=BookInstanceRepository(),
            executor=executor,
        )
        self.app = app

    def prepare(self, task):
        # each worker gets its own app context and so its own session
        app = self.app or current_app._get_current_object()

        def run():
            with app.app_context():
                return task()
        return run
