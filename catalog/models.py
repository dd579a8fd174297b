import uuid
from datetime import date

from flask_sqlalchemy import SQLAlchemy

from .records import DEFAULT_STATUS

db = SQLAlchemy()


def new_id():
    return uuid.uuid4().hex


book_genres = db.Table(
    'book_genres',
    db.Column('book_id', db.String(32), db.ForeignKey('books.id'), primary_key=True),
    db.Column('genre_id', db.String(32), db.ForeignKey('genres.id'), primary_key=True),
)


# --- Models ---
# Stored text is HTML-escaped, up to five characters per input character,
# so length-limited fields get five times their form limit.
class Author(db.Model):
    __tablename__ = 'authors'
    id = db.Column(db.String(32), primary_key=True, default=new_id)
    first_name = db.Column(db.String(500), nullable=False)
    family_name = db.Column(db.String(500), nullable=False, index=True)
    date_of_birth = db.Column(db.Date)
    date_of_death = db.Column(db.Date)

    books = db.relationship('Book', back_populates='author')


class Genre(db.Model):
    __tablename__ = 'genres'
    id = db.Column(db.String(32), primary_key=True, default=new_id)
    # Uniqueness is checked by the create handler, not by the database
    name = db.Column(db.String(500), nullable=False, index=True)


class Book(db.Model):
    __tablename__ = 'books'
    id = db.Column(db.String(32), primary_key=True, default=new_id)
    title = db.Column(db.Text, nullable=False)
    author_id = db.Column(db.String(32), db.ForeignKey('authors.id'), nullable=False)
    summary = db.Column(db.Text, nullable=False)
    isbn = db.Column(db.Text, nullable=False)

    author = db.relationship('Author', back_populates='books')
    genres = db.relationship('Genre', secondary=book_genres, lazy='selectin')
    instances = db.relationship('BookInstance', back_populates='book')


class BookInstance(db.Model):
    __tablename__ = 'book_instances'
    id = db.Column(db.String(32), primary_key=True, default=new_id)
    book_id = db.Column(db.String(32), db.ForeignKey('books.id'), nullable=False, index=True)
    imprint = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=DEFAULT_STATUS)
    due_back = db.Column(db.Date, default=date.today)

    book = db.relationship('Book', back_populates='instances')
