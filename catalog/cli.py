from datetime import date

import click
from flask import current_app
from flask.cli import with_appcontext

from .models import db
from .records import Author, Book, BookInstance, Genre


def seed(store):
    """Add a small sample catalog to an empty store."""
    authors = [store.authors.insert(a) for a in (
        Author(first_name="Patrick", family_name="Rothfuss", date_of_birth=date(1973, 6, 6)),
        Author(first_name="Ben", family_name="Bova", date_of_birth=date(1932, 11, 8)),
        Author(first_name="Isaac", family_name="Asimov", date_of_birth=date(1920, 1, 2),
               date_of_death=date(1992, 4, 6)),
    )]
    fantasy, science_fiction, poetry = [store.genres.insert(Genre(name=name))
                                        for name in ("Fantasy", "Science Fiction", "French Poetry")]
    books = [store.books.insert(b) for b in (
        Book(title="The Name of the Wind (The Kingkiller Chronicle, #1)", author_id=authors[0].id,
             summary="I have stolen princesses back from sleeping barrow kings.",
             isbn="9781473211896", genre_ids=[fantasy.id]),
        Book(title="Apes and Angels", author_id=authors[1].id,
             summary="Humankind headed out to the stars not for conquest, nor exploration.",
             isbn="9780765379528", genre_ids=[science_fiction.id]),
        Book(title="Foundation", author_id=authors[2].id,
             summary="The Galactic Empire is dying.", isbn="9780553293357",
             genre_ids=[science_fiction.id]),
    )]
    store.instances.insert(BookInstance(book_id=books[0].id, imprint="London Gollancz, 2014.",
                                        status="Available"))
    store.instances.insert(BookInstance(book_id=books[1].id, imprint="Tor, 2016.", status="Loaned",
                                        due_back=date(2026, 11, 1)))
    store.instances.insert(BookInstance(book_id=books[2].id, imprint="Bantam Spectra, 1991."))
    return len(authors) + 3 + len(books) + 3


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Initialize the database and add sample data (for dev only)."""
    if current_app.config['CATALOG_STORE'] == 'sql':
        db.create_all()
    store = current_app.extensions['catalog.store']
    if store.authors.count():
        click.echo("DB already initialized.")
        return
    created = seed(store)
    click.echo(f"Initialized DB with {created} sample records.")
