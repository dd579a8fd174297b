import logging

from ..errors import NotFound
from ..forms import BookForm, bind
from ..records import BOOKS_URL, Book, book_url, mark_checked
from . import Redirect, Render

logger = logging.getLogger(__name__)


def _book_from_form(form, book_id=None):
    return Book(
        title=form.title.data or "",
        author_id=form.author.data or "",
        summary=form.summary.data or "",
        isbn=form.isbn.data or "",
        genre_ids=[genre_id for genre_id in form.genre.data or [] if genre_id],
        id=book_id,
    )


def _authors_and_genres(store):
    """Reference data for the author and genre selectors."""
    return store.gather(
        authors=lambda: store.authors.find(order_by="family_name"),
        genres=lambda: store.genres.find(order_by="name"),
    )


def _render_form(store, title, book, errors):
    choices = _authors_and_genres(store)
    return Render('book_form.html', title=title, authors=choices["authors"],
                  genres=mark_checked(choices["genres"], book.genre_ids), book=book, errors=errors)


def _book_and_instances(store, book_id, populate=()):
    return store.gather(
        book=lambda: store.books.get(book_id, populate=populate),
        book_instances=lambda: store.instances.find({"book_id": book_id}),
    )


def book_list(store):
    books = store.books.find(order_by="title", populate=("author",))
    return Render('book_list.html', title='Book List', book_list=books)


def book_detail(store, book_id):
    results = _book_and_instances(store, book_id, populate=("author", "genres"))
    if results["book"] is None:
        raise NotFound("Book not found")
    return Render('book_detail.html', title=results["book"].title, **results)


def book_create_get(store):
    return Render('book_form.html', title='Create Book', **_authors_and_genres(store))


def book_create_post(store, data):
    form = bind(BookForm, data)
    valid = form.validate()
    book = _book_from_form(form)
    if not valid:
        return _render_form(store, 'Create Book', book, form.error_list)
    book = store.books.insert(book)
    logger.info("Created book %s (%s)", book.id, book.title)
    return Redirect(book_url(book))


def book_update_get(store, book_id):
    results = store.gather(
        book=lambda: store.books.get(book_id, populate=("author", "genres")),
        authors=lambda: store.authors.find(order_by="family_name"),
        genres=lambda: store.genres.find(order_by="name"),
    )
    book = results["book"]
    if book is None:
        raise NotFound("Book not found")
    return Render('book_form.html', title='Update Book', authors=results["authors"],
                  genres=mark_checked(results["genres"], book.genre_ids), book=book)


def book_update_post(store, book_id, data):
    form = bind(BookForm, data)
    valid = form.validate()
    # Keep the path id: the update must target the existing record
    book = _book_from_form(form, book_id)
    if not valid:
        return _render_form(store, 'Update Book', book, form.error_list)
    updated = store.books.update(book_id, book)
    if updated is None:
        raise NotFound("Book not found")
    logger.info("Updated book %s", book_id)
    return Redirect(book_url(updated))


def book_delete_get(store, book_id):
    results = _book_and_instances(store, book_id, populate=("author",))
    if results["book"] is None:
        return Redirect(BOOKS_URL)
    return Render('book_delete.html', title='Delete Book', **results)


def book_delete_post(store, book_id):
    results = _book_and_instances(store, book_id, populate=("author",))
    if results["book"] is None:
        return Redirect(BOOKS_URL)
    if len(results["book_instances"]) > 0:
        logger.info("Refused to delete book %s: %d copies exist", book_id, len(results["book_instances"]))
        return Render('book_delete.html', title='Delete Book', **results)
    store.books.delete(book_id)
    logger.info("Deleted book %s", book_id)
    return Redirect(BOOKS_URL)
