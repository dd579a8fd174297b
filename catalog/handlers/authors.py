import logging

from ..errors import NotFound
from ..forms import AuthorForm, bind
from ..records import AUTHORS_URL, Author, author_name, author_url
from . import Redirect, Render

logger = logging.getLogger(__name__)


def _author_from_form(form, author_id=None):
    return Author(
        first_name=form.first_name.data or "",
        family_name=form.family_name.data or "",
        date_of_birth=form.date_of_birth.data,
        date_of_death=form.date_of_death.data,
        id=author_id,
    )


def _author_and_books(store, author_id):
    return store.gather(
        author=lambda: store.authors.get(author_id),
        author_books=lambda: store.books.find({"author_id": author_id}, order_by="title"),
    )


def author_list(store):
    authors = store.authors.find(order_by="family_name")
    return Render('author_list.html', title='Author List', author_list=authors)


def author_detail(store, author_id):
    results = _author_and_books(store, author_id)
    if results["author"] is None:
        raise NotFound("Author not found")
    return Render('author_detail.html', title=author_name(results["author"]), **results)


def author_create_get(store):
    return Render('author_form.html', title='Create Author')


def author_create_post(store, data):
    form = bind(AuthorForm, data)
    valid = form.validate()
    author = _author_from_form(form)
    if not valid:
        return Render('author_form.html', title='Create Author', author=author, errors=form.error_list)
    author = store.authors.insert(author)
    logger.info("Created author %s", author.id)
    return Redirect(author_url(author))


def author_update_get(store, author_id):
    author = store.authors.get(author_id)
    if author is None:
        raise NotFound("Author not found")
    return Render('author_form.html', title='Update Author', author=author)


def author_update_post(store, author_id, data):
    form = bind(AuthorForm, data)
    valid = form.validate()
    author = _author_from_form(form, author_id)
    if not valid:
        return Render('author_form.html', title='Update Author', author=author, errors=form.error_list)
    updated = store.authors.update(author_id, author)
    if updated is None:
        raise NotFound("Author not found")
    logger.info("Updated author %s", author_id)
    return Redirect(author_url(updated))


def author_delete_get(store, author_id):
    results = _author_and_books(store, author_id)
    if results["author"] is None:
        return Redirect(AUTHORS_URL)
    return Render('author_delete.html', title='Delete Author', **results)


def author_delete_post(store, author_id):
    results = _author_and_books(store, author_id)
    if results["author"] is None:
        return Redirect(AUTHORS_URL)
    if len(results["author_books"]) > 0:
        logger.info("Refused to delete author %s: %d books", author_id, len(results["author_books"]))
        return Render('author_delete.html', title='Delete Author', **results)
    store.authors.delete(author_id)
    logger.info("Deleted author %s", author_id)
    return Redirect(AUTHORS_URL)
