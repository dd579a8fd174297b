import logging

from ..errors import NotFound
from ..forms import FieldError, GenreForm, bind
from ..records import GENRES_URL, Genre, genre_url
from . import Redirect, Render

logger = logging.getLogger(__name__)


def _genre_and_books(store, genre_id):
    return store.gather(
        genre=lambda: store.genres.get(genre_id),
        genre_books=lambda: store.books.find({"genre_ids": genre_id}, order_by="title"),
    )


def genre_list(store):
    return Render('genre_list.html', title='Genre List', genre_list=store.genres.find(order_by="name"))


def genre_detail(store, genre_id):
    results = _genre_and_books(store, genre_id)
    if results["genre"] is None:
        raise NotFound("Genre not found")
    return Render('genre_detail.html', title='Genre Detail', **results)


def genre_create_get(store):
    return Render('genre_form.html', title='Create Genre')


def genre_create_post(store, data):
    form = bind(GenreForm, data)
    valid = form.validate()
    genre = Genre(name=form.name.data or "")
    if not valid:
        return Render('genre_form.html', title='Create Genre', genre=genre, errors=form.error_list)

    # Same name already catalogued: send the user to it instead of duplicating
    found = store.genres.find_one({"name": genre.name})
    if found is not None:
        return Redirect(genre_url(found))
    genre = store.genres.insert(genre)
    logger.info("Created genre %s (%s)", genre.id, genre.name)
    return Redirect(genre_url(genre))


def genre_update_get(store, genre_id):
    genre = store.genres.get(genre_id)
    if genre is None:
        raise NotFound("Genre not found")
    return Render('genre_form.html', title='Update Genre', genre=genre)


def genre_update_post(store, genre_id, data):
    form = bind(GenreForm, data)
    valid = form.validate()
    genre = Genre(name=form.name.data or "", id=genre_id)
    if not valid:
        return Render('genre_form.html', title='Update Genre', genre=genre, errors=form.error_list)

    found = store.genres.find_one({"name": genre.name})
    if found is not None:
        if found.id != genre_id:
            errors = [FieldError("name", "Another genre already has this name")]
            return Render('genre_form.html', title='Update Genre', genre=genre, errors=errors)
        return Redirect(genre_url(found))
    updated = store.genres.update(genre_id, genre)
    if updated is None:
        raise NotFound("Genre not found")
    logger.info("Updated genre %s", genre_id)
    return Redirect(genre_url(updated))


def genre_delete_get(store, genre_id):
    results = _genre_and_books(store, genre_id)
    if results["genre"] is None:
        return Redirect(GENRES_URL)
    return Render('genre_delete.html', title='Delete Genre', **results)


def genre_delete_post(store, genre_id):
    results = _genre_and_books(store, genre_id)
    if results["genre"] is None:
        return Redirect(GENRES_URL)
    if len(results["genre_books"]) > 0:
        logger.info("Refused to delete genre %s: used by %d books", genre_id, len(results["genre_books"]))
        return Render('genre_delete.html', title='Delete Genre', **results)
    store.genres.delete(genre_id)
    logger.info("Deleted genre %s", genre_id)
    return Redirect(GENRES_URL)
