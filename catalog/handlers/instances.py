import logging
from datetime import date

from ..errors import NotFound
from ..forms import BookInstanceForm, bind
from ..records import BOOKINSTANCES_URL, DEFAULT_STATUS, STATUS_CHOICES, BookInstance, bookinstance_url
from . import Redirect, Render

logger = logging.getLogger(__name__)


def _instance_from_form(form, instance_id=None):
    return BookInstance(
        book_id=form.book.data or "",
        imprint=form.imprint.data or "",
        status=form.status.data or DEFAULT_STATUS,
        due_back=form.due_back.data,
        id=instance_id,
    )


def _render_form(store, title, instance=None, errors=None):
    return Render('bookinstance_form.html', title=title,
                  book_list=store.books.find(order_by="title"),
                  status_choices=STATUS_CHOICES,
                  bookinstance=instance, errors=errors or [])


def bookinstance_list(store):
    instances = store.instances.find(populate=("book",))
    return Render('bookinstance_list.html', title='Book Instance List', bookinstance_list=instances)


def bookinstance_detail(store, instance_id):
    instance = store.instances.get(instance_id, populate=("book",))
    if instance is None:
        raise NotFound("Book copy not found")
    return Render('bookinstance_detail.html', title='Book:', bookinstance=instance)


def bookinstance_create_get(store):
    return _render_form(store, 'Create BookInstance')


def bookinstance_create_post(store, data):
    form = bind(BookInstanceForm, data)
    valid = form.validate()
    instance = _instance_from_form(form)
    if not valid:
        return _render_form(store, 'Create BookInstance', instance, form.error_list)
    if instance.due_back is None:
        instance.due_back = date.today()
    instance = store.instances.insert(instance)
    logger.info("Created book copy %s of book %s", instance.id, instance.book_id)
    return Redirect(bookinstance_url(instance))


def bookinstance_update_get(store, instance_id):
    instance = store.instances.get(instance_id)
    if instance is None:
        raise NotFound("Book copy not found")
    return _render_form(store, 'Update BookInstance', instance)


def bookinstance_update_post(store, instance_id, data):
    form = bind(BookInstanceForm, data)
    valid = form.validate()
    instance = _instance_from_form(form, instance_id)
    if not valid:
        return _render_form(store, 'Update BookInstance', instance, form.error_list)
    updated = store.instances.update(instance_id, instance)
    if updated is None:
        raise NotFound("Book copy not found")
    logger.info("Updated book copy %s", instance_id)
    return Redirect(bookinstance_url(updated))


def bookinstance_delete_get(store, instance_id):
    instance = store.instances.get(instance_id, populate=("book",))
    if instance is None:
        return Redirect(BOOKINSTANCES_URL)
    return Render('bookinstance_delete.html', title='Delete BookInstance', bookinstance=instance)


def bookinstance_delete_post(store, instance_id):
    # Copies have no dependents, so deletion is never blocked
    if store.instances.delete(instance_id):
        logger.info("Deleted book copy %s", instance_id)
    return Redirect(BOOKINSTANCES_URL)
