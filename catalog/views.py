from flask import Blueprint, current_app, redirect, render_template, request

from .handlers import Redirect, authors, books, genres, home, instances
from .records import TEMPLATE_HELPERS

bp = Blueprint('catalog', __name__)


def get_store():
    return current_app.extensions['catalog.store']


def form_data():
    # Every key maps to a list; handlers normalize single and multiple values alike
    return request.form.to_dict(flat=False)


def respond(outcome):
    if isinstance(outcome, Redirect):
        return redirect(outcome.location)
    return render_template(outcome.template, **outcome.context)


@bp.app_context_processor
def record_helpers():
    return TEMPLATE_HELPERS


@bp.route('/')
def index():
    return respond(home.index(get_store()))


# --- Authors ---
@bp.route('/authors')
def author_list():
    return respond(authors.author_list(get_store()))


@bp.route('/author/create', methods=['GET', 'POST'])
def author_create():
    if request.method == 'POST':
        return respond(authors.author_create_post(get_store(), form_data()))
    return respond(authors.author_create_get(get_store()))


@bp.route('/author/<author_id>')
def author_detail(author_id):
    return respond(authors.author_detail(get_store(), author_id))


@bp.route('/author/<author_id>/update', methods=['GET', 'POST'])
def author_update(author_id):
    if request.method == 'POST':
        return respond(authors.author_update_post(get_store(), author_id, form_data()))
    return respond(authors.author_update_get(get_store(), author_id))


@bp.route('/author/<author_id>/delete', methods=['GET', 'POST'])
def author_delete(author_id):
    if request.method == 'POST':
        return respond(authors.author_delete_post(get_store(), author_id))
    return respond(authors.author_delete_get(get_store(), author_id))


# --- Genres ---
@bp.route('/genres')
def genre_list():
    return respond(genres.genre_list(get_store()))


@bp.route('/genre/create', methods=['GET', 'POST'])
def genre_create():
    if request.method == 'POST':
        return respond(genres.genre_create_post(get_store(), form_data()))
    return respond(genres.genre_create_get(get_store()))


@bp.route('/genre/<genre_id>')
def genre_detail(genre_id):
    return respond(genres.genre_detail(get_store(), genre_id))


@bp.route('/genre/<genre_id>/update', methods=['GET', 'POST'])
def genre_update(genre_id):
    if request.method == 'POST':
        return respond(genres.genre_update_post(get_store(), genre_id, form_data()))
    return respond(genres.genre_update_get(get_store(), genre_id))


@bp.route('/genre/<genre_id>/delete', methods=['GET', 'POST'])
def genre_delete(genre_id):
    if request.method == 'POST':
        return respond(genres.genre_delete_post(get_store(), genre_id))
    return respond(genres.genre_delete_get(get_store(), genre_id))


# --- Books ---
@bp.route('/books')
def book_list():
    return respond(books.book_list(get_store()))


@bp.route('/book/create', methods=['GET', 'POST'])
def book_create():
    if request.method == 'POST':
        return respond(books.book_create_post(get_store(), form_data()))
    return respond(books.book_create_get(get_store()))


@bp.route('/book/<book_id>')
def book_detail(book_id):
    return respond(books.book_detail(get_store(), book_id))


@bp.route('/book/<book_id>/update', methods=['GET', 'POST'])
def book_update(book_id):
    if request.method == 'POST':
        return respond(books.book_update_post(get_store(), book_id, form_data()))
    return respond(books.book_update_get(get_store(), book_id))


@bp.route('/book/<book_id>/delete', methods=['GET', 'POST'])
def book_delete(book_id):
    if request.method == 'POST':
        return respond(books.book_delete_post(get_store(), book_id))
    return respond(books.book_delete_get(get_store(), book_id))


# --- Book instances ---
@bp.route('/bookinstances')
def bookinstance_list():
    return respond(instances.bookinstance_list(get_store()))


@bp.route('/bookinstance/create', methods=['GET', 'POST'])
def bookinstance_create():
    if request.method == 'POST':
        return respond(instances.bookinstance_create_post(get_store(), form_data()))
    return respond(instances.bookinstance_create_get(get_store()))


@bp.route('/bookinstance/<instance_id>')
def bookinstance_detail(instance_id):
    return respond(instances.bookinstance_detail(get_store(), instance_id))


@bp.route('/bookinstance/<instance_id>/update', methods=['GET', 'POST'])
def bookinstance_update(instance_id):
    if request.method == 'POST':
        return respond(instances.bookinstance_update_post(get_store(), instance_id, form_data()))
    return respond(instances.bookinstance_update_get(get_store(), instance_id))


@bp.route('/bookinstance/<instance_id>/delete', methods=['GET', 'POST'])
def bookinstance_delete(instance_id):
    if request.method == 'POST':
        return respond(instances.bookinstance_delete_post(get_store(), instance_id))
    return respond(instances.bookinstance_delete_get(get_store(), instance_id))
