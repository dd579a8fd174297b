import pytest

from catalog import create_app
from catalog.config import TestingConfig
from catalog.errors import StoreFailure


def _store(app):
    return app.extensions['catalog.store']


def _find(app, repo, where):
    with app.app_context():
        return getattr(_store(app), repo).find_one(where)


def test_home_page(client):
    response = client.get('/')
    assert response.status_code == 200
    assert b'Local Library Home' in response.data
    assert b'<strong>Books:</strong> 0' in response.data


def test_security_headers(client):
    response = client.get('/genres')
    assert 'Content-Security-Policy' in response.headers
    assert response.headers['X-Frame-Options'] == 'SAMEORIGIN'


def test_create_genre_redirects_to_detail(app, client):
    response = client.post('/genre/create', data={'name': 'Poetry'})

    genre = _find(app, 'genres', {'name': 'Poetry'})
    assert response.status_code == 302
    assert response.headers['Location'].endswith(f'/genre/{genre.id}')
    assert b'Poetry' in client.get(f'/genre/{genre.id}').data


def test_invalid_genre_rerenders_with_error(client):
    response = client.post('/genre/create', data={'name': 'ab'})
    assert response.status_code == 200
    assert b'Genre name must be between 3 and 100 characters' in response.data


def test_missing_book_is_404(client):
    response = client.get('/book/' + '0' * 32)
    assert response.status_code == 404
    assert b'Book not found' in response.data


def test_unknown_route_is_404(client):
    assert client.get('/no/such/page').status_code == 404


def test_method_not_allowed(client):
    assert client.post('/genres').status_code == 405


def _author_and_genres(client, app):
    client.post('/author/create', data={'first_name': 'Isaac', 'family_name': 'Asimov',
                                        'date_of_birth': '1920-01-02'})
    client.post('/genre/create', data={'name': 'Science Fiction'})
    client.post('/genre/create', data={'name': 'Fantasy'})
    return (_find(app, 'authors', {'family_name': 'Asimov'}),
            _find(app, 'genres', {'name': 'Science Fiction'}),
            _find(app, 'genres', {'name': 'Fantasy'}))


def test_book_with_one_genre(app, client):
    author, scifi, _ = _author_and_genres(client, app)

    response = client.post('/book/create', data={'title': 'Foundation', 'author': author.id,
                                                 'summary': 'Empire.', 'isbn': '9780553293357',
                                                 'genre': scifi.id})

    book = _find(app, 'books', {'title': 'Foundation'})
    assert response.status_code == 302
    assert book.genre_ids == [scifi.id]


def test_book_with_many_genres(app, client):
    author, scifi, fantasy = _author_and_genres(client, app)

    client.post('/book/create', data={'title': 'Foundation', 'author': author.id,
                                      'summary': 'Empire.', 'isbn': '9780553293357',
                                      'genre': [scifi.id, fantasy.id]})

    book = _find(app, 'books', {'title': 'Foundation'})
    assert sorted(book.genre_ids) == sorted([scifi.id, fantasy.id])
    page = client.get(f'/book/{book.id}').data
    assert b'Science Fiction' in page and b'Fantasy' in page
    assert b'Asimov, Isaac' in page


def test_genre_delete_blocked_page(app, client):
    author, scifi, _ = _author_and_genres(client, app)
    client.post('/book/create', data={'title': 'Foundation', 'author': author.id,
                                      'summary': 'Empire.', 'isbn': '1', 'genre': scifi.id})

    response = client.post(f'/genre/{scifi.id}/delete')

    assert response.status_code == 200
    assert b'Delete the following books' in response.data
    assert _find(app, 'genres', {'name': 'Science Fiction'}) is not None


def test_store_failure_is_500(app, client, monkeypatch):
    def boom(*args, **kwargs):
        raise StoreFailure("database is locked")

    monkeypatch.setattr(_store(app).genres, 'find', boom)
    response = client.get('/genres')

    assert response.status_code == 500
    assert b'database is locked' not in response.data
    assert b'Something went wrong' in response.data


def test_csrf_token_required_when_enabled():
    app = create_app(TestingConfig, WTF_CSRF_ENABLED=True)
    response = app.test_client().post('/genre/create', data={'name': 'Poetry'})
    assert response.status_code == 400


def test_memory_store_app():
    app = create_app(TestingConfig, CATALOG_STORE='memory')
    client = app.test_client()
    client.post('/genre/create', data={'name': 'Poetry'})
    assert _store(app).genres.count() == 1
    assert b'Poetry' in client.get('/genres').data


def test_unknown_store_kind():
    with pytest.raises(ValueError):
        create_app(TestingConfig, CATALOG_STORE='mongo')


def test_init_db_command(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['init-db'])
    assert 'Initialized DB with 12 sample records.' in result.output

    result = runner.invoke(args=['init-db'])
    assert 'DB already initialized.' in result.output


def test_home_counts_with_worker_threads(tmp_path):
    app = create_app(TestingConfig, SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'catalog.db'}",
                     CATALOG_FANOUT_WORKERS=2)
    app.test_cli_runner().invoke(args=['init-db'])

    response = app.test_client().get('/')

    assert response.status_code == 200
    assert b'<strong>Books:</strong> 3' in response.data
    assert b'<strong>Copies available:</strong> 1' in response.data
    assert b'<strong>Genres:</strong> 3' in response.data
    _store(app).executor.shutdown(wait=True)


def test_worker_pool_is_shut_down_at_exit(monkeypatch):
    registered = []
    monkeypatch.setattr('catalog.atexit.register', lambda func, **kwargs: registered.append((func, kwargs)))

    app = create_app(TestingConfig, CATALOG_FANOUT_WORKERS=2)

    executor = _store(app).executor
    assert registered == [(executor.shutdown, {'wait': True})]
    executor.shutdown(wait=True)
