"""
Local library catalog: a server-rendered Flask app for books, authors,
genres and book copies.

Run:
  flask --app catalog init-db
  flask --app catalog run
  then open http://127.0.0.1:5000/
"""

import atexit
from concurrent.futures import ThreadPoolExecutor

from flask import Flask, request
from flask_talisman import Talisman
from flask_wtf import CSRFProtect

from . import views
from .cli import init_db_command
from .config import Config
from .errors import register_error_handlers
from .logs import configure_logging, set_correlation_id
from .models import db
from .store import MemoryStore, SQLStore

csrf = CSRFProtect()


def _make_store(app):
    executor = None
    workers = app.config['CATALOG_FANOUT_WORKERS']
    if workers > 0:
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="catalog-fanout")
        atexit.register(executor.shutdown, wait=True)

    kind = app.config['CATALOG_STORE']
    if kind == 'memory':
        return MemoryStore(executor=executor)
    if kind == 'sql':
        return SQLStore(app, executor=executor)
    raise ValueError(f"Unknown CATALOG_STORE {kind!r}; expected 'sql' or 'memory'")


def create_app(config=None, **overrides):
    app = Flask(__name__)
    app.config.from_object(config or Config)
    app.config.update(overrides)

    logger = configure_logging(app.config['CATALOG_LOG_LEVEL'])

    db.init_app(app)
    csrf.init_app(app)
    if app.config['TALISMAN_ENABLED']:
        # Security headers; adjust CSP if adding external resources
        Talisman(app,
                 force_https=app.config['TALISMAN_FORCE_HTTPS'],
                 session_cookie_secure=app.config['TALISMAN_FORCE_HTTPS'],
                 content_security_policy={
                     'default-src': ["'self'"],
                     'style-src': ["'self'", "'unsafe-inline'"],
                 })

    app.extensions['catalog.store'] = _make_store(app)
    if app.config['CATALOG_STORE'] == 'sql' and app.config['CATALOG_CREATE_TABLES']:
        with app.app_context():
            db.create_all()

    @app.before_request
    def assign_correlation_id():
        set_correlation_id(request.headers.get('X-Request-ID'))

    register_error_handlers(app)
    app.register_blueprint(views.bp)
    app.cli.add_command(init_db_command)

    logger.info("Catalog app ready (store=%s)", app.config['CATALOG_STORE'])
    return app
