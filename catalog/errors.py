"""Error types raised by handlers and stores, and the Flask fault handler."""

from __future__ import annotations

import logging
from typing import Optional

from flask import render_template
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base error forwarded to the fault handler.

    ``status`` is the HTTP status to answer with; ``None`` means server error.
    """

    status: Optional[int] = None

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class NotFound(CatalogError):
    status = 404


class StoreFailure(CatalogError):
    """Any failure reported by the persistent store."""


def register_error_handlers(app):
    @app.errorhandler(CatalogError)
    def catalog_error(e):
        status = e.status or 500
        if status >= 500:
            logger.error("Store or server failure: %s", e.message, exc_info=e)
            message = "Something went wrong while talking to the catalog database."
        else:
            logger.info("%s (%s)", e.message, status)
            message = e.message
        return render_template('error.html', title="Error", message=message, status=status), status

    @app.errorhandler(404)
    def not_found(e):
        return render_template('error.html', title="Not Found",
                               message="The requested page was not found.", status=404), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return render_template('error.html', title="Method Not Allowed",
                               message="Method not allowed.", status=405), 405

    @app.errorhandler(HTTPException)
    def http_error(e):
        return render_template('error.html', title=e.name, message=e.description, status=e.code), e.code
