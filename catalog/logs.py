"""Logging setup with a per-request correlation id."""

from __future__ import annotations

import logging
import uuid
from contextvars import ContextVar
from typing import Optional, Union

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _correlation_id.get() or "-"
        return True


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    logger = logging.getLogger("catalog")
    logger.setLevel(level)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(CorrelationIdFilter())
    logger.addHandler(handler)
    return logger


def set_correlation_id(value: Optional[str] = None) -> str:
    token = value or uuid.uuid4().hex[:12]
    _correlation_id.set(token)
    return token


def get_correlation_id() -> Optional[str]:
    return _correlation_id.get()
