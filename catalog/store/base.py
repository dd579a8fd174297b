from __future__ import annotations

import abc
from concurrent.futures import Executor
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from ..fanout import parallel

Where = Mapping[str, Any]


class Repository(abc.ABC):
    """Record access for one entity.

    ``where`` is an equality filter; against a multi-valued field such as
    ``Book.genre_ids`` it matches records whose list contains the value.
    ``order_by`` names a field, with a ``-`` prefix for descending order.
    ``populate`` names the references to resolve (``author``, ``genres``,
    ``book``).
    """

    @abc.abstractmethod
    def get(self, record_id: str, populate: Iterable[str] = ()):
        """Return the record with ``record_id`` or ``None``."""

    @abc.abstractmethod
    def find(self, where: Optional[Where] = None, order_by: Optional[str] = None,
             populate: Iterable[str] = ()) -> List[Any]:
        ...

    def find_one(self, where: Where, populate: Iterable[str] = ()):
        found = self.find(where, populate=populate)
        return found[0] if found else None

    @abc.abstractmethod
    def count(self, where: Optional[Where] = None) -> int:
        ...

    @abc.abstractmethod
    def insert(self, record):
        """Store a new record and return it with its generated id."""

    @abc.abstractmethod
    def update(self, record_id: str, record):
        """Replace the stored record ``record_id``; ``None`` if there is none."""

    @abc.abstractmethod
    def delete(self, record_id: str) -> bool:
        ...


class Store:
    """The four repositories a handler works with."""

    def __init__(self, authors: Repository, genres: Repository, books: Repository,
                 instances: Repository, executor: Optional[Executor] = None):
        self.authors = authors
        self.genres = genres
        self.books = books
        self.instances = instances
        self.executor = executor

    def gather(self, **tasks: Callable[[], Any]) -> Dict[str, Any]:
        if self.executor is None:
            return parallel(tasks)
        return parallel({name: self.prepare(task) for name, task in tasks.items()}, self.executor)

    def prepare(self, task: Callable[[], Any]) -> Callable[[], Any]:
        """Wrap a task before it is handed to a worker thread."""
        return task
