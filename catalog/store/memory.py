"""In-process store keeping records in dictionaries.

Used by the tests and selectable with ``CATALOG_STORE = "memory"``. Data
lives as long as the process.
"""

from __future__ import annotations

import copy
import threading
import uuid
from dataclasses import replace
from typing import Dict, Iterable, Optional

from ..records import Author, Book, BookInstance, Genre
from .base import Repository, Store, Where

# record type -> (display attribute, repository name, id attribute)
REFERENCES = {
    Book: (("author", "authors", "author_id"), ("genres", "genres", "genre_ids")),
    BookInstance: (("book", "books", "book_id"),),
}


def new_id() -> str:
    return uuid.uuid4().hex


def _matches(record, where: Optional[Where]) -> bool:
    for key, expected in (where or {}).items():
        actual = getattr(record, key)
        if isinstance(actual, list):
            if expected not in actual:
                return False
        elif actual != expected:
            return False
    return True


def _sort_key(name):
    def key(record):
        value = getattr(record, name)
        return (value is None, value)
    return key


class MemoryRepository(Repository):
    def __init__(self, store: "MemoryStore", record_type):
        self.store = store
        self.record_type = record_type
        self.records: Dict[str, object] = {}

    def _bare(self, record):
        """Copy of ``record`` without resolved references."""
        cleared = {}
        for attr, _, id_attr in REFERENCES.get(self.record_type, ()):
            cleared[attr] = [] if id_attr.endswith("_ids") else None
        if self.record_type is Genre:
            cleared["checked"] = False
        return copy.deepcopy(replace(record, **cleared))

    def _resolve(self, record, populate: Iterable[str]):
        populate = set(populate)
        for attr, repo_name, id_attr in REFERENCES.get(self.record_type, ()):
            if attr not in populate:
                continue
            repo = getattr(self.store, repo_name)
            value = getattr(record, id_attr)
            if isinstance(value, list):
                resolved = [repo.get(ref) for ref in value]
                setattr(record, attr, [item for item in resolved if item is not None])
            else:
                setattr(record, attr, repo.get(value) if value else None)
        return record

    def get(self, record_id, populate=()):
        with self.store.lock:
            record = self.records.get(record_id)
            if record is None:
                return None
            return self._resolve(copy.deepcopy(record), populate)

    def find(self, where=None, order_by=None, populate=()):
        with self.store.lock:
            found = [copy.deepcopy(r) for r in self.records.values() if _matches(r, where)]
        if order_by:
            descending = order_by.startswith("-")
            found.sort(key=_sort_key(order_by.lstrip("-")), reverse=descending)
        return [self._resolve(record, populate) for record in found]

    def count(self, where=None):
        with self.store.lock:
            return sum(1 for r in self.records.values() if _matches(r, where))

    def insert(self, record):
        stored = replace(self._bare(record), id=new_id())
        with self.store.lock:
            self.records[stored.id] = stored
        return copy.deepcopy(stored)

    def update(self, record_id, record):
        with self.store.lock:
            if record_id not in self.records:
                return None
            stored = replace(self._bare(record), id=record_id)
            self.records[record_id] = stored
        return copy.deepcopy(stored)

    def delete(self, record_id):
        with self.store.lock:
            return self.records.pop(record_id, None) is not None


class MemoryStore(Store):
    def __init__(self, executor=None):
        self.lock = threading.RLock()
        super().__init__(
            authors=MemoryRepository(self, Author),
            genres=MemoryRepository(self, Genre),
            books=MemoryRepository(self, Book),
            instances=MemoryRepository(self, BookInstance),
            executor=executor,
        )
