from .base import Repository, Store
from .memory import MemoryStore
from .sql import SQLStore

__all__ = ["Repository", "Store", "MemoryStore", "SQLStore"]
