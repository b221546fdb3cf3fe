"""Storage backends for the CRUD API.

Two interchangeable variants implement ``StorageBackend``:

- ``InMemoryStore``: process-local lists, with presence validation on create.
- ``SQLStore``: one parameterized SQL statement per operation.

Quick usage::

    from crudkit.config import Config
    from crudkit.storage import create_store

    store = create_store(Config.from_env())
"""

from __future__ import annotations

from crudkit.config import Config
from crudkit.storage.base import Record, StorageBackend
from crudkit.storage.memory import InMemoryStore
from crudkit.storage.sql import SQLStore


def create_store(config: Config) -> StorageBackend:
    """Build the storage variant selected by ``config.api.backend``."""
    if config.api.backend == "sql":
        store = SQLStore.from_url(config.api.database_url)
        store.create_tables()
        return store
    return InMemoryStore()


__all__ = [
    "InMemoryStore",
    "Record",
    "SQLStore",
    "StorageBackend",
    "create_store",
]
