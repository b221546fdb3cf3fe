"""Storage backend interface shared by the in-memory and SQL variants."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from crudkit.resources import ResourceDefinition

Record = dict[str, Any]


class StorageBackend(ABC):
    """CRUD operations over the records of one or more resources.

    Implementations raise ``NotFoundError`` from ``update``/``delete`` when no
    record has the given id, and ``BackendError`` when the underlying store
    fails.
    """

    @abstractmethod
    def list_all(self, defn: ResourceDefinition) -> list[Record]:
        """Return every record of *defn*, in insertion order."""

    @abstractmethod
    def create(self, defn: ResourceDefinition, payload: dict[str, Any]) -> Record:
        """Insert a record built from *payload* and return it with its id."""

    @abstractmethod
    def update(
        self, defn: ResourceDefinition, record_id: int, payload: dict[str, Any]
    ) -> Record:
        """Update the record with *record_id* and return the new version."""

    @abstractmethod
    def delete(self, defn: ResourceDefinition, record_id: int) -> None:
        """Remove the record with *record_id*."""

    @abstractmethod
    def clear(self, defn: ResourceDefinition | None = None) -> None:
        """Drop all records of *defn*, or of every resource when ``None``."""

    def close(self) -> None:
        """Release any resources held by the backend."""
