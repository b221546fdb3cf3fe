"""Process-local storage: one list and one id counter per resource.

State is lost on restart.  Handlers share the store by reference and run on a
single event loop, so the read-modify-write sequences below are not locked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from crudkit.errors import NotFoundError, ValidationError
from crudkit.resources import ResourceDefinition

from .base import Record, StorageBackend


@dataclass
class _Table:
    rows: list[Record] = field(default_factory=list)
    next_id: int = 1

    def index_of(self, record_id: int) -> int:
        for i, row in enumerate(self.rows):
            if row["id"] == record_id:
                return i
        return -1


class InMemoryStore(StorageBackend):
    """In-memory variant of ``StorageBackend``.

    Ids start at 1 per resource and are never reused until ``clear`` resets
    the counter.  ``create`` enforces presence of required fields; ``update``
    replaces only the fields present in the payload.
    """

    def __init__(self) -> None:
        self._tables: dict[str, _Table] = {}

    def _table(self, defn: ResourceDefinition) -> _Table:
        return self._tables.setdefault(defn.name, _Table())

    def list_all(self, defn: ResourceDefinition) -> list[Record]:
        return [dict(row) for row in self._table(defn).rows]

    def create(self, defn: ResourceDefinition, payload: dict[str, Any]) -> Record:
        if defn.missing_required(payload):
            raise ValidationError(defn.required_message)

        table = self._table(defn)
        record: Record = {"id": table.next_id, **defn.initial_values(payload)}
        table.next_id += 1
        table.rows.append(record)
        return dict(record)

    def update(
        self, defn: ResourceDefinition, record_id: int, payload: dict[str, Any]
    ) -> Record:
        table = self._table(defn)
        index = table.index_of(record_id)
        if index == -1:
            raise NotFoundError(defn.not_found_message)

        updated = dict(table.rows[index])
        for name in defn.field_names:
            if name in payload:
                updated[name] = payload[name]
        table.rows[index] = updated
        return dict(updated)

    def delete(self, defn: ResourceDefinition, record_id: int) -> None:
        table = self._table(defn)
        index = table.index_of(record_id)
        if index == -1:
            raise NotFoundError(defn.not_found_message)
        del table.rows[index]

    def clear(self, defn: ResourceDefinition | None = None) -> None:
        if defn is None:
            self._tables.clear()
        else:
            self._tables.pop(defn.name, None)
