"""Pass-through SQL storage.

Every operation issues exactly one parameterized statement through a
SQLAlchemy ``Engine``.  There is no presence validation: a missing required
field reaches the database as NULL and the NOT NULL constraint rejects it,
which surfaces as a ``BackendError`` (HTTP 500).
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Boolean, Column, Integer, MetaData, String, Table, create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from crudkit.errors import BackendError, NotFoundError
from crudkit.resources import BUILTIN_RESOURCES, FieldType, ResourceDefinition

from .base import Record, StorageBackend

_COLUMN_TYPES = {
    FieldType.STR: lambda: String(255),
    FieldType.BOOL: Boolean,
    FieldType.INT: Integer,
}


class SQLStore(StorageBackend):
    """SQL variant of ``StorageBackend``.

    ``update`` overwrites every column of the row: fields absent from the
    payload are written as NULL.
    """

    def __init__(
        self,
        engine: Engine,
        resources: list[ResourceDefinition] | None = None,
    ) -> None:
        self.engine = engine
        self.resources = list(resources if resources is not None else BUILTIN_RESOURCES)
        self._quote = engine.dialect.identifier_preparer.quote

    @classmethod
    def from_url(
        cls, url: str, resources: list[ResourceDefinition] | None = None
    ) -> "SQLStore":
        return cls(create_engine(url), resources)

    # -- Schema ------------------------------------------------------------

    def metadata(self) -> MetaData:
        """Build SQLAlchemy ``Table`` objects for every known resource."""
        metadata = MetaData()
        for defn in self.resources:
            columns = [Column("id", Integer, primary_key=True, autoincrement=True)]
            for fdef in defn.fields:
                columns.append(
                    Column(fdef.name, _COLUMN_TYPES[fdef.type](), nullable=not fdef.required)
                )
            Table(defn.table, metadata, *columns)
        return metadata

    def create_tables(self) -> None:
        """Create any missing resource tables."""
        try:
            self.metadata().create_all(self.engine)
        except SQLAlchemyError as exc:
            raise BackendError(str(exc)) from exc

    # -- CRUD --------------------------------------------------------------

    def list_all(self, defn: ResourceDefinition) -> list[Record]:
        rows = self._execute(f"SELECT * FROM {self._quote(defn.table)} ORDER BY id")
        return [_coerce(defn, row) for row in rows]

    def create(self, defn: ResourceDefinition, payload: dict[str, Any]) -> Record:
        params = defn.initial_values(payload)
        columns = ", ".join(self._quote(name) for name in params)
        placeholders = ", ".join(f":{name}" for name in params)
        rows = self._execute(
            f"INSERT INTO {self._quote(defn.table)} ({columns}) "
            f"VALUES ({placeholders}) RETURNING *",
            params,
        )
        return _coerce(defn, rows[0])

    def update(
        self, defn: ResourceDefinition, record_id: int, payload: dict[str, Any]
    ) -> Record:
        params: dict[str, Any] = {name: payload.get(name) for name in defn.field_names}
        assignments = ", ".join(f"{self._quote(name)} = :{name}" for name in params)
        params["id"] = record_id
        rows = self._execute(
            f"UPDATE {self._quote(defn.table)} SET {assignments} "
            "WHERE id = :id RETURNING *",
            params,
        )
        if not rows:
            raise NotFoundError(defn.not_found_message)
        return _coerce(defn, rows[0])

    def delete(self, defn: ResourceDefinition, record_id: int) -> None:
        rows = self._execute(
            f"DELETE FROM {self._quote(defn.table)} WHERE id = :id RETURNING *",
            {"id": record_id},
        )
        if not rows:
            raise NotFoundError(defn.not_found_message)

    def clear(self, defn: ResourceDefinition | None = None) -> None:
        targets = [defn] if defn is not None else self.resources
        for target in targets:
            self._execute(f"DELETE FROM {self._quote(target.table)}")

    def close(self) -> None:
        self.engine.dispose()

    # -- Internal ----------------------------------------------------------

    def _execute(self, statement: str, params: dict[str, Any] | None = None) -> list[Record]:
        """Run one statement in its own transaction and return the rows."""
        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(statement), params or {})
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as exc:
            raise BackendError(str(exc)) from exc


def _coerce(defn: ResourceDefinition, row: Record) -> Record:
    """Turn integer-encoded booleans (SQLite) back into ``bool``."""
    for fdef in defn.fields:
        if fdef.type is FieldType.BOOL and row.get(fdef.name) is not None:
            row[fdef.name] = bool(row[fdef.name])
    return row
