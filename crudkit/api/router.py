"""Router factory: one uniform CRUD route set per ``ResourceDefinition``.

Routes (mounted under ``/<plural>``):

- ``GET    /``      list every record (200)
- ``POST   /``      create a record (201)
- ``PUT    /{id}``  update a record (200, or 404)
- ``DELETE /{id}``  delete a record (204, or 404)

Errors are raised as ``ResourceError`` subclasses by the store and turned into
``{"error": message}`` bodies by the handler registered in ``create_app``.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Response, status

from crudkit.errors import NotFoundError
from crudkit.resources import FieldType, ResourceDefinition
from crudkit.storage import Record, StorageBackend

# Largest id a signed 64-bit column (and the sqlite3 driver) can bind.
_MAX_ID = 2**63 - 1

_JSON_TYPES = {
    FieldType.STR: "string",
    FieldType.BOOL: "boolean",
    FieldType.INT: "integer",
}


def build_resource_router(defn: ResourceDefinition, store: StorageBackend) -> APIRouter:
    """Create the ``APIRouter`` exposing *defn* over *store*."""
    router = APIRouter(prefix=defn.route_prefix, tags=[defn.plural])
    plural, name = defn.plural, defn.name

    @router.get(
        "",
        summary=f"Get all {plural}",
        description=f"Retrieve a list of all {plural}",
        response_description="Successful operation",
    )
    async def list_records() -> list[Record]:
        return store.list_all(defn)

    @router.post(
        "",
        status_code=status.HTTP_201_CREATED,
        summary=f"Create a new {name}",
        description=f"Create a new {name}",
        response_description="Successful operation",
        responses={400: {"description": defn.required_message}},
        openapi_extra=_request_body(defn, creating=True),
    )
    async def create_record(payload: Optional[dict[str, Any]] = Body(default=None)) -> Record:
        return store.create(defn, payload or {})

    @router.put(
        "/{record_id}",
        summary=f"Update a {name}",
        description=f"Update a {name} by ID",
        response_description="Successful operation",
        responses={404: {"description": defn.not_found_message}},
        openapi_extra=_request_body(defn),
    )
    async def update_record(
        record_id: str, payload: Optional[dict[str, Any]] = Body(default=None)
    ) -> Record:
        return store.update(defn, _parse_id(record_id, defn), payload or {})

    @router.delete(
        "/{record_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary=f"Delete a {name}",
        description=f"Delete a {name} by ID",
        response_description="Successful operation",
        responses={404: {"description": defn.not_found_message}},
    )
    async def delete_record(record_id: str) -> Response:
        store.delete(defn, _parse_id(record_id, defn))
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


def _parse_id(raw: str, defn: ResourceDefinition) -> int:
    """Parse a path id; anything but a plain decimal that fits a BIGINT matches no record."""
    if not (raw.isascii() and raw.isdigit()):
        raise NotFoundError(defn.not_found_message)
    record_id = int(raw)
    if record_id > _MAX_ID:
        raise NotFoundError(defn.not_found_message)
    return record_id


def _request_body(defn: ResourceDefinition, creating: bool = False) -> dict[str, Any]:
    """OpenAPI ``requestBody`` documenting the fields accepted by the operation."""
    fields = defn.create_fields if creating else defn.fields
    schema: dict[str, Any] = {
        "type": "object",
        "properties": {
            f.name: {"type": _JSON_TYPES[f.type], "description": f.description}
            for f in fields
        },
    }
    if creating and defn.required_fields:
        schema["required"] = [f.name for f in defn.required_fields]
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema}},
        }
    }
