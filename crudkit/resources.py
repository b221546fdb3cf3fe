"""Declarative definitions of the CRUD resources served by the API.

Every resource is described by a ``ResourceDefinition``.  The storage
backends, the router factory and the OpenAPI summaries are all driven by these
definitions, so adding a resource to the running API means adding one entry
to ``BUILTIN_RESOURCES``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class FieldType(str, Enum):
    """Column types a resource field may have."""
    STR = "str"
    BOOL = "bool"
    INT = "int"


class FieldDefinition(BaseModel):
    """A single writable field of a resource (``id`` is implicit)."""
    name: str = Field(..., description="Field name, used as JSON key and column name")
    type: FieldType = Field(default=FieldType.STR)
    required: bool = Field(default=False, description="Must be present and non-empty on create")
    default: Any = Field(
        default=None, description="Value used on create when the field is absent, null or empty"
    )
    create: bool = Field(
        default=True,
        description="Accepted from the client on create; otherwise always starts at the default",
    )
    description: str = Field(default="")


class ResourceDefinition(BaseModel):
    """A named entity type exposed through a uniform CRUD route set."""
    name: str = Field(..., description="Singular lowercase name, e.g. 'task'")
    plural: str = Field(..., description="Route prefix and table name, e.g. 'tasks'")
    fields: list[FieldDefinition] = Field(default_factory=list)
    required_message: str = Field(
        default="Name is required",
        description="Error body returned when a required field is missing on create",
    )

    @property
    def label(self) -> str:
        """Capitalized name, e.g. ``'Category'``."""
        return self.name[:1].upper() + self.name[1:]

    @property
    def route_prefix(self) -> str:
        return f"/{self.plural}"

    @property
    def table(self) -> str:
        return self.plural

    @property
    def not_found_message(self) -> str:
        return f"{self.label} not found"

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def create_fields(self) -> list[FieldDefinition]:
        return [f for f in self.fields if f.create]

    @property
    def required_fields(self) -> list[FieldDefinition]:
        return [f for f in self.fields if f.required]

    def missing_required(self, payload: dict[str, Any]) -> list[str]:
        """Return the required fields that are absent or falsy in *payload*."""
        return [f.name for f in self.required_fields if not payload.get(f.name)]

    def initial_values(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Column values for a new record built from a create *payload*.

        Fields not accepted on create take their default.  An absent, null or
        empty-string value also falls back to the default when there is one;
        other falsy values such as ``0`` and ``False`` are kept.
        """
        values: dict[str, Any] = {}
        for fdef in self.fields:
            value = payload.get(fdef.name) if fdef.create else None
            if (value is None or value == "") and fdef.default is not None:
                value = fdef.default
            values[fdef.name] = value
        return values


def _named(name: str, plural: str | None = None) -> ResourceDefinition:
    """A resource with a single required ``name`` field."""
    return ResourceDefinition(
        name=name,
        plural=plural or f"{name}s",
        fields=[
            FieldDefinition(
                name="name", required=True, description=f"The name of the {name}"
            ),
        ],
    )


TASK = ResourceDefinition(
    name="task",
    plural="tasks",
    fields=[
        FieldDefinition(name="title", required=True, description="The title of the task"),
        FieldDefinition(
            name="description", default="", description="The description of the task"
        ),
        FieldDefinition(
            name="completed",
            type=FieldType.BOOL,
            default=False,
            create=False,
            description="Whether the task is completed",
        ),
    ],
    required_message="Title is required",
)

USER = ResourceDefinition(
    name="user",
    plural="users",
    fields=[
        FieldDefinition(name="name", required=True, description="The name of the user"),
        FieldDefinition(name="email", required=True, description="The email of the user"),
    ],
    required_message="Name and email are required",
)

BUILTIN_RESOURCES: list[ResourceDefinition] = [
    _named("product"),
    _named("order"),
    _named("customer"),
    _named("invoice"),
    _named("payment"),
    _named("shipment"),
    _named("review"),
    _named("category", plural="categories"),
    TASK,
    USER,
]


def get_resource(name: str) -> ResourceDefinition:
    """Look up a built-in resource by singular name.

    Raises:
        KeyError: If no resource with that name is defined.
    """
    for defn in BUILTIN_RESOURCES:
        if defn.name == name:
            return defn
    raise KeyError(name)
