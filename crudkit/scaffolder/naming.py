"""Identifier derivation for scaffolded resources.

Every identifier the scaffolder writes (class name, module names, handler
names, table name, route prefix) is derived from the singular resource name
by the pure function ``derive_names``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from crudkit.errors import ScaffoldError


class ResourceNames(BaseModel):
    """All names derived from one singular resource name (e.g. ``task``)."""

    model_config = ConfigDict(frozen=True)

    name: str
    capitalized: str
    plural: str

    @property
    def type_name(self) -> str:
        """Model class name, e.g. ``Task``."""
        return self.capitalized

    @property
    def table(self) -> str:
        return self.plural

    @property
    def route_prefix(self) -> str:
        return f"/{self.plural}"

    @property
    def controller_module(self) -> str:
        return f"{self.name}_controller"

    @property
    def routes_module(self) -> str:
        return f"{self.name}_routes"

    @property
    def list_handler(self) -> str:
        return f"get_{self.plural}"

    @property
    def create_handler(self) -> str:
        return f"create_{self.name}"

    @property
    def update_handler(self) -> str:
        return f"update_{self.name}"

    @property
    def delete_handler(self) -> str:
        return f"delete_{self.name}"

    @property
    def not_found_message(self) -> str:
        return f"{self.capitalized} not found"

    @property
    def import_line(self) -> str:
        """Bootstrap import statement for the resource's router module."""
        return f"from app.routes import {self.routes_module}"

    @property
    def mount_line(self) -> str:
        """Bootstrap statement mounting the router under its prefix."""
        return f'app.include_router({self.routes_module}.router, prefix="{self.route_prefix}")'


def capitalize(name: str) -> str:
    """Upper-case the first character only: ``'orderItem'`` -> ``'OrderItem'``."""
    return name[:1].upper() + name[1:]


def pluralize(name: str) -> str:
    """Naive plural: always append ``s`` (``'category'`` -> ``'categorys'``)."""
    return f"{name}s"


def derive_names(resource_name: str | None) -> ResourceNames:
    """Derive every identifier for *resource_name*.

    Casing, existing plurals and collisions with other resources are not
    checked; the name is used as given.

    Raises:
        ScaffoldError: If the name is missing or blank.
    """
    if resource_name is None or not resource_name.strip():
        raise ScaffoldError("Please provide a resource name.")
    name = resource_name.strip()
    return ResourceNames(name=name, capitalized=capitalize(name), plural=pluralize(name))
