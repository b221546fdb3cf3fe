"""crudkit scaffolder -- generates new CRUD resources in a target project.

Given a singular resource name, renders a pydantic model, a controller with
four SQL-backed handlers and a FastAPI router, then registers the resource in
``init.sql`` and the project's ``app/main.py``.

Quick usage::

    from crudkit.config import ScaffoldConfig
    from crudkit.scaffolder import ResourceGenerator

    generator = ResourceGenerator(ScaffoldConfig(project_root=Path("./shop")))
    result = await generator.generate("invoice")
"""

from crudkit.scaffolder.generator import GenerationResult, ResourceGenerator
from crudkit.scaffolder.naming import ResourceNames, derive_names
from crudkit.scaffolder.patchers import AnchorSplicePatcher, RegistryPatcher
from crudkit.scaffolder.templates import TemplateRenderer

__all__ = [
    "AnchorSplicePatcher",
    "GenerationResult",
    "RegistryPatcher",
    "ResourceGenerator",
    "ResourceNames",
    "TemplateRenderer",
    "derive_names",
]
