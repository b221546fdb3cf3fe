"""FastAPI application exposing the CRUD resources.

Quick usage::

    from crudkit.api import create_app
    from crudkit.config import Config
    from crudkit.storage import InMemoryStore

    app = create_app(Config(env="test"), store=InMemoryStore())
"""

from crudkit.api.app import create_app
from crudkit.api.router import build_resource_router

__all__ = [
    "build_resource_router",
    "create_app",
]
