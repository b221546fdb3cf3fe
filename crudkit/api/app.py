"""Composition root for the CRUD API.

``create_app`` owns the storage backend: it builds it from configuration
(unless one is injected), passes it by reference to every resource router, and
closes it on shutdown.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from crudkit.api.middleware import logging_middleware
from crudkit.api.router import build_resource_router
from crudkit.config import Config
from crudkit.errors import ResourceError
from crudkit.resources import BUILTIN_RESOURCES, ResourceDefinition
from crudkit.storage import StorageBackend, create_store

GREETING = "Hello, crudkit!"


async def _resource_error_handler(request: Request, exc: ResourceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def create_app(
    config: Config | None = None,
    store: StorageBackend | None = None,
    resources: list[ResourceDefinition] | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Application configuration. Defaults to ``Config.from_env()``.
        store: Storage backend shared by every resource. Defaults to the
            variant selected by ``config.api.backend``.
        resources: Resources to mount. Defaults to ``BUILTIN_RESOURCES``.

    Returns:
        The configured application. ``app.state.store`` and
        ``app.state.config`` expose the injected collaborators.
    """
    config = config or Config.from_env()
    store = store if store is not None else create_store(config)
    resources = resources if resources is not None else BUILTIN_RESOURCES

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        store.close()

    app = FastAPI(
        title="crudkit",
        description="CRUD REST API over in-memory or SQL storage",
        docs_url=config.api.docs_url,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.store = store

    app.middleware("http")(logging_middleware(config))
    app.add_exception_handler(ResourceError, _resource_error_handler)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root() -> str:
        return GREETING

    for defn in resources:
        app.include_router(build_resource_router(defn, store))

    return app
