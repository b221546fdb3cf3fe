"""Registration of a scaffolded resource in the shared project files.

Two strategies update ``init.sql`` and the bootstrap module (``app/main.py``):

``AnchorSplicePatcher``
    Appends the ``CREATE TABLE`` fragment to ``init.sql`` and inserts the
    import and mount lines right after two fixed anchor lines of the bootstrap
    file.  Every run inserts again, so repeating a name duplicates lines.
    A bootstrap file missing either anchor is left untouched and the run
    fails.

``RegistryPatcher``
    Records the name in ``resources.json`` and regenerates ``init.sql`` and
    the bootstrap file in full from that list, each with an atomic replace.
    Repeating a name leaves every file unchanged.  A project whose shared files
    predate ``resources.json`` is refused rather than regenerated.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path

from crudkit.config import ScaffoldConfig
from crudkit.errors import ScaffoldError
from crudkit.utils import (
    append_file,
    dump_json,
    load_json_list,
    write_file,
    write_file_atomic,
)

from .naming import ResourceNames, derive_names
from .templates import TemplateRenderer

IMPORT_ANCHOR = "from app.middleware.logging import logging_middleware"
MOUNT_ANCHOR = 'app.include_router(user_routes.router, prefix="/users")'

TABLE_TEMPLATE = "resource/table.sql.j2"
BOOTSTRAP_TEMPLATE = "project/app/main.py.j2"


class BootstrapPatcher(ABC):
    """Registers one resource in ``init.sql`` and the bootstrap file."""

    def __init__(self, config: ScaffoldConfig, renderer: TemplateRenderer) -> None:
        self.config = config
        self.renderer = renderer

    async def preflight(self) -> None:
        """Check the target project before any file is written.

        Raises:
            ScaffoldError: If registering would damage existing project files.
        """

    @abstractmethod
    async def register(self, names: ResourceNames) -> list[Path]:
        """Apply the registration and return the paths that were written."""


# ---------------------------------------------------------------------------
# Anchor splicing
# ---------------------------------------------------------------------------


def splice_after(content: str, anchor: str, line: str) -> str:
    """Insert *line* on a new line right after the first *anchor* occurrence.

    *content* is returned unchanged when the anchor is absent.
    """
    return content.replace(anchor, f"{anchor}\n{line}", 1)


class AnchorSplicePatcher(BootstrapPatcher):
    """Literal substring insertion after fixed anchor lines."""

    async def register(self, names: ResourceNames) -> list[Path]:
        fragment = self.renderer.render(TABLE_TEMPLATE, {"names": names})
        init_sql = self.config.init_sql_path
        await asyncio.to_thread(append_file, init_sql, fragment)

        bootstrap = self.config.bootstrap_path
        content = await asyncio.to_thread(bootstrap.read_text, encoding="utf-8")
        missing = [a for a in (IMPORT_ANCHOR, MOUNT_ANCHOR) if a not in content]
        if missing:
            # Splicing only one of the two lines would leave a dangling import.
            raise ScaffoldError(f"Anchor line not found in {bootstrap}: {missing[0]}")

        content = splice_after(content, IMPORT_ANCHOR, names.import_line)
        content = splice_after(content, MOUNT_ANCHOR, names.mount_line)
        await asyncio.to_thread(write_file, bootstrap, content)
        return [init_sql, bootstrap]


# ---------------------------------------------------------------------------
# Registry regeneration
# ---------------------------------------------------------------------------


class RegistryPatcher(BootstrapPatcher):
    """Persisted resource list; derived files are regenerated from it."""

    async def preflight(self) -> None:
        if self.config.registry_path.exists():
            return
        for path in (self.config.bootstrap_path, self.config.init_sql_path):
            if path.exists():
                raise ScaffoldError(
                    f"{path} exists but {self.config.registry_path.name} does not; "
                    "regenerating would drop its registrations. "
                    "Use CRUDKIT_PATCH_MODE=splice for this project."
                )

    async def load_registry(self) -> list[str]:
        raw = await asyncio.to_thread(load_json_list, self.config.registry_path)
        return [str(name) for name in raw]

    async def register(self, names: ResourceNames) -> list[Path]:
        await self.preflight()
        registered = await self.load_registry()
        if names.name not in registered:
            registered.append(names.name)
            await asyncio.to_thread(
                write_file_atomic, self.config.registry_path, dump_json(registered)
            )

        resources = [derive_names(name) for name in registered]

        init_sql = self.config.init_sql_path
        sql = "".join(
            self.renderer.render(TABLE_TEMPLATE, {"names": r}) for r in resources
        )
        await asyncio.to_thread(write_file_atomic, init_sql, sql)

        bootstrap = self.config.bootstrap_path
        content = self.renderer.render(BOOTSTRAP_TEMPLATE, {"resources": resources})
        await asyncio.to_thread(write_file_atomic, bootstrap, content)

        return [self.config.registry_path, init_sql, bootstrap]


def make_patcher(config: ScaffoldConfig, renderer: TemplateRenderer) -> BootstrapPatcher:
    """Return the patcher selected by ``config.patch_mode``."""
    if config.patch_mode == "splice":
        return AnchorSplicePatcher(config, renderer)
    return RegistryPatcher(config, renderer)
