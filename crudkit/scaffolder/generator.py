"""Resource scaffolding orchestrator.

Takes a singular resource name and generates the model, controller and router
modules for it in the target project, then registers the resource in
``init.sql`` and the bootstrap module through the configured patcher.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from crudkit.config import ScaffoldConfig

from .naming import ResourceNames, derive_names
from .patchers import BootstrapPatcher, make_patcher
from .templates import TemplateRenderer


class GenerationResult(BaseModel):
    """Paths touched by one ``ResourceGenerator.generate`` call."""

    names: ResourceNames
    model_path: Path
    controller_path: Path
    routes_path: Path
    patched: list[Path] = Field(
        default_factory=list, description="Shared files updated by the patcher"
    )
    support_files: list[Path] = Field(
        default_factory=list, description="Project skeleton files created because they were missing"
    )

    @property
    def written(self) -> list[Path]:
        """Every path written, in write order."""
        return [
            *self.support_files,
            self.model_path,
            self.controller_path,
            self.routes_path,
            *self.patched,
        ]


class ResourceGenerator:
    """Scaffolds one resource per ``generate`` call.

    Steps run strictly one after another.  A failure aborts the remaining
    steps and leaves the files already written in place; nothing is rolled
    back.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        renderer: TemplateRenderer | None = None,
        patcher: BootstrapPatcher | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.patcher = patcher or make_patcher(config, self.renderer)

    async def generate(self, resource_name: str) -> GenerationResult:
        """Generate and register the resource *resource_name*.

        Raises:
            ScaffoldError: If the name is blank, or the patcher refuses the
                target project.
            OSError: If any file cannot be read or written.
        """
        names = derive_names(resource_name)
        context = {"names": names}
        await self.patcher.preflight()

        # 1. Project skeleton (registry mode only; never overwrites)
        support: list[Path] = []
        if self.config.patch_mode == "registry":
            support = await self.renderer.render_tree(
                "project",
                self.config.project_root,
                context,
                skip_patterns=["main.py"],
                skip_existing=True,
            )

        # 2. Model, controller and router modules (always overwritten)
        model_path = await self.renderer.render_to_file(
            "resource/model.py.j2",
            self.config.models_dir / f"{names.name}.py",
            context,
        )
        controller_path = await self.renderer.render_to_file(
            "resource/controller.py.j2",
            self.config.controllers_dir / f"{names.controller_module}.py",
            context,
        )
        routes_path = await self.renderer.render_to_file(
            "resource/routes.py.j2",
            self.config.routes_dir / f"{names.routes_module}.py",
            context,
        )

        # 3. init.sql and bootstrap registration
        patched = await self.patcher.register(names)

        return GenerationResult(
            names=names,
            model_path=model_path,
            controller_path=controller_path,
            routes_path=routes_path,
            patched=patched,
            support_files=support,
        )
