"""crudkit configuration.

Typed configuration for the API server and the resource scaffolder. All
settings use Pydantic v2 models so they can be validated at construction time
and serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field


class ApiConfig(BaseModel):
    """Settings for the CRUD HTTP API."""

    backend: Literal["memory", "sql"] = Field(
        default="memory", description="Storage variant behind every resource"
    )
    database_url: str = Field(
        default="sqlite:///./crudkit.db",
        description="SQLAlchemy URL used by the SQL backend",
    )
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000, ge=1, le=65535)
    docs_url: str = Field(default="/api-docs")


class ScaffoldConfig(BaseModel):
    """Settings for the resource scaffolder.

    ``project_root`` is the directory of the target project: the one holding
    ``init.sql``, ``resources.json`` and the ``app/`` package.
    """

    project_root: Path = Field(default=Path("."))
    patch_mode: Literal["registry", "splice"] = Field(
        default="registry",
        description="How the bootstrap file and init.sql are updated",
    )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def app_dir(self) -> Path:
        return self.project_root / "app"

    @property
    def bootstrap_path(self) -> Path:
        """The application entry module that mounts every resource router."""
        return self.app_dir / "main.py"

    @property
    def init_sql_path(self) -> Path:
        return self.project_root / "init.sql"

    @property
    def registry_path(self) -> Path:
        """Ordered list of registered resource names (registry mode only)."""
        return self.project_root / "resources.json"

    @property
    def models_dir(self) -> Path:
        return self.app_dir / "models"

    @property
    def controllers_dir(self) -> Path:
        return self.app_dir / "controllers"

    @property
    def routes_dir(self) -> Path:
        return self.app_dir / "routes"


class Config(BaseModel):
    """Global crudkit configuration.

    Instances are typically created once by a CLI entry point and then passed
    to ``create_app`` or ``ResourceGenerator``.
    """

    env: Literal["development", "test", "production"] = Field(default="development")
    api: ApiConfig = Field(default_factory=ApiConfig)
    scaffold: ScaffoldConfig = Field(default_factory=ScaffoldConfig)

    @property
    def is_test(self) -> bool:
        return self.env == "test"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CRUDKIT_ENV, CRUDKIT_BACKEND, CRUDKIT_DATABASE_URL,
            CRUDKIT_HOST, CRUDKIT_PORT, CRUDKIT_PROJECT_ROOT,
            CRUDKIT_PATCH_MODE.
        """
        api_kwargs: dict[str, Any] = {}
        if os.environ.get("CRUDKIT_BACKEND"):
            api_kwargs["backend"] = os.environ["CRUDKIT_BACKEND"]
        if os.environ.get("CRUDKIT_DATABASE_URL"):
            api_kwargs["database_url"] = os.environ["CRUDKIT_DATABASE_URL"]
        if os.environ.get("CRUDKIT_HOST"):
            api_kwargs["host"] = os.environ["CRUDKIT_HOST"]
        if os.environ.get("CRUDKIT_PORT"):
            api_kwargs["port"] = int(os.environ["CRUDKIT_PORT"])

        scaffold_kwargs: dict[str, Any] = {}
        if os.environ.get("CRUDKIT_PROJECT_ROOT"):
            scaffold_kwargs["project_root"] = Path(os.environ["CRUDKIT_PROJECT_ROOT"])
        if os.environ.get("CRUDKIT_PATCH_MODE"):
            scaffold_kwargs["patch_mode"] = os.environ["CRUDKIT_PATCH_MODE"]

        return cls(
            env=os.environ.get("CRUDKIT_ENV", "development"),
            api=ApiConfig(**api_kwargs),
            scaffold=ScaffoldConfig(**scaffold_kwargs),
        )
