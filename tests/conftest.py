"""Shared pytest fixtures for the crudkit test suite.

Provides reusable fixtures for:
- Test-mode configuration
- In-memory and SQLite-backed stores
- FastAPI test clients over either store
- Scaffolder target projects (fresh, and with a hand-written bootstrap file)
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from crudkit.api import create_app
from crudkit.config import ApiConfig, Config, ScaffoldConfig
from crudkit.storage import InMemoryStore, SQLStore


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def test_config() -> Config:
    """Configuration with request logging silenced."""
    return Config(env="test")


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'crudkit-test.db'}"


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def sql_store(sqlite_url: str) -> SQLStore:
    """A SQLite-backed store with every built-in table created."""
    store = SQLStore.from_url(sqlite_url)
    store.create_tables()
    yield store
    store.close()


# ---------------------------------------------------------------------------
# API clients
# ---------------------------------------------------------------------------


@pytest.fixture
def client(test_config: Config, memory_store: InMemoryStore) -> TestClient:
    """Test client over the in-memory variant."""
    app = create_app(test_config, store=memory_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sql_client(sqlite_url: str, sql_store: SQLStore) -> TestClient:
    """Test client over the SQL variant."""
    config = Config(env="test", api=ApiConfig(backend="sql", database_url=sqlite_url))
    app = create_app(config, store=sql_store)
    with TestClient(app) as test_client:
        yield test_client


# ---------------------------------------------------------------------------
# Scaffolder projects
# ---------------------------------------------------------------------------


SAMPLE_BOOTSTRAP = textwrap.dedent(
    """\
    from fastapi import FastAPI

    from app.middleware.logging import logging_middleware
    from app.routes import user_routes

    app = FastAPI(docs_url="/api-docs")
    app.middleware("http")(logging_middleware)

    app.include_router(user_routes.router, prefix="/users")
    """
)


@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Empty target project directory (auto-cleanup)."""
    project_dir = tmp_path / "shop"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def registry_config(tmp_project_dir: Path) -> ScaffoldConfig:
    return ScaffoldConfig(project_root=tmp_project_dir, patch_mode="registry")


@pytest.fixture
def splice_project(tmp_project_dir: Path) -> ScaffoldConfig:
    """A project with a hand-written bootstrap file holding both anchor lines."""
    config = ScaffoldConfig(project_root=tmp_project_dir, patch_mode="splice")
    config.bootstrap_path.parent.mkdir(parents=True)
    config.bootstrap_path.write_text(SAMPLE_BOOTSTRAP, encoding="utf-8")
    config.init_sql_path.write_text("-- schema\n", encoding="utf-8")
    return config


USERS_TABLE_SQL = "\nCREATE TABLE users (\n  id SERIAL PRIMARY KEY,\n  name VARCHAR(255) NOT NULL\n);\n"


@pytest.fixture
def existing_project(tmp_project_dir: Path) -> ScaffoldConfig:
    """A default-mode config over a project whose files predate ``resources.json``."""
    config = ScaffoldConfig(project_root=tmp_project_dir)
    config.bootstrap_path.parent.mkdir(parents=True)
    config.bootstrap_path.write_text(SAMPLE_BOOTSTRAP, encoding="utf-8")
    config.init_sql_path.write_text(USERS_TABLE_SQL, encoding="utf-8")
    return config
