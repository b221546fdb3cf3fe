"""Tests for the Jinja2 TemplateRenderer and the bundled templates."""

from __future__ import annotations

import ast
from pathlib import Path

import pytest
from jinja2 import UndefinedError

from crudkit.scaffolder.naming import derive_names
from crudkit.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


class TestBundledTemplates:
    def test_lists_templates(self, renderer: TemplateRenderer):
        assert renderer.list_templates("resource") == [
            "resource/controller.py.j2",
            "resource/model.py.j2",
            "resource/routes.py.j2",
            "resource/table.sql.j2",
        ]
        assert "project/app/main.py.j2" in renderer.list_templates()

    def test_model(self, renderer: TemplateRenderer):
        source = renderer.render("resource/model.py.j2", {"names": derive_names("task")})
        ast.parse(source)
        assert "class Task(BaseModel):" in source
        assert "id: int" in source
        assert "name: str" in source

    def test_controller(self, renderer: TemplateRenderer):
        source = renderer.render("resource/controller.py.j2", {"names": derive_names("task")})
        tree = ast.parse(source)
        handlers = [n.name for n in tree.body if isinstance(n, ast.AsyncFunctionDef)]
        assert handlers == ["get_tasks", "create_task", "update_task", "delete_task"]
        assert "INSERT INTO tasks (name) VALUES (:name) RETURNING *" in source
        assert "UPDATE tasks SET name = :name WHERE id = :id RETURNING *" in source
        assert "DELETE FROM tasks WHERE id = :id RETURNING *" in source
        assert source.count('"Task not found"') == 2
        assert source.count("status_code=500") == 4

    def test_routes(self, renderer: TemplateRenderer):
        source = renderer.render("resource/routes.py.j2", {"names": derive_names("task")})
        ast.parse(source)
        assert "from app.controllers.task_controller import (" in source
        assert 'add_api_route("", get_tasks, methods=["GET"])' in source
        assert 'add_api_route("", create_task, methods=["POST"], status_code=201)' in source
        assert 'add_api_route("/{id}", update_task, methods=["PUT"])' in source
        assert 'add_api_route("/{id}", delete_task, methods=["DELETE"], status_code=204)' in source

    def test_table_fragment(self, renderer: TemplateRenderer):
        sql = renderer.render("resource/table.sql.j2", {"names": derive_names("task")})
        assert sql == (
            "\nCREATE TABLE tasks (\n"
            "  id SERIAL PRIMARY KEY,\n"
            "  name VARCHAR(255) NOT NULL\n"
            ");\n"
        )

    def test_bootstrap_lists_resources_in_order(self, renderer: TemplateRenderer):
        resources = [derive_names("user"), derive_names("task")]
        source = renderer.render("project/app/main.py.j2", {"resources": resources})
        ast.parse(source)
        lines = source.splitlines()
        imports = [l for l in lines if l.startswith("from app.routes import")]
        mounts = [l for l in lines if l.startswith("app.include_router(")]
        assert imports == [
            "from app.routes import user_routes",
            "from app.routes import task_routes",
        ]
        assert mounts == [
            'app.include_router(user_routes.router, prefix="/users")',
            'app.include_router(task_routes.router, prefix="/tasks")',
        ]

    def test_missing_context_is_an_error(self, renderer: TemplateRenderer):
        with pytest.raises(UndefinedError):
            renderer.render("resource/model.py.j2", {})


class TestFileRendering:
    async def test_render_to_file_creates_parents(self, renderer: TemplateRenderer, tmp_path: Path):
        out = tmp_path / "a" / "b" / "task.py"
        result = await renderer.render_to_file(
            "resource/model.py.j2", out, {"names": derive_names("task")}
        )
        assert result == out
        assert "class Task" in out.read_text(encoding="utf-8")

    async def test_render_tree_skips(self, renderer: TemplateRenderer, tmp_path: Path):
        written = await renderer.render_tree(
            "project", tmp_path, {}, skip_patterns=["main.py"]
        )
        rel = sorted(p.relative_to(tmp_path).as_posix() for p in written)
        assert "app/main.py" not in rel
        assert "app/services/db.py" in rel
        assert "app/middleware/logging.py" in rel
        assert "app/routes/__init__.py" in rel

    async def test_render_tree_skip_existing(self, renderer: TemplateRenderer, tmp_path: Path):
        custom = tmp_path / "app" / "services" / "db.py"
        custom.parent.mkdir(parents=True)
        custom.write_text("# custom\n", encoding="utf-8")
        written = await renderer.render_tree(
            "project", tmp_path, {}, skip_patterns=["main.py"], skip_existing=True
        )
        assert custom not in written
        assert custom.read_text(encoding="utf-8") == "# custom\n"

    async def test_render_tree_unknown_prefix(self, renderer: TemplateRenderer, tmp_path: Path):
        assert await renderer.render_tree("nope", tmp_path, {}) == []

    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "hello.txt.j2").write_text("Hello {{ who }}!", encoding="utf-8")
        assert TemplateRenderer(tmp_path).render("hello.txt.j2", {"who": "there"}) == "Hello there!"
