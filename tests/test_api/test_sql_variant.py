"""API tests over the SQL variant (temporary SQLite database)."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


class TestSqlUsers:
    def test_create_and_list(self, sql_client: TestClient):
        res = sql_client.post("/users", json={"name": "John Doe", "email": "john@example.com"})
        assert res.status_code == 201
        assert res.json() == {"id": 1, "name": "John Doe", "email": "john@example.com"}
        assert sql_client.get("/users").json() == [res.json()]

    def test_missing_email_is_a_backend_error(self, sql_client: TestClient):
        res = sql_client.post("/users", json={"name": "No Email"})
        assert res.status_code == 500
        assert "error" in res.json()
        assert "NOT NULL" in res.json()["error"]

    def test_update_overwrites_every_column(self, sql_client: TestClient):
        sql_client.post("/users", json={"name": "Jane", "email": "jane@example.com"})
        res = sql_client.put("/users/1", json={"name": "Jane", "email": "new@example.com"})
        assert res.status_code == 200
        assert res.json()["email"] == "new@example.com"

    def test_update_with_missing_column_violates_constraint(self, sql_client: TestClient):
        sql_client.post("/users", json={"name": "Jane", "email": "jane@example.com"})
        res = sql_client.put("/users/1", json={"name": "Only Name"})
        assert res.status_code == 500


class TestSqlTasks:
    def test_task_scenario(self, sql_client: TestClient):
        created = sql_client.post("/tasks", json={"title": "Test Task", "description": "Test Description"})
        assert created.status_code == 201
        assert created.json()["completed"] is False

        updated = sql_client.put(
            "/tasks/1", json={"title": "Updated", "description": "d", "completed": True}
        )
        assert updated.status_code == 200
        assert updated.json()["completed"] is True

        assert sql_client.delete("/tasks/1").status_code == 204
        assert sql_client.get("/tasks").json() == []

    def test_completed_in_create_body_is_ignored(self, sql_client: TestClient):
        res = sql_client.post("/tasks", json={"title": "t", "completed": True})
        assert res.status_code == 201
        assert res.json()["completed"] is False


class TestSqlNotFound:
    def test_delete_unknown_category(self, sql_client: TestClient):
        res = sql_client.delete("/categories/7")
        assert res.status_code == 404
        assert res.json() == {"error": "Category not found"}

    def test_update_unknown_product(self, sql_client: TestClient):
        res = sql_client.put("/products/7", json={"name": "x"})
        assert res.status_code == 404
        assert res.json() == {"error": "Product not found"}

    @pytest.mark.parametrize("raw", ["99999999999999999999", "9223372036854775808"])
    def test_oversized_id_is_not_found(self, sql_client: TestClient, raw: str):
        res = sql_client.delete(f"/categories/{raw}")
        assert res.status_code == 404
        assert res.json() == {"error": "Category not found"}

    def test_largest_bigint_id_reaches_the_database(self, sql_client: TestClient):
        res = sql_client.put("/products/9223372036854775807", json={"name": "x"})
        assert res.status_code == 404
        assert res.json() == {"error": "Product not found"}
