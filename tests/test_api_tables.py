"""Tests for the generic table-proxy endpoints.

All tests run against an in-process ``MemoryStore`` injected into the app
factory, so no Supabase project is needed.
"""

from __future__ import annotations

from typing import Generator

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from scheduler_backend.api.app import create_app
from scheduler_backend.config import Settings
from scheduler_backend.store import MemoryStore, StoreError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _settings(**overrides) -> Settings:
    base = dict(
        store_backend="memory",
        supabase_url="",
        supabase_key="",
        allowed_resources=["appointments", "employees", "shifts"],
        enable_ai_relay=True,
        enable_legacy_appointments=True,
        enable_hello=True,
    )
    base.update(overrides)
    return Settings(**base)


class _BrokenStore(MemoryStore):
    """Store whose every call is rejected by the backend."""

    def __init__(self, message: str = 'relation "public.employees" does not exist') -> None:
        super().__init__()
        self.message = message

    async def select(self, table, **kwargs):
        raise StoreError(self.message)

    async def select_range(self, table, column, **kwargs):
        raise StoreError(self.message)

    async def insert(self, table, record):
        raise StoreError(self.message)

    async def update(self, table, record_id, changes):
        raise StoreError(self.message)

    async def delete(self, table, record_id):
        raise StoreError(self.message)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def client(store: MemoryStore) -> Generator[TestClient, None, None]:
    """TestClient backed by an isolated in-memory store."""
    app = create_app(_settings(), store=store)
    with TestClient(app) as c:
        yield c


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestListRecords:
    def test_empty_table_returns_empty_list(self, client):
        resp = client.get("/api/employees")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_created_record_is_listed(self, client):
        created = client.post("/api/employees", json={"name": "Ada", "role": "barber"}).json()
        resp = client.get("/api/employees")
        assert resp.status_code == 200
        assert created in resp.json()

    def test_unknown_resource_is_rejected(self, client):
        resp = client.get("/api/pg_shadow")
        assert resp.status_code == 400
        assert resp.json() == {"error": "Unknown resource: pg_shadow"}

    def test_wildcard_allow_list_passes_any_resource(self, store):
        app = create_app(_settings(allowed_resources=["*"]), store=store)
        with TestClient(app) as c:
            c.post("/api/rooms", json={"label": "Studio A"})
            resp = c.get("/api/rooms")
        assert resp.status_code == 200
        assert resp.json()[0]["label"] == "Studio A"


class TestCreateRecord:
    def test_returns_201_with_store_assigned_id(self, client):
        resp = client.post("/api/employees", json={"name": "Grace"})
        assert resp.status_code == 201
        data = resp.json()
        assert data["name"] == "Grace"
        assert "id" in data

    def test_non_object_body_is_400(self, client):
        resp = client.post("/api/employees", json=[{"name": "x"}])
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_missing_body_is_400(self, client):
        resp = client.post("/api/employees")
        assert resp.status_code == 400

    def test_unknown_resource_makes_no_store_call(self, client, store):
        resp = client.post("/api/secrets", json={"k": "v"})
        assert resp.status_code == 400
        assert store._tables.get("secrets") is None


class TestGetRecord:
    def test_fetches_by_id(self, client):
        created = client.post("/api/employees", json={"name": "Lin"}).json()
        resp = client.get(f"/api/employees/{created['id']}")
        assert resp.status_code == 200
        assert resp.json() == created

    def test_missing_id_is_404(self, client):
        resp = client.get("/api/employees/999")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Record not found"}


class TestUpdateRecord:
    def test_returns_updated_record(self, client):
        created = client.post("/api/employees", json={"name": "Bo", "role": "intern"}).json()
        resp = client.put(f"/api/employees/{created['id']}", json={"role": "stylist"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["role"] == "stylist"
        assert data["name"] == "Bo"
        assert data["id"] == created["id"]

    def test_missing_id_is_404(self, client):
        resp = client.put("/api/employees/404", json={"role": "x"})
        assert resp.status_code == 404
        assert resp.json() == {"error": "Record not found"}

    def test_empty_body_is_400(self, client):
        created = client.post("/api/employees", json={"name": "Bo"}).json()
        resp = client.put(f"/api/employees/{created['id']}", json={})
        assert resp.status_code == 400


class TestDeleteRecord:
    def test_returns_204_and_record_disappears(self, client):
        created = client.post("/api/employees", json={"name": "Temp"}).json()
        resp = client.delete(f"/api/employees/{created['id']}")
        assert resp.status_code == 204
        assert resp.content == b""

        ids = [r["id"] for r in client.get("/api/employees").json()]
        assert created["id"] not in ids

    def test_missing_id_is_404(self, client):
        resp = client.delete("/api/employees/12345")
        assert resp.status_code == 404


class TestShiftsForWeek:
    def test_returns_only_shifts_inside_the_week(self, client):
        for day in ("2023-12-31", "2024-01-01", "2024-01-04", "2024-01-07", "2024-01-08"):
            client.post("/api/shifts", json={"date": day, "employee_id": 1})

        resp = client.get("/api/shifts/week/2024-01-01")
        assert resp.status_code == 200
        dates = sorted(r["date"] for r in resp.json())
        assert dates == ["2024-01-01", "2024-01-04", "2024-01-07"]

    def test_week_crossing_month_boundary(self, client):
        client.post("/api/shifts", json={"date": "2024-02-02"})
        client.post("/api/shifts", json={"date": "2024-02-03"})
        resp = client.get("/api/shifts/week/2024-01-27")
        assert [r["date"] for r in resp.json()] == ["2024-02-02"]

    def test_unparseable_date_is_400(self, client):
        resp = client.get("/api/shifts/week/next-monday")
        assert resp.status_code == 400
        assert "YYYY-MM-DD" in resp.json()["error"]

    def test_week_route_respects_allow_list(self, store):
        app = create_app(_settings(allowed_resources=["employees"]), store=store)
        with TestClient(app) as c:
            resp = c.get("/api/shifts/week/2024-01-01")
        assert resp.status_code == 400
        assert resp.json() == {"error": "Unknown resource: shifts"}


class TestStoreFailures:
    @pytest.fixture()
    def broken_client(self) -> Generator[TestClient, None, None]:
        app = create_app(_settings(), store=_BrokenStore())
        with TestClient(app) as c:
            yield c

    def test_list_error_is_500_with_backend_message(self, broken_client):
        resp = broken_client.get("/api/employees")
        assert resp.status_code == 500
        assert resp.json() == {"error": 'relation "public.employees" does not exist'}

    def test_insert_error_is_500(self, broken_client):
        resp = broken_client.post("/api/employees", json={"name": "x"})
        assert resp.status_code == 500
        assert "does not exist" in resp.json()["error"]

    def test_update_and_delete_errors_are_500(self, broken_client):
        assert broken_client.put("/api/employees/1", json={"a": 1}).status_code == 500
        assert broken_client.delete("/api/employees/1").status_code == 500

    def test_week_query_error_is_500(self, broken_client):
        assert broken_client.get("/api/shifts/week/2024-01-01").status_code == 500


class TestStoreNotConfigured:
    def test_store_routes_report_configuration_error(self):
        cfg = _settings(store_backend="supabase", supabase_url="", supabase_key="")
        with TestClient(create_app(cfg)) as c:
            resp = c.get("/api/employees")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Supabase not configured"}


class TestHostedStoreResponses:
    def test_non_json_success_body_is_json_500(self):
        cfg = _settings(
            store_backend="supabase",
            supabase_url="https://proj.supabase.co",
            supabase_key="service-key",
        )
        with respx.mock:
            respx.get("https://proj.supabase.co/rest/v1/employees").mock(
                return_value=httpx.Response(200, text="<html>maintenance</html>")
            )
            with TestClient(create_app(cfg)) as c:
                resp = c.get("/api/employees")

        assert resp.status_code == 500
        assert resp.headers["content-type"].startswith("application/json")
        assert resp.json() == {"error": "Non-JSON response from store (HTTP 200)"}
