"""Department API test suite — CRUD contract shared with employees."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ems.core_hr.models import Department
from tests.conftest import _make_department, add_row


class TestDepartmentAPI:

    async def test_list_ordered_by_id(self, client, db: AsyncSession):
        first = await add_row(db, Department(**_make_department(name="Sales")))
        second = await add_row(db, Department(**_make_department(name="Engineering")))

        resp = await client.get("/api/departments")
        assert resp.status_code == 200
        assert [d["id"] for d in resp.json()] == [first.id, second.id]

    async def test_get_by_id(self, client, test_department):
        resp = await client.get(f"/api/departments/{test_department['id']}")
        assert resp.status_code == 200
        body = resp.json()
        assert body["name"] == "Engineering"
        assert body["budget"] == 500000.0

    async def test_get_unknown_is_404(self, client):
        resp = await client.get("/api/departments/42")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Department not found"}

    async def test_create_coerces_blank_values(self, client):
        resp = await client.post(
            "/api/departments",
            json={"name": "Legal", "location": "", "budget": "abc"},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["name"] == "Legal"
        assert body["location"] is None
        assert body["budget"] is None

    async def test_update(self, client, test_department):
        resp = await client.put(
            f"/api/departments/{test_department['id']}",
            json={"name": "Platform", "budget": "750000"},
        )
        assert resp.status_code == 200
        assert resp.json()["name"] == "Platform"
        assert resp.json()["budget"] == 750000.0

    async def test_update_unknown_is_404(self, client):
        resp = await client.put("/api/departments/42", json={"name": "X"})
        assert resp.status_code == 404

    async def test_delete(self, client, test_department):
        resp = await client.delete(f"/api/departments/{test_department['id']}")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Department deleted successfully"}
        assert (await client.get("/api/departments")).json() == []

    async def test_delete_unknown_is_404(self, client):
        resp = await client.delete("/api/departments/42")
        assert resp.status_code == 404
