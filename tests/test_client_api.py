"""ApiClient tests — talks to the real app through ASGITransport."""

from __future__ import annotations

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from ems.client.api import (
    ApiClient,
    ApiError,
    fetch_all_benefits,
    fetch_all_leaves,
    fetch_all_time_entries,
)
from ems.core_hr.models import Employee
from ems.records.models import LeaveRecord
from tests.conftest import _make_employee, add_row


class TestApiClient:

    async def test_dashboard(self, api: ApiClient, test_employee):
        data = await api.get_dashboard_data()
        assert data["employee_count"] == 1

    async def test_employee_round_trip(self, api: ApiClient, test_department):
        created = await api.create_employee({
            "first_name": "Ann", "last_name": "Lee",
            "department_id": str(test_department["id"]), "salary": "1000",
        })
        assert created["department_name"] == "Engineering"

        updated = await api.update_employee(created["id"], {**created, "last_name": "Li"})
        assert updated["last_name"] == "Li"
        assert updated["salary"] == 1000.0

        assert (await api.get_employee_by_id(created["id"]))["last_name"] == "Li"

        result = await api.delete_employee(created["id"])
        assert result == {"message": "Employee deleted successfully"}

    async def test_not_found_raises_api_error(self, api: ApiClient):
        with pytest.raises(ApiError) as excinfo:
            await api.get_employee_by_id(404)
        assert excinfo.value.status_code == 404
        assert excinfo.value.message == "Employee not found"

    async def test_list_query_params(self, api: ApiClient, test_employee, test_project):
        assert len(await api.get_all_employees(search="test")) == 1
        assert await api.get_all_employees(search="nobody") == []
        assert len(await api.get_all_projects(status="In Progress")) == 1
        assert len(await api.get_all_departments()) == 1

    async def test_department_by_id(self, api: ApiClient, test_department):
        dept = await api.get_department_by_id(test_department["id"])
        assert dept["name"] == "Engineering"
        assert dept["budget"] == 500000.0

        with pytest.raises(ApiError) as excinfo:
            await api.get_department_by_id(999)
        assert excinfo.value.message == "Department not found"

    async def test_nested_reads(self, api: ApiClient, employee_records):
        emp_id = employee_records["employee_id"]
        assert len(await api.get_employee_projects(emp_id)) == 1
        assert len(await api.get_employee_leaves(emp_id)) == 2
        assert len(await api.get_employee_benefits(emp_id)) == 1
        assert len(await api.get_employee_dependents(emp_id)) == 1
        assert len(await api.get_employee_time_tracking(emp_id)) == 2

    async def test_error_body_fallback_to_text(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        async with ApiClient("http://test/api", transport=httpx.MockTransport(handler), timeout=1) as api:
            with pytest.raises(ApiError) as excinfo:
                await api.get_all_departments()
        assert excinfo.value.status_code == 502
        assert excinfo.value.message == "Bad Gateway"

    async def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with ApiClient("http://test/api", transport=httpx.MockTransport(handler), timeout=1) as api:
            with pytest.raises(ApiError) as excinfo:
                await api.get_dashboard_data()
        assert excinfo.value.status_code is None


class TestFetchAll:

    async def test_leaves_tagged_with_employee(self, api: ApiClient, db: AsyncSession, employee_records):
        other = await add_row(db, Employee(**_make_employee(
            first_name="Maria", last_name="Garcia", email="maria@company.com",
        )))
        await add_row(db, LeaveRecord(employee_id=other.id, leave_type="Vacation", status="Pending"))

        rows = await fetch_all_leaves(api)
        assert len(rows) == 3
        names = {(r["employee_id"], r["employee_name"]) for r in rows}
        assert names == {
            (employee_records["employee_id"], "Test User"),
            (other.id, "Maria Garcia"),
        }

    async def test_benefits_and_time_entries(self, api: ApiClient, employee_records):
        benefits = await fetch_all_benefits(api)
        assert [b["employee_name"] for b in benefits] == ["Test User"]

        entries = await fetch_all_time_entries(api)
        assert len(entries) == 2
        assert all(e["employee_id"] == employee_records["employee_id"] for e in entries)

    async def test_failed_employee_is_skipped(self, api: ApiClient, employee_records, monkeypatch):
        real_fetch = api.get_employee_leaves

        async def flaky(employee_id):
            raise ApiError(500, "boom")

        monkeypatch.setattr(api, "get_employee_leaves", flaky)
        assert await fetch_all_leaves(api) == []

        monkeypatch.setattr(api, "get_employee_leaves", real_fetch)
        assert len(await fetch_all_leaves(api)) == 2
