"""Dashboard and system endpoint tests."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ems.dashboard.service import DashboardService
from ems.projects.models import Project
from tests.conftest import _make_project, add_row


class TestDashboard:

    async def test_empty_database(self, client):
        resp = await client.get("/api/dashboard")
        assert resp.status_code == 200
        assert resp.json() == {
            "employee_count": 0,
            "department_count": 0,
            "project_count": 0,
            "active_project_count": 0,
        }

    async def test_counts_match_list_lengths(self, client, db: AsyncSession, test_employee):
        await add_row(db, Project(**_make_project(name="A", status="In Progress")))
        await add_row(db, Project(**_make_project(name="B", status="In Progress")))
        await add_row(db, Project(**_make_project(name="C", status="Planning")))

        counts = (await client.get("/api/dashboard")).json()
        employees = (await client.get("/api/employees")).json()
        departments = (await client.get("/api/departments")).json()
        projects = (await client.get("/api/projects")).json()

        assert counts["employee_count"] == len(employees) == 1
        assert counts["department_count"] == len(departments) == 1
        assert counts["project_count"] == len(projects) == 3
        assert counts["active_project_count"] == 2

    async def test_service_directly(self, db: AsyncSession, test_project):
        result = await DashboardService.get_dashboard(db)
        assert result.project_count == 1
        assert result.active_project_count == 1


class TestSystemEndpoints:

    async def test_health(self, client):
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"

    async def test_database_connection_check(self, client):
        resp = await client.get("/api/test")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Database connection successful", "result": 2}
