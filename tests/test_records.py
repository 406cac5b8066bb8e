"""Employee-scoped nested read endpoints."""

from __future__ import annotations

import pytest


class TestEmployeeRecords:

    async def test_projects_carry_assignment_fields(self, client, employee_records):
        emp_id = employee_records["employee_id"]
        resp = await client.get(f"/api/employees/{emp_id}/projects")
        assert resp.status_code == 200
        data = resp.json()
        assert len(data) == 1
        assert data[0]["id"] == employee_records["project_id"]
        assert data[0]["name"] == "Customer Portal"
        assert data[0]["role"] == "Developer"
        assert data[0]["hours_per_week"] == 30.0

    async def test_leaves(self, client, employee_records):
        emp_id = employee_records["employee_id"]
        data = (await client.get(f"/api/employees/{emp_id}/leaves")).json()
        assert {leave["leave_type"] for leave in data} == {"Vacation", "Sick Leave"}
        vacation = next(leave for leave in data if leave["leave_type"] == "Vacation")
        assert vacation["start_date"] == "2024-01-01"
        assert vacation["end_date"] == "2024-01-05"
        assert vacation["status"] == "Approved"

    async def test_benefits(self, client, employee_records):
        emp_id = employee_records["employee_id"]
        data = (await client.get(f"/api/employees/{emp_id}/benefits")).json()
        assert data == [{
            "id": data[0]["id"],
            "employee_id": emp_id,
            "benefit_type": "Health Insurance",
            "start_date": "2020-01-06",
            "coverage": "Family",
            "premium": 450.0,
        }]

    async def test_dependents(self, client, employee_records):
        emp_id = employee_records["employee_id"]
        data = (await client.get(f"/api/employees/{emp_id}/dependents")).json()
        assert len(data) == 1
        assert data[0]["relationship"] == "Daughter"

    async def test_timetracking_newest_first_with_project_name(self, client, employee_records):
        emp_id = employee_records["employee_id"]
        data = (await client.get(f"/api/employees/{emp_id}/timetracking")).json()
        assert [e["date"] for e in data] == ["2024-02-03", "2024-02-01"]
        assert [e["project_name"] for e in data] == ["Archive", "Customer Portal"]
        assert data[1]["hours_worked"] == 6.5

    @pytest.mark.parametrize("resource", [
        "projects", "leaves", "benefits", "dependents", "timetracking",
    ])
    async def test_unknown_employee_is_empty_list(self, client, resource):
        resp = await client.get(f"/api/employees/999/{resource}")
        assert resp.status_code == 200
        assert resp.json() == []
