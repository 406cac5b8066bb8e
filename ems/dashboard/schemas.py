"""Dashboard response schema."""

from pydantic import BaseModel


class DashboardResponse(BaseModel):
    employee_count: int = 0
    department_count: int = 0
    project_count: int = 0
    active_project_count: int = 0
