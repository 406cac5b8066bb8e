"""Project Pydantic v2 schemas."""


from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ems.common.coercion import FormAmount, FormDate, FormProjectStatus, FormText
from ems.common.constants import DEFAULT_PROJECT_STATUS


class ProjectWrite(BaseModel):
    """Payload for creating or replacing a project (blank status → Planning)."""

    name: FormText = None
    status: FormProjectStatus = DEFAULT_PROJECT_STATUS
    start_date: FormDate = None
    end_date: FormDate = None
    budget: FormAmount = None
    description: FormText = None


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str] = None
    status: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[float] = None
    description: Optional[str] = None


class EmployeeProjectResponse(ProjectResponse):
    """A project as seen from one employee's assignment."""

    role: Optional[str] = None
    hours_per_week: Optional[float] = None
