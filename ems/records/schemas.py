"""Response schemas for employee-scoped nested reads."""


from datetime import date as date_type
from typing import Optional

from pydantic import BaseModel, ConfigDict


class LeaveRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    leave_type: Optional[str] = None
    start_date: Optional[date_type] = None
    end_date: Optional[date_type] = None
    status: str
    reason: Optional[str] = None


class BenefitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    benefit_type: Optional[str] = None
    start_date: Optional[date_type] = None
    coverage: Optional[str] = None
    premium: Optional[float] = None


class DependentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    relationship: Optional[str] = None
    date_of_birth: Optional[date_type] = None


class TimeEntryResponse(BaseModel):
    """A time entry joined with its project's name."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    project_id: Optional[int] = None
    project_name: Optional[str] = None
    date: Optional[date_type] = None
    hours_worked: Optional[float] = None
