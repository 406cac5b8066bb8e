"""Core HR Pydantic v2 schemas — request / response shapes.

Naming conventions:
  - *Write     → request bodies (create and full-replacement update)
  - *Response  → response bodies (read)

Write schemas coerce raw form values (see ``ems.common.coercion``);
they never reject a field value.
"""


from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ems.common.coercion import (
    FormAmount,
    FormDate,
    FormGender,
    FormId,
    FormSalary,
    FormText,
)
from ems.common.constants import DEFAULT_GENDER


# ═════════════════════════════════════════════════════════════════════
# Department
# ═════════════════════════════════════════════════════════════════════


class DepartmentWrite(BaseModel):
    """Payload for creating or replacing a department."""

    name: FormText = None
    location: FormText = None
    budget: FormAmount = None
    description: FormText = None


class DepartmentResponse(BaseModel):
    """Full department representation."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str] = None
    location: Optional[str] = None
    budget: Optional[float] = None
    description: Optional[str] = None


# ═════════════════════════════════════════════════════════════════════
# Employee
# ═════════════════════════════════════════════════════════════════════


class EmployeeWrite(BaseModel):
    """Payload for creating or replacing an employee.

    Blank text → ``None``; missing gender → ``"Male"``; ids parsed as
    integers; salary parsed as a number, blank → ``0``.
    """

    first_name: FormText = None
    last_name: FormText = None
    email: FormText = None
    phone_no: FormText = None
    gender: FormGender = DEFAULT_GENDER
    date_of_birth: FormDate = None
    hire_date: FormDate = None
    department_id: FormId = None
    supervisor_id: FormId = None
    salary: FormSalary = 0.0
    address: FormText = None


class EmployeeResponse(BaseModel):
    """Employee row joined with its display fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_no: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    hire_date: Optional[date] = None
    department_id: Optional[int] = None
    supervisor_id: Optional[int] = None
    salary: Optional[float] = None
    address: Optional[str] = None
    # Enriched fields (set by service layer)
    department_name: Optional[str] = None
    supervisor_name: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
