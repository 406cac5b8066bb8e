"""Core HR service layer — async CRUD for employees and departments.

Uses:
  - ``apply_filters / apply_search`` from ems.common.filters
  - ``NotFoundException / CreationFailedException`` from ems.common.exceptions

Each write is one statement followed by a re-select of the joined row;
nothing spans more than one table in a transaction.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy import Select, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from ems.common.exceptions import CreationFailedException, NotFoundException
from ems.common.filters import apply_filters, apply_search
from ems.core_hr.models import Department, Employee
from ems.core_hr.schemas import (
    DepartmentResponse,
    DepartmentWrite,
    EmployeeResponse,
    EmployeeWrite,
)

logger = logging.getLogger(__name__)


def _employee_query() -> Select:
    """Employee rows LEFT JOINed with department name and supervisor name."""
    supervisor = aliased(Employee, name="supervisor")
    return (
        select(
            Employee,
            Department.name.label("department_name"),
            (supervisor.first_name + " " + supervisor.last_name).label("supervisor_name"),
        )
        .outerjoin(Department, Employee.department_id == Department.id)
        .outerjoin(supervisor, Employee.supervisor_id == supervisor.id)
    )


def _to_response(row: Any) -> EmployeeResponse:
    employee, department_name, supervisor_name = row
    resp = EmployeeResponse.model_validate(employee)
    resp.department_name = department_name
    resp.supervisor_name = supervisor_name
    return resp


# ═════════════════════════════════════════════════════════════════════
# EmployeeService
# ═════════════════════════════════════════════════════════════════════


class EmployeeService:
    """Async CRUD operations for employees."""

    # ── List ────────────────────────────────────────────────────────

    @staticmethod
    async def list_employees(
        db: AsyncSession,
        *,
        search: Optional[str] = None,
        department_id: Optional[int] = None,
    ) -> list[EmployeeResponse]:
        """Return every employee (optionally filtered), ordered by id."""

        query = apply_filters(
            _employee_query(), Employee, {"department_id": department_id},
        )
        query = apply_search(
            query, Employee, search, ["first_name", "last_name", "email"],
        )
        result = await db.execute(query.order_by(Employee.id))
        return [_to_response(row) for row in result.all()]

    # ── Get single ──────────────────────────────────────────────────

    @staticmethod
    async def get_employee(
        db: AsyncSession,
        employee_id: int,
    ) -> EmployeeResponse:
        """Load one employee with its display fields."""

        result = await db.execute(
            _employee_query().where(Employee.id == employee_id),
        )
        row = result.first()
        if row is None:
            raise NotFoundException("Employee")
        return _to_response(row)

    # ── Create ──────────────────────────────────────────────────────

    @staticmethod
    async def create_employee(
        db: AsyncSession,
        data: EmployeeWrite,
    ) -> EmployeeResponse:
        """Insert an employee, then re-select it joined with display fields."""

        values = data.model_dump()
        logger.debug("Processed employee data: %s", values)

        employee = Employee(**values)
        db.add(employee)
        await db.flush()

        if employee.id is None:
            raise CreationFailedException("Employee")

        logger.info("Created employee %s", employee.id)
        return await EmployeeService.get_employee(db, employee.id)

    # ── Update ──────────────────────────────────────────────────────

    @staticmethod
    async def update_employee(
        db: AsyncSession,
        employee_id: int,
        data: EmployeeWrite,
    ) -> EmployeeResponse:
        """Replace every column of an employee; zero rows affected → 404."""

        values = data.model_dump()
        logger.debug("Processed update data for employee %s: %s", employee_id, values)

        result = await db.execute(
            update(Employee)
            .where(Employee.id == employee_id)
            .values(**values)
            .execution_options(synchronize_session="fetch"),
        )
        if not result.rowcount:
            raise NotFoundException("Employee")

        logger.info("Updated employee %s", employee_id)
        return await EmployeeService.get_employee(db, employee_id)

    # ── Delete ──────────────────────────────────────────────────────

    @staticmethod
    async def delete_employee(db: AsyncSession, employee_id: int) -> None:
        """Delete an employee; dependent rows are left to the store's FK policy."""

        result = await db.execute(
            delete(Employee).where(Employee.id == employee_id),
        )
        if not result.rowcount:
            raise NotFoundException("Employee")
        logger.info("Deleted employee %s", employee_id)


# ═════════════════════════════════════════════════════════════════════
# DepartmentService
# ═════════════════════════════════════════════════════════════════════


class DepartmentService:
    """Async CRUD operations for departments."""

    @staticmethod
    async def list_departments(db: AsyncSession) -> list[DepartmentResponse]:
        """Return all departments ordered by id."""

        result = await db.execute(select(Department).order_by(Department.id))
        return [
            DepartmentResponse.model_validate(dept)
            for dept in result.scalars().all()
        ]

    @staticmethod
    async def get_department(
        db: AsyncSession,
        department_id: int,
    ) -> DepartmentResponse:
        """Load a single department."""

        result = await db.execute(
            select(Department).where(Department.id == department_id),
        )
        dept = result.scalars().first()
        if dept is None:
            raise NotFoundException("Department")
        return DepartmentResponse.model_validate(dept)

    @staticmethod
    async def create_department(
        db: AsyncSession,
        data: DepartmentWrite,
    ) -> DepartmentResponse:
        dept = Department(**data.model_dump())
        db.add(dept)
        await db.flush()

        if dept.id is None:
            raise CreationFailedException("Department")

        logger.info("Created department %s", dept.id)
        return await DepartmentService.get_department(db, dept.id)

    @staticmethod
    async def update_department(
        db: AsyncSession,
        department_id: int,
        data: DepartmentWrite,
    ) -> DepartmentResponse:
        result = await db.execute(
            update(Department)
            .where(Department.id == department_id)
            .values(**data.model_dump())
            .execution_options(synchronize_session="fetch"),
        )
        if not result.rowcount:
            raise NotFoundException("Department")

        logger.info("Updated department %s", department_id)
        return await DepartmentService.get_department(db, department_id)

    @staticmethod
    async def delete_department(db: AsyncSession, department_id: int) -> None:
        result = await db.execute(
            delete(Department).where(Department.id == department_id),
        )
        if not result.rowcount:
            raise NotFoundException("Department")
        logger.info("Deleted department %s", department_id)
