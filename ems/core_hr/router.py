"""Core HR router — Employee and Department API endpoints.

Routes:
    /employees          — List, create employees
    /employees/{id}     — Get, replace, delete an employee
    /departments        — List, create departments
    /departments/{id}   — Get, replace, delete a department

Employee-scoped nested reads (projects, leaves, benefits, dependents,
time tracking) live in ``ems.records.router`` under the same prefix.
"""


from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ems.core_hr.schemas import (
    DepartmentResponse,
    DepartmentWrite,
    EmployeeResponse,
    EmployeeWrite,
    MessageResponse,
)
from ems.core_hr.service import DepartmentService, EmployeeService
from ems.database import get_db


# ═════════════════════════════════════════════════════════════════════
# Routers
# ═════════════════════════════════════════════════════════════════════

employees_router = APIRouter(prefix="", tags=["employees"])
departments_router = APIRouter(prefix="", tags=["departments"])


# ═════════════════════════════════════════════════════════════════════
# Employee Endpoints
# ═════════════════════════════════════════════════════════════════════


# ── GET /employees — List employees ─────────────────────────────────

@employees_router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    db: AsyncSession = Depends(get_db),
    search: Optional[str] = Query(None, description="Search by first name, last name or email"),
    department_id: Optional[int] = Query(None, description="Filter by department"),
):
    """List employees with department and supervisor names."""
    return await EmployeeService.list_employees(
        db, search=search, department_id=department_id,
    )


# ── GET /employees/{id} — Single employee ──────────────────────────

@employees_router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await EmployeeService.get_employee(db, employee_id)


# ── POST /employees — Create employee ──────────────────────────────

@employees_router.post("", response_model=EmployeeResponse, status_code=201)
async def create_employee(
    body: EmployeeWrite,
    db: AsyncSession = Depends(get_db),
):
    """Create an employee and return it joined with its display fields."""
    return await EmployeeService.create_employee(db, body)


# ── PUT /employees/{id} — Replace employee ─────────────────────────

@employees_router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    body: EmployeeWrite,
    db: AsyncSession = Depends(get_db),
):
    """Replace every field of an employee (same coercion as create)."""
    return await EmployeeService.update_employee(db, employee_id, body)


# ── DELETE /employees/{id} ──────────────────────────────────────────

@employees_router.delete("/{employee_id}", response_model=MessageResponse)
async def delete_employee(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
):
    await EmployeeService.delete_employee(db, employee_id)
    return MessageResponse(message="Employee deleted successfully")


# ═════════════════════════════════════════════════════════════════════
# Department Endpoints
# ═════════════════════════════════════════════════════════════════════


# ── GET /departments — List departments ─────────────────────────────

@departments_router.get("", response_model=list[DepartmentResponse])
async def list_departments(
    db: AsyncSession = Depends(get_db),
):
    return await DepartmentService.list_departments(db)


# ── GET /departments/{id} — Department detail ──────────────────────

@departments_router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await DepartmentService.get_department(db, department_id)


# ── POST /departments ───────────────────────────────────────────────

@departments_router.post("", response_model=DepartmentResponse, status_code=201)
async def create_department(
    body: DepartmentWrite,
    db: AsyncSession = Depends(get_db),
):
    return await DepartmentService.create_department(db, body)


# ── PUT /departments/{id} ───────────────────────────────────────────

@departments_router.put("/{department_id}", response_model=DepartmentResponse)
async def update_department(
    department_id: int,
    body: DepartmentWrite,
    db: AsyncSession = Depends(get_db),
):
    return await DepartmentService.update_department(db, department_id, body)


# ── DELETE /departments/{id} ────────────────────────────────────────

@departments_router.delete("/{department_id}", response_model=MessageResponse)
async def delete_department(
    department_id: int,
    db: AsyncSession = Depends(get_db),
):
    await DepartmentService.delete_department(db, department_id)
    return MessageResponse(message="Department deleted successfully")
