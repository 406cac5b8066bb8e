"""Employee-scoped nested read endpoints.

Mounted under the employees prefix:
    /employees/{id}/projects
    /employees/{id}/leaves
    /employees/{id}/benefits
    /employees/{id}/dependents
    /employees/{id}/timetracking
"""


from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ems.database import get_db
from ems.projects.schemas import EmployeeProjectResponse
from ems.records.schemas import (
    BenefitResponse,
    DependentResponse,
    LeaveRecordResponse,
    TimeEntryResponse,
)
from ems.records.service import RecordService

router = APIRouter(prefix="", tags=["employee records"])


@router.get("/{employee_id}/projects", response_model=list[EmployeeProjectResponse])
async def employee_projects(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await RecordService.employee_projects(db, employee_id)


@router.get("/{employee_id}/leaves", response_model=list[LeaveRecordResponse])
async def employee_leaves(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await RecordService.employee_leaves(db, employee_id)


@router.get("/{employee_id}/benefits", response_model=list[BenefitResponse])
async def employee_benefits(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await RecordService.employee_benefits(db, employee_id)


@router.get("/{employee_id}/dependents", response_model=list[DependentResponse])
async def employee_dependents(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await RecordService.employee_dependents(db, employee_id)


@router.get("/{employee_id}/timetracking", response_model=list[TimeEntryResponse])
async def employee_time_tracking(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Time entries with project name, newest first."""
    return await RecordService.employee_time_tracking(db, employee_id)
