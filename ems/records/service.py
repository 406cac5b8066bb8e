"""Nested reads scoped to one employee.

An unknown employee id is not an error here: every read simply returns
an empty list.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ems.projects.models import Project, WorksOn
from ems.projects.schemas import EmployeeProjectResponse
from ems.records.models import Benefit, Dependent, LeaveRecord, TimeEntry
from ems.records.schemas import (
    BenefitResponse,
    DependentResponse,
    LeaveRecordResponse,
    TimeEntryResponse,
)

logger = logging.getLogger(__name__)


class RecordService:
    """Read-only access to the rows an employee owns."""

    # ── Projects (via works_on) ─────────────────────────────────────

    @staticmethod
    async def employee_projects(
        db: AsyncSession,
        employee_id: int,
    ) -> list[EmployeeProjectResponse]:
        """Projects the employee is assigned to, with role and weekly hours."""

        result = await db.execute(
            select(Project, WorksOn.role, WorksOn.hours_per_week)
            .join(WorksOn, WorksOn.project_id == Project.id)
            .where(WorksOn.employee_id == employee_id)
            .order_by(Project.id)
        )
        items: list[EmployeeProjectResponse] = []
        for project, role, hours in result.all():
            item = EmployeeProjectResponse.model_validate(project)
            item.role = role
            item.hours_per_week = hours
            items.append(item)
        return items

    # ── Leave ───────────────────────────────────────────────────────

    @staticmethod
    async def employee_leaves(
        db: AsyncSession,
        employee_id: int,
    ) -> list[LeaveRecordResponse]:
        result = await db.execute(
            select(LeaveRecord)
            .where(LeaveRecord.employee_id == employee_id)
            .order_by(LeaveRecord.start_date.desc(), LeaveRecord.id.desc())
        )
        return [LeaveRecordResponse.model_validate(r) for r in result.scalars().all()]

    # ── Benefits ────────────────────────────────────────────────────

    @staticmethod
    async def employee_benefits(
        db: AsyncSession,
        employee_id: int,
    ) -> list[BenefitResponse]:
        result = await db.execute(
            select(Benefit)
            .where(Benefit.employee_id == employee_id)
            .order_by(Benefit.id)
        )
        return [BenefitResponse.model_validate(b) for b in result.scalars().all()]

    # ── Dependents ──────────────────────────────────────────────────

    @staticmethod
    async def employee_dependents(
        db: AsyncSession,
        employee_id: int,
    ) -> list[DependentResponse]:
        result = await db.execute(
            select(Dependent)
            .where(Dependent.employee_id == employee_id)
            .order_by(Dependent.id)
        )
        return [DependentResponse.model_validate(d) for d in result.scalars().all()]

    # ── Time tracking ───────────────────────────────────────────────

    @staticmethod
    async def employee_time_tracking(
        db: AsyncSession,
        employee_id: int,
    ) -> list[TimeEntryResponse]:
        """Time entries joined with project name, newest date first."""

        result = await db.execute(
            select(TimeEntry, Project.name.label("project_name"))
            .outerjoin(Project, TimeEntry.project_id == Project.id)
            .where(TimeEntry.employee_id == employee_id)
            .order_by(TimeEntry.date.desc(), TimeEntry.id.desc())
        )
        items: list[TimeEntryResponse] = []
        for entry, project_name in result.all():
            item = TimeEntryResponse.model_validate(entry)
            item.project_name = project_name
            items.append(item)

        logger.debug("Loaded %d time entries for employee %s", len(items), employee_id)
        return items
