"""Dashboard service — headline counts computed on read."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ems.common.constants import ProjectStatus
from ems.core_hr.models import Department, Employee
from ems.dashboard.schemas import DashboardResponse
from ems.projects.models import Project

logger = logging.getLogger(__name__)


class DashboardService:

    @staticmethod
    async def get_dashboard(db: AsyncSession) -> DashboardResponse:
        """Four independent COUNT(*) queries; nothing is cached."""

        employees_q = select(func.count()).select_from(Employee)
        departments_q = select(func.count()).select_from(Department)
        projects_q = select(func.count()).select_from(Project)
        active_q = (
            select(func.count())
            .select_from(Project)
            .where(Project.status == ProjectStatus.in_progress.value)
        )

        results = await _multi_scalar(
            db, employees_q, departments_q, projects_q, active_q,
        )
        logger.debug("Dashboard counts: %s", results)

        return DashboardResponse(
            employee_count=results[0] or 0,
            department_count=results[1] or 0,
            project_count=results[2] or 0,
            active_project_count=results[3] or 0,
        )


# ── Internal helpers ────────────────────────────────────────────────

async def _multi_scalar(db: AsyncSession, *stmts) -> list:
    """Execute scalar queries one after another and return results in order."""
    results = []
    for stmt in stmts:
        result = await db.execute(stmt)
        results.append(result.scalar())
    return results
