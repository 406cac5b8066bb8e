"""Project service layer — async CRUD for projects."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ems.common.exceptions import CreationFailedException, NotFoundException
from ems.common.filters import apply_filters, apply_search
from ems.projects.models import Project
from ems.projects.schemas import ProjectResponse, ProjectWrite

logger = logging.getLogger(__name__)


class ProjectService:
    """Async CRUD operations for projects."""

    # ── List ────────────────────────────────────────────────────────

    @staticmethod
    async def list_projects(
        db: AsyncSession,
        *,
        search: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[ProjectResponse]:
        """Return projects ordered by id, optionally by name search and status."""

        query = apply_filters(select(Project), Project, {"status": status})
        query = apply_search(query, Project, search, ["name"])
        result = await db.execute(query.order_by(Project.id))
        return [ProjectResponse.model_validate(p) for p in result.scalars().all()]

    # ── Get single ──────────────────────────────────────────────────

    @staticmethod
    async def get_project(db: AsyncSession, project_id: int) -> ProjectResponse:
        result = await db.execute(select(Project).where(Project.id == project_id))
        project = result.scalars().first()
        if project is None:
            raise NotFoundException("Project")
        return ProjectResponse.model_validate(project)

    # ── Create ──────────────────────────────────────────────────────

    @staticmethod
    async def create_project(
        db: AsyncSession,
        data: ProjectWrite,
    ) -> ProjectResponse:
        project = Project(**data.model_dump())
        db.add(project)
        await db.flush()

        if project.id is None:
            raise CreationFailedException("Project")

        logger.info("Created project %s (%s)", project.id, project.status)
        return await ProjectService.get_project(db, project.id)

    # ── Update ──────────────────────────────────────────────────────

    @staticmethod
    async def update_project(
        db: AsyncSession,
        project_id: int,
        data: ProjectWrite,
    ) -> ProjectResponse:
        """Replace every column of a project; zero rows affected → 404."""

        result = await db.execute(
            update(Project)
            .where(Project.id == project_id)
            .values(**data.model_dump())
            .execution_options(synchronize_session="fetch"),
        )
        if not result.rowcount:
            raise NotFoundException("Project")

        logger.info("Updated project %s", project_id)
        return await ProjectService.get_project(db, project_id)

    # ── Delete ──────────────────────────────────────────────────────

    @staticmethod
    async def delete_project(db: AsyncSession, project_id: int) -> None:
        result = await db.execute(delete(Project).where(Project.id == project_id))
        if not result.rowcount:
            raise NotFoundException("Project")
        logger.info("Deleted project %s", project_id)
