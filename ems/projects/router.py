"""Projects router.

Routes:
    /projects          — List, create projects
    /projects/{id}     — Get, replace, delete a project
"""


from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ems.core_hr.schemas import MessageResponse
from ems.database import get_db
from ems.projects.schemas import ProjectResponse, ProjectWrite
from ems.projects.service import ProjectService

router = APIRouter(prefix="", tags=["projects"])


# ── GET /projects ───────────────────────────────────────────────────

@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    db: AsyncSession = Depends(get_db),
    search: Optional[str] = Query(None, description="Search by project name"),
    status: Optional[str] = Query(None, description="Planning, In Progress or Completed"),
):
    return await ProjectService.list_projects(db, search=search, status=status)


# ── GET /projects/{id} ──────────────────────────────────────────────

@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await ProjectService.get_project(db, project_id)


# ── POST /projects ──────────────────────────────────────────────────

@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    body: ProjectWrite,
    db: AsyncSession = Depends(get_db),
):
    """Create a project; a blank status defaults to Planning."""
    return await ProjectService.create_project(db, body)


# ── PUT /projects/{id} ──────────────────────────────────────────────

@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    body: ProjectWrite,
    db: AsyncSession = Depends(get_db),
):
    return await ProjectService.update_project(db, project_id, body)


# ── DELETE /projects/{id} ───────────────────────────────────────────

@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
):
    await ProjectService.delete_project(db, project_id)
    return MessageResponse(message="Project deleted successfully")
