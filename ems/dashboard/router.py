"""Dashboard router — read-only headline counts."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ems.dashboard.schemas import DashboardResponse
from ems.dashboard.service import DashboardService
from ems.database import get_db

router = APIRouter()


# ── GET /dashboard ──────────────────────────────────────────────────

@router.get("", response_model=DashboardResponse)
async def dashboard(db: AsyncSession = Depends(get_db)):
    """Employee, department, project and in-progress project counts."""
    return await DashboardService.get_dashboard(db)
