"""Project ORM models: Project and the WorksOn assignment table."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Optional

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ems.common.constants import DEFAULT_PROJECT_STATUS, ProjectStatus
from ems.database import Base

if TYPE_CHECKING:
    from ems.core_hr.models import Employee
    from ems.records.models import TimeEntry


_STATUS_VALUES = ", ".join(f"'{s.value}'" for s in ProjectStatus)


class Project(Base):
    """A project employees are assigned to and log hours against."""

    __tablename__ = "project"
    __table_args__ = (
        sa.CheckConstraint(f"status IN ({_STATUS_VALUES})", name="ck_project_status"),
    )

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    name: Mapped[Optional[str]] = mapped_column(sa.String(100))
    status: Mapped[str] = mapped_column(
        sa.String(20), nullable=False, server_default=DEFAULT_PROJECT_STATUS,
    )
    start_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    end_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    budget: Mapped[Optional[float]] = mapped_column(sa.Numeric(15, 2, asdecimal=False))
    description: Mapped[Optional[str]] = mapped_column(sa.Text)

    # ── Relationships ───────────────────────────────────────────────
    assignments: Mapped[list[WorksOn]] = relationship(back_populates="project")
    time_entries: Mapped[list["TimeEntry"]] = relationship(back_populates="project")

    def __repr__(self) -> str:
        return f"<Project {self.id} {self.name!r} ({self.status})>"


class WorksOn(Base):
    """Employee ↔ Project assignment with role and weekly hours."""

    __tablename__ = "works_on"

    employee_id: Mapped[int] = mapped_column(
        sa.Integer, sa.ForeignKey("employee.id"), primary_key=True,
    )
    project_id: Mapped[int] = mapped_column(
        sa.Integer, sa.ForeignKey("project.id"), primary_key=True,
    )
    role: Mapped[Optional[str]] = mapped_column(sa.String(50))
    hours_per_week: Mapped[Optional[float]] = mapped_column(sa.Numeric(5, 2, asdecimal=False))

    # ── Relationships ───────────────────────────────────────────────
    employee: Mapped["Employee"] = relationship(back_populates="works_on")
    project: Mapped[Project] = relationship(back_populates="assignments")

    def __repr__(self) -> str:
        return f"<WorksOn employee={self.employee_id} project={self.project_id}>"
