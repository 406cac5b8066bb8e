"""Employee-owned record models: leave, benefits, dependents, time tracking."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Optional

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ems.common.constants import LeaveStatus
from ems.database import Base

if TYPE_CHECKING:
    from ems.core_hr.models import Employee
    from ems.projects.models import Project


_LEAVE_STATUS_VALUES = ", ".join(f"'{s.value}'" for s in LeaveStatus)


# ═════════════════════════════════════════════════════════════════════
# Leave
# ═════════════════════════════════════════════════════════════════════


class LeaveRecord(Base):
    """A leave request for a date range (both ends inclusive)."""

    __tablename__ = "leave_records"
    __table_args__ = (
        sa.CheckConstraint(
            f"status IN ({_LEAVE_STATUS_VALUES})", name="ck_leave_records_status",
        ),
    )

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        sa.Integer, sa.ForeignKey("employee.id"), nullable=False, index=True,
    )
    leave_type: Mapped[Optional[str]] = mapped_column(sa.String(50))
    start_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    end_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    status: Mapped[str] = mapped_column(
        sa.String(20), nullable=False, server_default=LeaveStatus.pending.value,
    )
    reason: Mapped[Optional[str]] = mapped_column(sa.Text)

    employee: Mapped["Employee"] = relationship(back_populates="leave_records")

    def __repr__(self) -> str:
        return f"<LeaveRecord {self.id} emp={self.employee_id} {self.leave_type} {self.status}>"


# ═════════════════════════════════════════════════════════════════════
# Benefits / Dependents
# ═════════════════════════════════════════════════════════════════════


class Benefit(Base):
    __tablename__ = "benefits"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        sa.Integer, sa.ForeignKey("employee.id"), nullable=False, index=True,
    )
    benefit_type: Mapped[Optional[str]] = mapped_column(sa.String(50))
    start_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    coverage: Mapped[Optional[str]] = mapped_column(sa.String(100))
    premium: Mapped[Optional[float]] = mapped_column(sa.Numeric(10, 2, asdecimal=False))

    employee: Mapped["Employee"] = relationship(back_populates="benefits")


class Dependent(Base):
    __tablename__ = "dependent"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        sa.Integer, sa.ForeignKey("employee.id"), nullable=False, index=True,
    )
    # Declared before the ``relationship`` column, which shadows the ORM helper.
    employee: Mapped["Employee"] = relationship(back_populates="dependents")

    first_name: Mapped[Optional[str]] = mapped_column(sa.String(50))
    last_name: Mapped[Optional[str]] = mapped_column(sa.String(50))
    relationship: Mapped[Optional[str]] = mapped_column(sa.String(30))
    date_of_birth: Mapped[Optional[date]] = mapped_column(sa.Date)


# ═════════════════════════════════════════════════════════════════════
# Time tracking
# ═════════════════════════════════════════════════════════════════════


class TimeEntry(Base):
    """Hours an employee logged against a project on one day."""

    __tablename__ = "time_tracking"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        sa.Integer, sa.ForeignKey("employee.id"), nullable=False, index=True,
    )
    project_id: Mapped[Optional[int]] = mapped_column(
        sa.Integer, sa.ForeignKey("project.id"),
    )
    date: Mapped[Optional[date]] = mapped_column(sa.Date)
    hours_worked: Mapped[Optional[float]] = mapped_column(sa.Numeric(5, 2, asdecimal=False))

    employee: Mapped["Employee"] = relationship(back_populates="time_entries")
    project: Mapped[Optional["Project"]] = relationship(back_populates="time_entries")

    def __repr__(self) -> str:
        return f"<TimeEntry {self.id} emp={self.employee_id} {self.date} {self.hours_worked}h>"
