"""Core HR ORM models: Department, Employee.

SQLAlchemy 2.0 async-compatible models with Mapped[] annotations.
Table and column names match alembic/versions/001_initial_schema.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Optional

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ems.database import Base

if TYPE_CHECKING:
    from ems.projects.models import WorksOn
    from ems.records.models import Benefit, Dependent, LeaveRecord, TimeEntry


# ═════════════════════════════════════════════════════════════════════
# Department
# ═════════════════════════════════════════════════════════════════════


class Department(Base):
    """Organisational department."""

    __tablename__ = "department"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    name: Mapped[Optional[str]] = mapped_column(sa.String(100))
    location: Mapped[Optional[str]] = mapped_column(sa.String(100))
    budget: Mapped[Optional[float]] = mapped_column(sa.Numeric(15, 2, asdecimal=False))
    description: Mapped[Optional[str]] = mapped_column(sa.Text)

    # ── Relationships ───────────────────────────────────────────────
    employees: Mapped[list[Employee]] = relationship(
        back_populates="department", foreign_keys="Employee.department_id",
    )

    def __repr__(self) -> str:
        return f"<Department {self.id} {self.name!r}>"


# ═════════════════════════════════════════════════════════════════════
# Employee
# ═════════════════════════════════════════════════════════════════════


class Employee(Base):
    """Core employee record."""

    __tablename__ = "employee"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)

    # ── Name / contact ──────────────────────────────────────────────
    first_name: Mapped[Optional[str]] = mapped_column(sa.String(50))
    last_name: Mapped[Optional[str]] = mapped_column(sa.String(50))
    email: Mapped[Optional[str]] = mapped_column(sa.String(100))
    phone_no: Mapped[Optional[str]] = mapped_column(sa.String(20))
    address: Mapped[Optional[str]] = mapped_column(sa.Text)

    # ── Demographics ────────────────────────────────────────────────
    gender: Mapped[Optional[str]] = mapped_column(sa.String(10))
    date_of_birth: Mapped[Optional[date]] = mapped_column(sa.Date)

    # ── Employment ──────────────────────────────────────────────────
    hire_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    salary: Mapped[Optional[float]] = mapped_column(sa.Numeric(12, 2, asdecimal=False))

    # ── Org hierarchy ───────────────────────────────────────────────
    # No ON DELETE action: the store's foreign-key default decides.
    department_id: Mapped[Optional[int]] = mapped_column(
        sa.Integer, sa.ForeignKey("department.id"),
    )
    supervisor_id: Mapped[Optional[int]] = mapped_column(
        sa.Integer, sa.ForeignKey("employee.id"),
    )

    # ── Relationships ───────────────────────────────────────────────
    department: Mapped[Optional[Department]] = relationship(
        back_populates="employees", foreign_keys=[department_id],
    )
    supervisor: Mapped[Optional[Employee]] = relationship(
        remote_side=[id], foreign_keys=[supervisor_id],
    )
    works_on: Mapped[list["WorksOn"]] = relationship(back_populates="employee")
    leave_records: Mapped[list["LeaveRecord"]] = relationship(back_populates="employee")
    benefits: Mapped[list["Benefit"]] = relationship(back_populates="employee")
    dependents: Mapped[list["Dependent"]] = relationship(back_populates="employee")
    time_entries: Mapped[list["TimeEntry"]] = relationship(back_populates="employee")

    def __repr__(self) -> str:
        return f"<Employee {self.id} {self.first_name} {self.last_name}>"
