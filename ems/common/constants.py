"""Enums and constants shared by the API service and the client."""

from __future__ import annotations

import enum


# ── Employee ────────────────────────────────────────────────────────

class GenderType(str, enum.Enum):
    male = "Male"
    female = "Female"
    other = "Other"


DEFAULT_GENDER = GenderType.male.value


# ── Projects ────────────────────────────────────────────────────────

class ProjectStatus(str, enum.Enum):
    planning = "Planning"
    in_progress = "In Progress"
    completed = "Completed"


DEFAULT_PROJECT_STATUS = ProjectStatus.planning.value


# ── Leave ───────────────────────────────────────────────────────────

class LeaveStatus(str, enum.Enum):
    pending = "Pending"
    approved = "Approved"
    rejected = "Rejected"


# Yearly allowance (days) per leave type, shown as "used / remaining".
LEAVE_ALLOWANCES: dict[str, int] = {
    "Vacation": 20,
    "Sick Leave": 10,
    "Personal Leave": 5,
}


# ── Client roles ────────────────────────────────────────────────────

class UserRole(str, enum.Enum):
    employee = "employee"
    manager = "manager"
    admin = "admin"


# ── Misc constants ──────────────────────────────────────────────────

CURRENCY_CODE = "USD"
CURRENCY_SYMBOLS: dict[str, str] = {"USD": "$"}
