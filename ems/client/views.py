"""Derived values shown by the list and detail views.

Everything here is computed from decoded API records on read; nothing is
persisted. Dates may be ``date`` objects or ISO strings as they arrive
in JSON.
"""

from __future__ import annotations

import math
from collections import Counter
from datetime import date
from typing import Any, Iterable, Optional

from ems.common.coercion import coerce_date, coerce_float
from ems.common.constants import LEAVE_ALLOWANCES, LeaveStatus, ProjectStatus

Record = dict[str, Any]


# ═════════════════════════════════════════════════════════════════════
# Leave
# ═════════════════════════════════════════════════════════════════════


def leave_duration(start: Any, end: Any) -> int:
    """Days covered by a leave, counting both the start and end day.

    Returns 0 when either date is missing or unparseable.
    """
    start_date, end_date = coerce_date(start), coerce_date(end)
    if start_date is None or end_date is None:
        return 0
    return (end_date - start_date).days + 1


def leave_stats(leaves: Iterable[Record]) -> dict[str, int]:
    """Per-status counts, the record total and the total days requested."""
    leaves = list(leaves)
    statuses = Counter(leave.get("status") for leave in leaves)
    return {
        "approved": statuses[LeaveStatus.approved.value],
        "pending": statuses[LeaveStatus.pending.value],
        "rejected": statuses[LeaveStatus.rejected.value],
        "total": len(leaves),
        "total_days": sum(
            leave_duration(leave.get("start_date"), leave.get("end_date"))
            for leave in leaves
        ),
    }


def leave_balances(leaves: Iterable[Record]) -> dict[str, dict[str, int]]:
    """Approved days used and remaining for each allowance-bearing leave type."""
    used = dict.fromkeys(LEAVE_ALLOWANCES, 0)
    for leave in leaves:
        leave_type = leave.get("leave_type")
        if leave_type in used and leave.get("status") == LeaveStatus.approved.value:
            used[leave_type] += leave_duration(leave.get("start_date"), leave.get("end_date"))

    return {
        leave_type: {
            "allowance": allowance,
            "used": used[leave_type],
            "remaining": allowance - used[leave_type],
        }
        for leave_type, allowance in LEAVE_ALLOWANCES.items()
    }


# ═════════════════════════════════════════════════════════════════════
# Projects
# ═════════════════════════════════════════════════════════════════════


def project_progress(project: Record, today: Optional[date] = None) -> int:
    """Timeline-based completion percentage for a project card.

    Completed → 100. Not started yet, or without dates → 0. Past its end
    date but not completed → 90. Otherwise elapsed / total days, rounded
    half up and capped at 100.
    """
    if project.get("status") == ProjectStatus.completed.value:
        return 100

    start = coerce_date(project.get("start_date"))
    end = coerce_date(project.get("end_date"))
    if start is None or end is None:
        return 0

    today = today or date.today()
    if today < start:
        return 0
    if today > end:
        return 90

    total = (end - start).days
    if total <= 0:
        return 100
    progress = math.floor((today - start).days / total * 100 + 0.5)
    return min(progress, 100)


def project_status_counts(projects: Iterable[Record]) -> dict[str, int]:
    counts = {
        ProjectStatus.completed.value: 0,
        ProjectStatus.in_progress.value: 0,
        ProjectStatus.planning.value: 0,
    }
    for project in projects:
        status = project.get("status")
        if status:
            counts[status] = counts.get(status, 0) + 1
    return counts


# ═════════════════════════════════════════════════════════════════════
# Benefits
# ═════════════════════════════════════════════════════════════════════


def benefit_summary(benefits: Iterable[Record]) -> dict[str, dict[str, float]]:
    """Count and premium total per benefit type, in first-seen order."""
    summary: dict[str, dict[str, float]] = {}
    for benefit in benefits:
        entry = summary.setdefault(
            benefit.get("benefit_type") or "Other", {"count": 0, "total_premium": 0.0},
        )
        entry["count"] += 1
        entry["total_premium"] += coerce_float(benefit.get("premium"), default=0.0)
    return summary


def total_premium(benefits: Iterable[Record]) -> float:
    return sum(coerce_float(b.get("premium"), default=0.0) for b in benefits)


# ═════════════════════════════════════════════════════════════════════
# Time tracking
# ═════════════════════════════════════════════════════════════════════


def time_summary(entries: Iterable[Record]) -> dict[str, Any]:
    """Total and average hours plus per-project totals keyed by project id."""
    entries = list(entries)
    total_hours = sum(coerce_float(e.get("hours_worked"), default=0.0) for e in entries)

    by_project: dict[Any, dict[str, Any]] = {}
    for entry in entries:
        bucket = by_project.setdefault(
            entry.get("project_id"),
            {"project_name": entry.get("project_name"), "hours": 0.0},
        )
        bucket["hours"] += coerce_float(entry.get("hours_worked"), default=0.0)

    return {
        "total_hours": total_hours,
        "entry_count": len(entries),
        "average_hours": round(total_hours / len(entries), 1) if entries else 0,
        "by_project": by_project,
    }


# ═════════════════════════════════════════════════════════════════════
# Employees
# ═════════════════════════════════════════════════════════════════════


def department_distribution(employees: Iterable[Record]) -> dict[str, int]:
    """Employee headcount per department name; unassigned employees skipped."""
    counts: dict[str, int] = {}
    for employee in employees:
        name = employee.get("department_name")
        if name:
            counts[name] = counts.get(name, 0) + 1
    return counts


def department_headcounts(employees: Iterable[Record]) -> dict[int, int]:
    """Employee count keyed by department id."""
    return dict(Counter(
        e["department_id"] for e in employees if e.get("department_id") is not None
    ))


def supervisor_choices(employees: Iterable[Record], employee_id: Optional[int] = None) -> list[Record]:
    """Employees that may be picked as supervisor; never the employee itself."""
    return [e for e in employees if employee_id is None or e.get("id") != employee_id]
