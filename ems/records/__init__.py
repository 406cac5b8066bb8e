"""Employee records — leave, benefits, dependents and time tracking."""

from ems.records.models import Benefit, Dependent, LeaveRecord, TimeEntry

__all__ = ["LeaveRecord", "Benefit", "Dependent", "TimeEntry"]
