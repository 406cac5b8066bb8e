"""Common module — shared utilities for the employee management API."""

from ems.common.coercion import (
    coerce_date,
    coerce_float,
    coerce_int,
    coerce_text,
)
from ems.common.constants import (
    CURRENCY_CODE,
    DEFAULT_GENDER,
    DEFAULT_PROJECT_STATUS,
    LEAVE_ALLOWANCES,
    GenderType,
    LeaveStatus,
    ProjectStatus,
    UserRole,
)
from ems.common.exceptions import (
    AppException,
    CreationFailedException,
    NotFoundException,
    register_exception_handlers,
)
from ems.common.filters import apply_filters, apply_search

__all__ = [
    # Coercion
    "coerce_date",
    "coerce_float",
    "coerce_int",
    "coerce_text",
    # Constants / Enums
    "GenderType",
    "LeaveStatus",
    "ProjectStatus",
    "UserRole",
    "CURRENCY_CODE",
    "DEFAULT_GENDER",
    "DEFAULT_PROJECT_STATUS",
    "LEAVE_ALLOWANCES",
    # Exceptions
    "AppException",
    "CreationFailedException",
    "NotFoundException",
    "register_exception_handlers",
    # Filters
    "apply_filters",
    "apply_search",
]
