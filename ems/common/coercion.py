"""Form-value coercion used by every write schema.

Request bodies arrive as flat objects of raw form values. Nothing here
rejects input: blanks become ``None`` (or a documented default) and
unparseable values are treated as blank.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator

from ems.common.constants import DEFAULT_GENDER, DEFAULT_PROJECT_STATUS

_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def coerce_text(value: Any) -> Optional[str]:
    """Blank or missing → ``None``; anything else as a string."""
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text if text.strip() else None


def coerce_int(value: Any) -> Optional[int]:
    """Leading base-10 integer of *value*, or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _INT_PREFIX.match(str(value))
    return int(match.group()) if match else None


def coerce_float(value: Any, default: Optional[float] = None) -> Optional[float]:
    """Leading decimal number of *value*, or *default*."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else default
    match = _FLOAT_PREFIX.match(str(value))
    if not match:
        return default
    parsed = float(match.group())
    return parsed if math.isfinite(parsed) else default


def coerce_date(value: Any) -> Optional[date]:
    """``YYYY-MM-DD`` or ISO datetime → ``date``; otherwise ``None``."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def _gender(value: Any) -> str:
    return coerce_text(value) or DEFAULT_GENDER


def _project_status(value: Any) -> str:
    return coerce_text(value) or DEFAULT_PROJECT_STATUS


def _salary(value: Any) -> float:
    return coerce_float(value, default=0.0)


# ── Annotated field types for Pydantic write schemas ───────────────

FormText = Annotated[Optional[str], BeforeValidator(coerce_text)]
FormId = Annotated[Optional[int], BeforeValidator(coerce_int)]
FormAmount = Annotated[Optional[float], BeforeValidator(coerce_float)]
FormDate = Annotated[Optional[date], BeforeValidator(coerce_date)]
FormGender = Annotated[str, BeforeValidator(_gender)]
FormSalary = Annotated[float, BeforeValidator(_salary)]
FormProjectStatus = Annotated[str, BeforeValidator(_project_status)]
