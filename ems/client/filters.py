"""In-memory list filtering for decoded API records.

Uses the same key-suffix grammar as the server-side query helpers in
``ems.common.filters`` so a filter dict reads the same on both sides:

    ============  ==================================================
    Suffix        Predicate
    ============  ==================================================
    (none)        field equals value (compared as strings)
    ``__ilike``   case-insensitive substring
    ``__from``    field >= value
    ``__to``      field <= value
    ``__in``      field (as string) is one of the values
    ============  ==================================================

``None`` and ``""`` values are skipped. Records whose field is null never
satisfy a constraint on that field.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Iterable, Optional, Sequence

from ems.common.coercion import coerce_date

Record = dict[str, Any]
Predicate = Callable[[Record], bool]

_SUFFIXES = ("__ilike", "__from", "__to", "__in")


def filter_records(
    records: Iterable[Record],
    filters: Optional[dict[str, Any]] = None,
    *,
    search: Optional[str] = None,
    search_fields: Sequence[str] = (),
) -> list[Record]:
    """Return the records matching every constraint, in input order."""
    predicates = [
        _predicate(key, value)
        for key, value in (filters or {}).items()
        if value is not None and value != ""
    ]
    if search and search.strip() and search_fields:
        predicates.append(_search_predicate(search.strip(), search_fields))

    return [r for r in records if all(p(r) for p in predicates)]


def unique_values(records: Iterable[Record], field: str) -> list[Any]:
    """Distinct non-null values of *field*, in first-seen order."""
    seen: list[Any] = []
    for record in records:
        value = record.get(field)
        if value is not None and value not in seen:
            seen.append(value)
    return seen


# ── Predicate builders ──────────────────────────────────────────────

def _split_key(key: str) -> tuple[str, str]:
    for suffix in _SUFFIXES:
        if key.endswith(suffix):
            return key.removesuffix(suffix), suffix
    return key, ""


def _predicate(key: str, value: Any) -> Predicate:
    field, op = _split_key(key)

    if op == "__ilike":
        needle = str(value).lower()
        return lambda r: r.get(field) is not None and needle in str(r[field]).lower()

    if op == "__from":
        return lambda r: _compare(r.get(field), value) >= 0 if r.get(field) is not None else False

    if op == "__to":
        return lambda r: _compare(r.get(field), value) <= 0 if r.get(field) is not None else False

    if op == "__in":
        allowed = {str(v) for v in value}
        return lambda r: r.get(field) is not None and str(r[field]) in allowed

    expected = str(value)
    return lambda r: r.get(field) is not None and str(r[field]) == expected


def _search_predicate(search: str, fields: Sequence[str]) -> Predicate:
    needle = search.lower()

    def matches(record: Record) -> bool:
        return any(
            record.get(f) is not None and needle in str(record[f]).lower()
            for f in fields
        )

    return matches


# ── Ordering ────────────────────────────────────────────────────────

def _compare(left: Any, right: Any) -> int:
    """Three-way compare: as dates, then as numbers, then as strings."""
    if _is_date_like(left) or _is_date_like(right):
        a, b = coerce_date(left), coerce_date(right)
        if a is not None and b is not None:
            return (a > b) - (a < b)

    try:
        x, y = float(left), float(right)
    except (TypeError, ValueError):
        x, y = str(left), str(right)
    return (x > y) - (x < y)


def _is_date_like(value: Any) -> bool:
    if isinstance(value, (date, datetime)):
        return True
    return isinstance(value, str) and coerce_date(value) is not None
