"""Display formatting for currency amounts and dates."""

from __future__ import annotations

from typing import Any

from ems.common.coercion import coerce_date, coerce_float
from ems.common.constants import CURRENCY_CODE, CURRENCY_SYMBOLS

NOT_AVAILABLE = "N/A"

_DATE_STYLES = {
    "long": "%B",
    "medium": "%b",
}


def format_currency(amount: Any, currency: str = CURRENCY_CODE) -> str:
    """Amount with thousands grouping in *currency*: ``$1,234.50``, ``-$5.00``."""
    value = coerce_float(amount)
    if value is None:
        return NOT_AVAILABLE
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_date(value: Any, style: str = "long") -> str:
    """``January 5, 2024`` (long) or ``Jan 5, 2024`` (medium)."""
    if value is None or value == "":
        return NOT_AVAILABLE
    parsed = coerce_date(value)
    if parsed is None:
        return NOT_AVAILABLE
    month = parsed.strftime(_DATE_STYLES.get(style, _DATE_STYLES["long"]))
    return f"{month} {parsed.day}, {parsed.year}"
