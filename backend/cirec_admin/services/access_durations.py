"""Grant duration rules per entitlement category."""

from __future__ import annotations

import calendar
from datetime import datetime

SEARCH_ACCESS_MONTHS: dict[int, int] = {1: 3, 2: 6, 3: 12, 4: 24}
DEFAULT_SEARCH_ACCESS_MONTHS = 3

USER_TYPE_LABELS: dict[str, str] = {"N": "Normal", "C": "Corporate", "S": "Single"}


def search_access_months(code: int | None) -> int:
    if code is None:
        return DEFAULT_SEARCH_ACCESS_MONTHS
    return SEARCH_ACCESS_MONTHS.get(int(code), DEFAULT_SEARCH_ACCESS_MONTHS)


def end_after_months(start: datetime, months: int) -> datetime:
    """Same day ``months`` later, clamped to the last day of a shorter month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


def end_after_years(start: datetime, years: int) -> datetime:
    return end_after_months(start, years * 12)


def user_type_label(raw: str | None) -> str:
    if not raw:
        return "Normal"
    return USER_TYPE_LABELS.get(raw.strip().upper(), "Normal")
