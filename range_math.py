#!/usr/bin/env python3
"""Pure calendar-day arithmetic for range selection."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Dict, Literal, Tuple

from models import ViewType

Unit = Literal["day", "week", "month"]

UNIT_FOR_VIEW: Dict[ViewType, Unit] = {
    "daily": "day",
    "weekly": "week",
    "monthly": "month",
    "range": "day",
}


def span_days(start: date, end: date) -> int:
    """Inclusive day count; ``start`` must not be after ``end``."""
    return (end - start).days + 1


def normalize(a: date, b: date) -> Tuple[date, date]:
    if a <= b:
        return a, b
    return b, a


def exceeds_span(start: date, end: date, max_days: int) -> bool:
    return span_days(start, end) > max_days


def _shift_month(day: date, delta_months: int) -> date:
    year = day.year + ((day.month - 1 + delta_months) // 12)
    month = (day.month - 1 + delta_months) % 12 + 1
    # Clamp day to end of target month
    _, max_day = calendar.monthrange(year, month)
    return date(year, month, min(day.day, max_day))


def shift(day: date, unit: Unit, amount: int) -> date:
    if unit == "day":
        return day + timedelta(days=amount)
    if unit == "week":
        return day + timedelta(days=7 * amount)
    if unit == "month":
        return _shift_month(day, amount)
    raise ValueError(f"Unknown shift unit: {unit}")


def week_bounds(day: date) -> Tuple[date, date]:
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def month_bounds(day: date) -> Tuple[date, date]:
    _, last = calendar.monthrange(day.year, day.month)
    return day.replace(day=1), day.replace(day=last)


def in_interval(day: date, start: date, end: date) -> bool:
    return start <= day <= end


__all__ = [
    "UNIT_FOR_VIEW",
    "Unit",
    "exceeds_span",
    "in_interval",
    "month_bounds",
    "normalize",
    "shift",
    "span_days",
    "week_bounds",
]
