#!/usr/bin/env python3
"""Datetime windows covered by the picker's current view."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from models import Selection, ViewType
from view_sync import visible_range


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    def covers_day(self, day: date) -> bool:
        return self.start.date() <= day <= self.end.date()


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, datetime.min.time())


def _end_of_day(day: date) -> datetime:
    return datetime.combine(day, datetime.max.time())


def window_for(
    view_type: ViewType,
    focus: date,
    selection: Optional[Selection] = None,
) -> DateRange:
    """Report window for ``view_type``.

    Daily, weekly and monthly views expand ``focus`` unless a completed
    selection around it takes the week or month's place; the range view
    uses the selection, an open range covering its anchor day and an empty
    one falling back to ``focus``.
    """
    expanded = visible_range(focus, view_type, selection)
    start = expanded.start or focus
    end = expanded.end or start
    return DateRange(_start_of_day(start), _end_of_day(end))


__all__ = ["DateRange", "window_for"]
