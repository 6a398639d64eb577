#!/usr/bin/env python3
"""Cell-by-cell model of one month page of the picker."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List

from range_math import in_interval
from selection_engine import EngineSettings, EngineState

GRID_WEEKS = 6
GRID_CELLS = GRID_WEEKS * 7


@dataclass(frozen=True)
class DayCell:
    day: date
    in_month: bool
    is_today: bool = False
    is_selected: bool = False
    disabled: bool = False
    in_range: bool = False
    range_start: bool = False
    range_end: bool = False
    in_hover: bool = False
    hover_valid: bool = True


def _grid_days(month: date) -> List[date]:
    cal = calendar.Calendar(firstweekday=0)
    days = [day for week in cal.monthdatescalendar(month.year, month.month) for day in week]
    while len(days) < GRID_CELLS:
        days.append(days[-1] + timedelta(days=1))
    return days


def build_grid(
    month: date,
    state: EngineState,
    settings: EngineSettings,
    today: date,
) -> List[DayCell]:
    """42 Monday-first cells covering the month that contains ``month``."""
    selection = state.selection if state.mode == "range" else None
    hover = state.hover if selection is not None and selection.is_open else None

    cells: List[DayCell] = []
    for day in _grid_days(month):
        in_range = range_start = range_end = False
        if selection is not None and selection.start is not None:
            range_start = day == selection.start
            if selection.end is not None:
                range_end = day == selection.end
                in_range = in_interval(day, selection.start, selection.end)
            else:
                in_range = range_start

        in_hover = hover is not None and hover.contains(day)
        cells.append(
            DayCell(
                day=day,
                in_month=day.month == month.month,
                is_today=day == today,
                is_selected=state.mode == "single" and day == state.selected_day,
                disabled=settings.bounds.is_disabled(day),
                in_range=in_range,
                range_start=range_start,
                range_end=range_end,
                in_hover=in_hover,
                hover_valid=hover.valid if in_hover and hover is not None else True,
            )
        )
    return cells


def grid_weeks(cells: List[DayCell]) -> List[List[DayCell]]:
    return [cells[idx : idx + 7] for idx in range(0, len(cells), 7)]


__all__ = ["DayCell", "GRID_CELLS", "build_grid", "grid_weeks"]
