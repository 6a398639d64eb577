#!/usr/bin/env python3
"""Human-readable labels for the current selection."""

from __future__ import annotations

import calendar
from datetime import date
from typing import Optional

from models import HoverPreview, Selection, ViewType
from range_math import month_bounds, span_days
from view_sync import visible_range

RANGE_SEPARATOR = " – "
OPEN_END_TEXT = "(select end date)"
EMPTY_RANGE_TEXT = "Select date range"


def short_date(day: date) -> str:
    """``Jan 1``"""
    return f"{calendar.month_abbr[day.month]} {day.day}"


def medium_date(day: date) -> str:
    """``Jan 1, 2024``"""
    return f"{short_date(day)}, {day.year}"


def long_date(day: date) -> str:
    """``Monday, January 1, 2024``"""
    return (
        f"{calendar.day_name[day.weekday()]}, "
        f"{calendar.month_name[day.month]} {day.day}, {day.year}"
    )


def month_title(day: date) -> str:
    return f"{calendar.month_name[day.month]} {day.year}"


def display_label(
    focus: date,
    view_type: ViewType,
    selection: Optional[Selection] = None,
) -> str:
    if view_type == "daily":
        return long_date(focus)
    if view_type in ("weekly", "monthly"):
        shown = visible_range(focus, view_type, selection)
        if shown.start is None or shown.end is None:
            return month_title(focus)
        if view_type == "monthly" and (shown.start, shown.end) == month_bounds(focus):
            return month_title(focus)
        return f"{short_date(shown.start)}{RANGE_SEPARATOR}{medium_date(shown.end)}"

    if selection is None or selection.start is None:
        return EMPTY_RANGE_TEXT
    if selection.end is None:
        return f"{medium_date(selection.start)}{RANGE_SEPARATOR}{OPEN_END_TEXT}"
    return f"{medium_date(selection.start)}{RANGE_SEPARATOR}{medium_date(selection.end)}"


def range_summary(
    selection: Selection,
    hover: Optional[HoverPreview],
    max_span_days: int,
) -> str:
    """One-line status under the grid: selected length, or the live preview."""
    if selection.start is None:
        return ""
    if selection.end is not None:
        return f"Selected: {span_days(selection.start, selection.end)} days"

    text = f"Start: {medium_date(selection.start)}"
    if hover is None:
        return text
    if hover.valid:
        return f"{text}   Preview: {hover.span_days} days"
    return f"{text}   Exceeds {max_span_days} day limit ({hover.span_days} days)"


def overflow_warning(max_span_days: int) -> str:
    return (
        f"Ranges are limited to {max_span_days} consecutive days; "
        "a new range was started at the clicked day."
    )


__all__ = [
    "display_label",
    "long_date",
    "medium_date",
    "month_title",
    "overflow_warning",
    "range_summary",
    "short_date",
]
