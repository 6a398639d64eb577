#!/usr/bin/env python3
"""Keeps the view-type control consistent with the picked range."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from models import EMPTY_SELECTION, Mode, Selection, ViewType
from range_math import in_interval, month_bounds, span_days, week_bounds

logger = logging.getLogger(__name__)

WEEK_DAYS = 7
MONTH_MIN_DAYS = 28
MONTH_MAX_DAYS = 31


def detect_pattern(start: date, end: date) -> ViewType:
    days = span_days(start, end)
    if days == WEEK_DAYS:
        return "weekly"
    if MONTH_MIN_DAYS <= days <= MONTH_MAX_DAYS:
        return "monthly"
    return "range"


def sync_on_completion(selection: Selection, current: ViewType) -> ViewType:
    """Suggest a view type for a freshly completed range.

    Only a host sitting in the explicit ``range`` view gets a suggestion;
    any other view is returned untouched.
    """
    start, end = selection.start, selection.end
    if current != "range" or start is None or end is None:
        return current
    detected = detect_pattern(start, end)
    if detected != current:
        logger.info("Completed range %s..%s matches %s view", start, end, detected)
    return detected


def expand_for_view(
    anchor: date,
    view_type: ViewType,
    current: Optional[Selection] = None,
) -> Selection:
    if view_type == "daily":
        return Selection(anchor, anchor)
    if view_type == "weekly":
        start, end = week_bounds(anchor)
        return Selection(start, end)
    if view_type == "monthly":
        start, end = month_bounds(anchor)
        return Selection(start, end)
    return current if current is not None else EMPTY_SELECTION


def visible_range(
    focus: date,
    view_type: ViewType,
    selection: Optional[Selection] = None,
) -> Selection:
    """Days a view displays around ``focus``.

    Weekly and monthly views show a completed selection in place of the
    calendar week or month while ``focus`` lies inside it.
    """
    if view_type in ("weekly", "monthly") and selection is not None:
        start, end = selection.start, selection.end
        if start is not None and end is not None and in_interval(focus, start, end):
            return selection
    return expand_for_view(focus, view_type, selection)


def mode_for_view(view_type: ViewType) -> Mode:
    return "single" if view_type == "daily" else "range"


__all__ = [
    "detect_pattern",
    "expand_for_view",
    "mode_for_view",
    "sync_on_completion",
    "visible_range",
]
