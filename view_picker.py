#!/usr/bin/env python3
"""Month grid rendering for the date/range picker."""

from __future__ import annotations

import curses
from datetime import date
from typing import Dict, List, Sequence

from calendar_grid import DayCell, grid_weeks
from labels import month_title
from ui_base import clamp, put

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
DEFAULT_CELL_W = 8
MIN_CELL_W = 4


def _cell_attr(cell: DayCell) -> int:
    attr = 0
    if cell.is_today:
        attr |= curses.A_BOLD
    if not cell.in_month or cell.disabled:
        attr |= curses.A_DIM
    if cell.is_selected or cell.in_range:
        attr |= curses.A_REVERSE
    elif cell.in_hover:
        attr |= curses.A_UNDERLINE
    return attr


def _cell_text(cell: DayCell, count: int, cursor: bool, width: int) -> str:
    label = f"{cell.day.day:2d}"
    if cell.in_hover and not cell.hover_valid:
        label += "!"
    elif count and width >= 7:
        label += f"({min(count, 99)})"
    if cursor:
        label = f">{label}"
    else:
        label = f" {label}"
    return label[:width].ljust(width)


class PickerView:
    def __init__(self, counts: Dict[date, int]):
        self.counts = counts

    def grid_height(self) -> int:
        # title, blank, weekday header, six weeks
        return 3 + 6

    def render(
        self,
        stdscr: "curses.window",  # type: ignore[name-defined]
        top: int,
        page: date,
        cells: List[DayCell],
        cursor: date,
        *,
        grid_focused: bool,
        status_lines: Sequence[str],
    ) -> None:
        h, w = stdscr.getmaxyx()
        if h - top <= 0 or w <= 1:
            return

        cell_w = DEFAULT_CELL_W
        if cell_w * 7 > w - 1:
            cell_w = clamp((w - 1) // 7, MIN_CELL_W, DEFAULT_CELL_W)

        title_attr = curses.A_BOLD if grid_focused else 0
        put(stdscr, top, 0, month_title(page), title_attr)

        header_y = top + 2
        for idx, name in enumerate(WEEKDAYS):
            put(stdscr, header_y, idx * cell_w, f" {name}"[:cell_w].ljust(cell_w), curses.A_DIM)

        for row_idx, week in enumerate(grid_weeks(cells)):
            row_y = header_y + 1 + row_idx
            for col_idx, cell in enumerate(week):
                text = _cell_text(
                    cell,
                    self.counts.get(cell.day, 0),
                    grid_focused and cell.day == cursor,
                    cell_w,
                )
                put(stdscr, row_y, col_idx * cell_w, text, _cell_attr(cell))

        status_y = top + self.grid_height() + 1
        for offset, line in enumerate(status_lines):
            put(stdscr, status_y + offset, 0, line)


__all__ = ["PickerView"]
