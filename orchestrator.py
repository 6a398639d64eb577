#!/usr/bin/env python3
"""Orchestrator for atcal."""
from __future__ import annotations

import curses
import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from attendance_service import AttendanceService
from calendar_grid import build_grid
from config import Config, load_config
from date_ranges import window_for
from help_content import HELP_LINES
from keys import (
    KEY_ACCEPT,
    KEY_CAP_H,
    KEY_CAP_L,
    KEY_CAP_Q,
    KEY_CLEAR,
    KEY_ENTER_KEYS,
    KEY_ESC,
    KEY_H,
    KEY_HELP,
    KEY_J,
    KEY_K,
    KEY_L,
    KEY_MODE,
    KEY_NEXT,
    KEY_PREV,
    KEY_Q,
    KEY_RANGE_NEXT,
    KEY_RANGE_PREV,
    KEY_SPACE,
    KEY_TAB,
    KEY_TODAY,
    KEY_VIEW,
)
from labels import display_label, overflow_warning, range_summary
from models import VIEW_TYPES, Selection, ValidationError, ViewType
from range_math import Unit, shift
from selection_engine import EngineSettings, HostCallbacks, SelectionEngine
from state import AppState
from store import StorageError
from ui_base import draw_centered_box, draw_footer, draw_header
from view_picker import PickerView

logger = logging.getLogger(__name__)

FOOTER = "q: quit   ?: help   Enter: pick   [ ]: prev/next   v: view   t: today   c: clear"
CURSOR_KEYS = {
    KEY_H: ("day", -1),
    KEY_L: ("day", +1),
    KEY_J: ("week", +1),
    KEY_K: ("week", -1),
    KEY_CAP_H: ("month", -1),
    KEY_CAP_L: ("month", +1),
}


class Orchestrator:
    """Owns the picker engine, the attendance log and the curses lifecycle."""

    def __init__(
        self,
        version: str = "0.0.0",
        *,
        config: Optional[Config] = None,
        focus: Optional[date] = None,
        view_type: Optional[ViewType] = None,
        clock: Callable[[], date] = date.today,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.version = version
        self.config = config or load_config()
        self.service = AttendanceService(self.config.data_parquet_path)
        self._now = now

        settings = EngineSettings(
            bounds=self.config.bounds,
            max_span_days=self.config.max_span_days,
            auto_sync_view=self.config.auto_sync_view,
        )
        start = settings.bounds.clamp(focus or clock())
        self.engine = SelectionEngine(
            focus=start,
            view_type=view_type or self.config.default_view,
            settings=settings,
            callbacks=HostCallbacks(
                on_date_change=self._on_date_change,
                on_range_change=self._on_range_change,
                on_view_type_change=self._on_view_type_change,
                on_overflow=self._on_overflow,
            ),
            clock=clock,
        )
        self.state = AppState(cursor=start)

    # Engine callbacks
    def _on_date_change(self, day: date) -> None:
        self.state.cursor = day

    def _on_range_change(self, selection: Selection) -> None:
        logger.debug("Selection now %s..%s", selection.start, selection.end)

    def _on_view_type_change(self, view_type: ViewType) -> None:
        logger.info("View type changed to %s", view_type)

    def _on_overflow(self, day: date) -> None:
        self._show_overlay(overflow_warning(self.engine.settings.max_span_days), kind="message")

    # CLI entry points
    def handle_check_in(self, user: str) -> int:
        try:
            record = self.service.check_in(user, self._now())
        except (ValidationError, StorageError) as exc:
            print(str(exc))
            return 1
        print(f"Checked in {record.user} at {record.check_in:%H:%M:%S}")
        return 0

    def handle_check_out(self, user: str) -> int:
        try:
            record = self.service.check_out(user, self._now())
        except (ValidationError, StorageError) as exc:
            print(str(exc))
            return 1
        print(f"Checked out {record.user} at {record.check_out:%H:%M:%S}")
        return 0

    # Curses lifecycle
    def run(self) -> int:
        try:
            curses.wrapper(self._curses_main)
        except curses.error:
            logger.exception("Terminal error")
            return 1
        return 0

    def _curses_main(self, stdscr: "curses.window") -> None:  # type: ignore[name-defined]
        curses.curs_set(0)
        stdscr.nodelay(True)
        stdscr.timeout(100)

        self.load_records()
        self._draw(stdscr)

        while True:
            ch = stdscr.getch()
            if ch in (-1, curses.ERR):
                continue
            if ch in (KEY_Q, KEY_CAP_Q) and self.state.overlay == "none":
                break

            if self.handle_key(ch):
                self._draw(stdscr)

    def load_records(self) -> None:
        try:
            self.state.records = self.service.load_records()
        except StorageError as exc:
            logger.warning("Could not load attendance records: %s", exc)
            self._show_overlay(f"Storage error: {exc}")
            self.state.records = []

    # Rendering
    def status_lines(self) -> List[str]:
        st = self.engine.state
        lines = [range_summary(st.selection, st.hover, self.engine.settings.max_span_days)]
        if st.proposed_view is not None:
            lines.append(f"Suggested view: {st.proposed_view} (press a)")

        window = window_for(st.view_type, st.focus, st.current_selection)
        summary = self.service.summarize(self.state.records, window)
        lines.append("")
        lines.append(
            f"Attendance {window.start:%Y-%m-%d} to {window.end:%Y-%m-%d}: "
            f"{summary.total_records} records, {summary.workers_present} workers, "
            f"{summary.currently_in} in, {summary.completed} completed"
        )
        return lines

    def _draw(self, stdscr: "curses.window") -> None:  # type: ignore[name-defined]
        stdscr.erase()
        st = self.engine.state
        draw_header(
            stdscr,
            display_label(st.focus, st.view_type, st.selection),
            f"{st.view_type} / {st.mode}",
        )
        draw_footer(stdscr, FOOTER)

        cells = build_grid(self.state.cursor, st, self.engine.settings, self.engine.today())
        view = PickerView(self.service.daily_counts(self.state.records))
        view.render(
            stdscr,
            2,
            self.state.cursor,
            cells,
            self.state.cursor,
            grid_focused=self.state.focus_area == "grid",
            status_lines=self.status_lines(),
        )

        if self.state.overlay == "help":
            draw_centered_box(stdscr, [*HELP_LINES, "", "Esc to dismiss"])
        elif self.state.overlay in ("error", "message"):
            draw_centered_box(stdscr, [self.state.overlay_message, "", "Press any key to dismiss"])

        stdscr.refresh()

    # Key handling
    def handle_key(self, ch: int) -> bool:
        # Help closes on Esc or ?; other overlays swallow the dismissing key
        if self.state.overlay == "help":
            if ch in (KEY_ESC, KEY_HELP):
                self.state.overlay = "none"
                return True
            # Help stays open while other keys act on the picker
        elif self.state.overlay in ("error", "message"):
            self.state.overlay = "none"
            return True

        if ch == KEY_HELP:
            self.state.overlay = "help"
            return True
        if ch == KEY_ESC:
            self.state.overlay = "none"
            return True
        if ch == KEY_TAB:
            return self._toggle_grid_focus()
        if ch == KEY_TODAY:
            self.engine.go_to_today()
            self.state.cursor = self.engine.state.focus
            return True
        if ch == KEY_CLEAR:
            self.engine.clear()
            return True
        if ch == KEY_VIEW:
            self.engine.set_view_type(self._next_view_type())
            return True
        if ch == KEY_MODE:
            mode = "single" if self.engine.state.mode == "range" else "range"
            self.engine.set_mode(mode)
            return True
        if ch == KEY_ACCEPT:
            self.engine.accept_proposal()
            return True
        if ch == KEY_PREV:
            self.engine.previous()
            return True
        if ch == KEY_NEXT:
            self.engine.next()
            return True
        if ch == KEY_RANGE_PREV:
            self.engine.step_range(-1)
            return True
        if ch == KEY_RANGE_NEXT:
            self.engine.step_range(+1)
            return True

        if self.state.focus_area != "grid":
            return False
        if ch in CURSOR_KEYS:
            unit, amount = CURSOR_KEYS[ch]
            return self._move_cursor(unit, amount)
        if ch == KEY_SPACE or ch in KEY_ENTER_KEYS:
            self.engine.click(self.state.cursor)
            return True
        return False

    def _move_cursor(self, unit: Unit, amount: int) -> bool:
        target = self.engine.settings.bounds.clamp(shift(self.state.cursor, unit, amount))
        if target == self.state.cursor:
            return False
        self.state.cursor = target
        self.engine.hover(target)
        return True

    def _toggle_grid_focus(self) -> bool:
        if self.state.focus_area == "grid":
            self.state.focus_area = "summary"
            self.engine.leave_grid()
        else:
            self.state.focus_area = "grid"
            self.engine.hover(self.state.cursor)
        return True

    def _next_view_type(self) -> ViewType:
        idx = VIEW_TYPES.index(self.engine.state.view_type)
        return VIEW_TYPES[(idx + 1) % len(VIEW_TYPES)]

    def _show_overlay(self, message: str, kind: str = "error") -> None:
        self.state.overlay = "error" if kind == "error" else "message"
        self.state.overlay_message = message


__all__ = ["Orchestrator"]
