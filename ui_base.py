#!/usr/bin/env python3
"""Basic UI helpers for curses rendering."""

from __future__ import annotations

import curses
from typing import Iterable

_BOX_COLOR_PAIR: int | None = None


def _box_color_attr() -> int:
    global _BOX_COLOR_PAIR
    if _BOX_COLOR_PAIR is not None:
        return _BOX_COLOR_PAIR
    if not curses.has_colors():
        _BOX_COLOR_PAIR = 0
        return _BOX_COLOR_PAIR
    try:
        curses.init_pair(1, curses.COLOR_WHITE, curses.COLOR_BLACK)
    except curses.error:
        _BOX_COLOR_PAIR = 0
        return _BOX_COLOR_PAIR
    _BOX_COLOR_PAIR = curses.color_pair(1)
    return _BOX_COLOR_PAIR


def put(stdscr: "curses.window", y: int, x: int, text: str, attr: int = 0) -> None:  # type: ignore[name-defined]
    """Write clipped to the window; writes off-screen are dropped."""
    h, w = stdscr.getmaxyx()
    if y < 0 or y >= h or x < 0 or x >= w - 1:
        return
    try:
        stdscr.addnstr(y, x, text, max(0, w - 1 - x), attr)
    except curses.error:
        pass


def draw_header(stdscr: "curses.window", left: str, right: str = "") -> None:  # type: ignore[name-defined]
    _, w = stdscr.getmaxyx()
    if w <= 1:
        return
    width = w - 1
    gap = max(1, width - len(left) - len(right))
    put(stdscr, 0, 0, f"{left}{' ' * gap}{right}"[:width].ljust(width), curses.A_BOLD)


def draw_footer(stdscr: "curses.window", text: str) -> None:  # type: ignore[name-defined]
    h, w = stdscr.getmaxyx()
    if w <= 1 or h <= 0:
        return
    put(stdscr, h - 1, 0, text.ljust(w - 1), curses.A_DIM)


def draw_centered_box(stdscr: "curses.window", lines: Iterable[str]) -> None:  # type: ignore[name-defined]
    h, w = stdscr.getmaxyx()
    lines_list = list(lines) or [""]
    win_h = min(len(lines_list) + 2, h - 2)
    win_w = min(max(len(line) for line in lines_list) + 4, w - 2)
    if win_h < 3 or win_w < 5:
        return
    win = stdscr.derwin(win_h, win_w, (h - win_h) // 2, (w - win_w) // 2)
    attr = _box_color_attr()
    if attr:
        win.bkgd(" ", attr)
        win.attrset(attr)
    win.erase()
    win.border()
    for idx, line in enumerate(lines_list[: win_h - 2], start=1):
        win.addnstr(idx, 2, line[: win_w - 4], win_w - 4, attr)
    win.refresh()


def clamp(value: int, min_value: int, max_value: int) -> int:
    return max(min_value, min(value, max_value))


__all__ = ["draw_header", "draw_footer", "draw_centered_box", "put", "clamp"]
