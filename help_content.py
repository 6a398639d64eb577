"""Help and cheatsheet content for the atcal TUI."""

from __future__ import annotations

HELP_LINES: tuple[str, ...] = (
    "atcal help",
    "",
    "Ranges: Enter picks the first day, Enter again the last.",
    "A range longer than the day limit starts over at the second day.",
    "7 days switch the view to weekly, 28-31 days to monthly.",
    "",
    "q            quit",
    "?            toggle this help",
    "hjkl         move cursor (day / week)",
    "H / L        previous / next month page",
    "Enter Space  pick the day under the cursor",
    "[ / ]        previous / next day, week or month",
    "{ / }        shift a completed range by its length",
    "t            jump to today",
    "c            clear the selection",
    "v            cycle view: daily, weekly, monthly, range",
    "m            toggle single / range picking",
    "a            accept the suggested view",
    "Tab          leave / enter the grid",
    "Esc          dismiss overlays",
)

__all__ = ["HELP_LINES"]
