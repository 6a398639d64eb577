from datetime import date

from labels import display_label, overflow_warning, range_summary
from models import HoverPreview, Selection


def test_daily_label_spells_out_the_day() -> None:
    assert display_label(date(2024, 1, 1), "daily") == "Monday, January 1, 2024"


def test_weekly_label_uses_week_bounds_of_focus() -> None:
    assert display_label(date(2024, 1, 3), "weekly") == "Jan 1 – Jan 7, 2024"
    assert display_label(date(2024, 12, 31), "weekly") == "Dec 30 – Jan 5, 2025"


def test_monthly_label() -> None:
    assert display_label(date(2024, 2, 14), "monthly") == "February 2024"


def test_range_labels() -> None:
    focus = date(2024, 1, 15)
    complete = Selection(date(2024, 1, 1), date(2024, 1, 8))
    assert display_label(focus, "range", complete) == "Jan 1, 2024 – Jan 8, 2024"

    open_range = Selection(date(2024, 1, 1), None)
    assert display_label(focus, "range", open_range) == "Jan 1, 2024 – (select end date)"

    assert display_label(focus, "range", Selection()) == "Select date range"
    assert display_label(focus, "range") == "Select date range"


def test_range_summary_for_completed_range() -> None:
    selection = Selection(date(2024, 1, 1), date(2024, 1, 8))
    assert range_summary(selection, None, 31) == "Selected: 8 days"


def test_range_summary_previews_hover() -> None:
    selection = Selection(date(2024, 1, 1), None)
    assert range_summary(selection, None, 31) == "Start: Jan 1, 2024"

    valid = HoverPreview(date(2024, 1, 1), date(2024, 1, 20), valid=True)
    assert range_summary(selection, valid, 31) == "Start: Jan 1, 2024   Preview: 20 days"

    invalid = HoverPreview(date(2024, 1, 1), date(2024, 2, 10), valid=False)
    assert (
        range_summary(selection, invalid, 31)
        == "Start: Jan 1, 2024   Exceeds 31 day limit (41 days)"
    )


def test_range_summary_empty() -> None:
    assert range_summary(Selection(), None, 31) == ""


def test_overflow_warning_names_the_limit() -> None:
    assert "31 consecutive days" in overflow_warning(31)


def test_synced_views_label_the_picked_range() -> None:
    week = Selection(date(2024, 1, 3), date(2024, 1, 9))
    assert display_label(date(2024, 1, 3), "weekly", week) == "Jan 3 – Jan 9, 2024"
    assert display_label(date(2024, 1, 20), "weekly", week) == "Jan 15 – Jan 21, 2024"

    month = Selection(date(2024, 1, 15), date(2024, 2, 13))
    assert display_label(date(2024, 1, 15), "monthly", month) == "Jan 15 – Feb 13, 2024"

    calendar_month = Selection(date(2024, 2, 1), date(2024, 2, 29))
    assert display_label(date(2024, 2, 1), "monthly", calendar_month) == "February 2024"
