from datetime import date, timedelta
from typing import List

from models import Bounds, HoverPreview, Selection
from selection_engine import (
    DayClicked,
    DayHovered,
    EngineSettings,
    EngineState,
    GridLeft,
    HostCallbacks,
    SelectionEngine,
    transition,
)

TODAY = date(2024, 1, 15)


class Recorder:
    def __init__(self) -> None:
        self.dates: List[date] = []
        self.ranges: List[Selection] = []
        self.views: List[str] = []
        self.overflows: List[date] = []

    def callbacks(self) -> HostCallbacks:
        return HostCallbacks(
            on_date_change=self.dates.append,
            on_range_change=self.ranges.append,
            on_view_type_change=self.views.append,
            on_overflow=self.overflows.append,
        )


def _engine(recorder: Recorder | None = None, **kwargs) -> SelectionEngine:
    settings = kwargs.pop("settings", EngineSettings())
    kwargs.setdefault("focus", TODAY)
    kwargs.setdefault("view_type", "range")
    return SelectionEngine(
        settings=settings,
        callbacks=recorder.callbacks() if recorder else None,
        clock=lambda: TODAY,
        **kwargs,
    )


def test_first_click_opens_range() -> None:
    engine = _engine()
    state = engine.click(date(2024, 1, 1))

    assert state.selection == Selection(date(2024, 1, 1), None)
    assert state.selection.is_open
    assert state.hover is None


def test_eight_day_range_completes_without_view_change() -> None:
    recorder = Recorder()
    engine = _engine(recorder)
    engine.click(date(2024, 1, 1))
    state = engine.click(date(2024, 1, 8))

    assert state.selection == Selection(date(2024, 1, 1), date(2024, 1, 8))
    assert state.view_type == "range"
    assert recorder.views == []
    assert recorder.ranges == [
        Selection(date(2024, 1, 1), None),
        Selection(date(2024, 1, 1), date(2024, 1, 8)),
    ]


def test_seven_day_range_switches_to_weekly() -> None:
    recorder = Recorder()
    engine = _engine(recorder)
    engine.click(date(2024, 1, 1))
    state = engine.click(date(2024, 1, 7))

    assert state.view_type == "weekly"
    assert state.mode == "range"
    assert state.selection == Selection(date(2024, 1, 1), date(2024, 1, 7))
    assert recorder.views == ["weekly"]


def test_auto_sync_moves_focus_to_range_start() -> None:
    recorder = Recorder()
    engine = _engine(recorder, focus=date(2024, 1, 15))
    engine.click(date(2024, 1, 1))
    state = engine.click(date(2024, 1, 7))

    assert state.view_type == "weekly"
    assert state.focus == date(2024, 1, 1)
    assert recorder.dates == [date(2024, 1, 1)]


def test_month_length_range_switches_to_monthly() -> None:
    engine = _engine()
    engine.click(date(2024, 2, 1))
    state = engine.click(date(2024, 2, 29))

    assert state.view_type == "monthly"


def test_proposal_is_parked_when_auto_sync_is_off() -> None:
    recorder = Recorder()
    engine = _engine(recorder, settings=EngineSettings(auto_sync_view=False))
    engine.click(date(2024, 1, 1))
    state = engine.click(date(2024, 1, 7))

    assert state.view_type == "range"
    assert state.proposed_view == "weekly"
    assert recorder.views == []

    state = engine.accept_proposal()
    assert state.view_type == "weekly"
    assert state.focus == date(2024, 1, 1)
    assert state.proposed_view is None
    assert state.selection == Selection(date(2024, 1, 1), date(2024, 1, 7))
    assert recorder.views == ["weekly"]


def test_no_proposal_outside_range_view() -> None:
    engine = _engine(view_type="monthly")
    engine.click(date(2024, 1, 1))
    state = engine.click(date(2024, 1, 7))

    assert state.view_type == "monthly"
    assert state.proposed_view is None


def test_overflow_restarts_at_clicked_day() -> None:
    recorder = Recorder()
    engine = _engine(recorder)
    engine.click(date(2024, 1, 1))
    state = engine.click(date(2024, 3, 15))

    assert state.selection == Selection(date(2024, 3, 15), None)
    assert state.overflowed
    assert recorder.overflows == [date(2024, 3, 15)]
    assert recorder.ranges[-1] == Selection(date(2024, 3, 15), None)

    state = engine.click(date(2024, 3, 20))
    assert state.selection == Selection(date(2024, 3, 15), date(2024, 3, 20))
    assert not state.overflowed
    assert recorder.overflows == [date(2024, 3, 15)]


def test_exactly_max_span_completes() -> None:
    engine = _engine(settings=EngineSettings(max_span_days=10))
    engine.click(date(2024, 1, 1))
    state = engine.click(date(2024, 1, 10))
    assert state.selection == Selection(date(2024, 1, 1), date(2024, 1, 10))

    engine.click(date(2024, 1, 1))
    state = engine.click(date(2024, 1, 11))
    assert state.selection == Selection(date(2024, 1, 11), None)


def test_out_of_order_clicks_are_normalized() -> None:
    engine = _engine()
    engine.click(date(2024, 1, 10))
    state = engine.click(date(2024, 1, 5))

    assert state.selection == Selection(date(2024, 1, 5), date(2024, 1, 10))


def test_same_day_twice_gives_one_day_range_then_restarts() -> None:
    engine = _engine()
    day = date(2024, 1, 1)
    engine.click(day)
    state = engine.click(day)
    assert state.selection == Selection(day, day)

    state = engine.click(day)
    assert state.selection == Selection(day, None)


def test_completed_ranges_never_exceed_max_span() -> None:
    engine = _engine(settings=EngineSettings(max_span_days=31))
    base = date(2024, 1, 1)
    offsets = [0, 40, 3, 90, 60, 61, 5, 5, 120, 80, 100, 70, 30, 0, 31, 1, 200, 170]
    for offset in offsets:
        state = engine.click(base + timedelta(days=offset))
        selection = state.selection
        if selection.is_complete:
            assert selection.start <= selection.end
            assert (selection.end - selection.start).days + 1 <= 31


def test_hover_preview_validity() -> None:
    engine = _engine()
    engine.click(date(2024, 1, 1))

    state = engine.hover(date(2024, 2, 10))
    assert state.hover == HoverPreview(date(2024, 1, 1), date(2024, 2, 10), valid=False)
    assert state.hover.span_days == 41

    state = engine.hover(date(2024, 1, 20))
    assert state.hover == HoverPreview(date(2024, 1, 1), date(2024, 1, 20), valid=True)
    assert state.selection == Selection(date(2024, 1, 1), None)


def test_hover_before_anchor_previews_backwards() -> None:
    engine = _engine()
    engine.click(date(2024, 1, 20))
    state = engine.hover(date(2024, 1, 10))

    assert state.hover is not None
    assert state.hover.valid
    assert state.hover.contains(date(2024, 1, 15))
    assert state.hover.span_days == 11


def test_hover_without_open_range_clears_preview() -> None:
    engine = _engine()
    state = engine.hover(date(2024, 1, 5))
    assert state.hover is None

    engine.click(date(2024, 1, 1))
    engine.hover(date(2024, 1, 4))
    state = engine.click(date(2024, 1, 4))
    assert state.hover is None
    state = engine.hover(date(2024, 1, 9))
    assert state.hover is None


def test_leaving_grid_keeps_preview_while_range_is_open() -> None:
    engine = _engine()
    engine.click(date(2024, 1, 1))
    engine.hover(date(2024, 1, 5))
    state = engine.leave_grid()
    assert state.hover == HoverPreview(date(2024, 1, 1), date(2024, 1, 5), valid=True)


def test_leaving_grid_without_open_range_clears_preview() -> None:
    state = EngineState(
        focus=TODAY,
        selection=Selection(date(2024, 1, 1), date(2024, 1, 3)),
        hover=HoverPreview(date(2024, 1, 1), date(2024, 1, 3), valid=True),
    )
    assert transition(state, GridLeft(), EngineSettings()).hover is None


def test_disabled_day_click_and_hover_change_nothing() -> None:
    settings = EngineSettings(bounds=Bounds(min_date=date(2024, 1, 5)))
    state = EngineState(focus=TODAY)

    assert transition(state, DayClicked(date(2024, 1, 3)), settings) is state

    recorder = Recorder()
    engine = _engine(recorder, settings=settings)
    engine.click(date(2024, 1, 10))
    before = engine.hover(date(2024, 1, 12))
    recorder.ranges.clear()

    after = engine.hover(date(2024, 1, 3))
    assert after == before
    after = engine.click(date(2024, 1, 4))
    assert after == before
    assert recorder.ranges == []

    assert transition(before, DayHovered(date(2024, 1, 1)), settings) is before


def test_clear_resets_both_modes() -> None:
    recorder = Recorder()
    engine = _engine(recorder)
    engine.click(date(2024, 1, 1))
    engine.hover(date(2024, 1, 3))
    state = engine.clear()
    assert state.selection.is_empty
    assert state.hover is None
    assert recorder.ranges[-1] == Selection()

    engine = _engine(view_type="daily")
    engine.click(date(2024, 1, 3))
    state = engine.clear()
    assert state.selected_day is None


def test_today_in_range_mode_opens_range() -> None:
    recorder = Recorder()
    engine = _engine(recorder, focus=date(2024, 1, 1))
    engine.click(date(2024, 1, 2))
    engine.click(date(2024, 1, 4))
    state = engine.go_to_today()

    assert state.selection == Selection(TODAY, None)
    assert state.focus == TODAY
    assert recorder.dates == [TODAY]


def test_today_in_single_mode_selects_today() -> None:
    engine = _engine(view_type="daily", focus=date(2024, 1, 1))
    state = engine.go_to_today()

    assert state.mode == "single"
    assert state.selected_day == TODAY
    assert state.current_selection == Selection(TODAY, TODAY)


def test_today_outside_bounds_is_ignored() -> None:
    settings = EngineSettings(bounds=Bounds(max_date=date(2024, 1, 10)))
    engine = _engine(settings=settings, focus=date(2024, 1, 2))
    before = engine.click(date(2024, 1, 2))
    assert engine.go_to_today() == before


def test_single_mode_click_overwrites_and_moves_focus() -> None:
    recorder = Recorder()
    engine = _engine(recorder, view_type="daily")
    engine.click(date(2024, 1, 3))
    state = engine.click(date(2024, 1, 9))

    assert state.selected_day == date(2024, 1, 9)
    assert state.focus == date(2024, 1, 9)
    assert state.selection.is_empty
    assert recorder.dates == [date(2024, 1, 3), date(2024, 1, 9)]


def test_switching_mode_away_from_range_resets_selection() -> None:
    engine = _engine()
    engine.click(date(2024, 1, 1))
    engine.hover(date(2024, 1, 4))
    state = engine.set_mode("single")

    assert state.mode == "single"
    assert state.selection.is_empty
    assert state.hover is None


def test_leaving_range_view_clears_open_range_only() -> None:
    engine = _engine()
    engine.click(date(2024, 1, 1))
    state = engine.set_view_type("weekly")
    assert state.selection.is_empty
    assert state.mode == "range"

    engine = _engine()
    engine.click(date(2024, 1, 1))
    engine.click(date(2024, 1, 3))
    state = engine.set_view_type("monthly")
    assert state.selection == Selection(date(2024, 1, 1), date(2024, 1, 3))


def test_switching_to_daily_view_uses_single_mode() -> None:
    recorder = Recorder()
    engine = _engine(recorder)
    engine.click(date(2024, 1, 1))
    engine.click(date(2024, 1, 3))
    state = engine.set_view_type("daily")

    assert state.mode == "single"
    assert state.selection.is_empty
    assert recorder.views == ["daily"]


def test_navigation_uses_view_unit() -> None:
    recorder = Recorder()
    engine = _engine(recorder, view_type="monthly", focus=date(2024, 1, 31))
    assert engine.next().focus == date(2024, 2, 29)
    assert engine.previous().focus == date(2024, 1, 29)
    assert recorder.dates == [date(2024, 2, 29), date(2024, 1, 29)]

    engine = _engine(view_type="weekly", focus=date(2024, 1, 3))
    assert engine.next().focus == date(2024, 1, 10)

    engine = _engine(view_type="daily", focus=date(2024, 1, 1))
    assert engine.previous().focus == date(2023, 12, 31)

    engine = _engine(view_type="range", focus=date(2024, 1, 1))
    assert engine.next().focus == date(2024, 1, 2)


def test_navigation_respects_bounds_and_keeps_open_range() -> None:
    settings = EngineSettings(bounds=Bounds(max_date=date(2024, 2, 10)))
    recorder = Recorder()
    engine = _engine(recorder, settings=settings, view_type="monthly", focus=date(2024, 1, 31))
    engine.click(date(2024, 1, 20))
    recorder.ranges.clear()

    state = engine.next()
    assert state.focus == date(2024, 2, 10)
    assert state.selection == Selection(date(2024, 1, 20), None)
    assert recorder.ranges == []

    assert engine.next() == state
    assert recorder.dates == [date(2024, 2, 10)]


def test_step_range_moves_completed_range_by_its_length() -> None:
    engine = _engine()
    engine.click(date(2024, 1, 1))
    engine.click(date(2024, 1, 3))
    state = engine.step_range(+1)
    assert state.selection == Selection(date(2024, 1, 4), date(2024, 1, 6))

    state = engine.step_range(-1)
    assert state.selection == Selection(date(2024, 1, 1), date(2024, 1, 3))


def test_step_range_ignores_open_range_and_bounds() -> None:
    engine = _engine()
    engine.click(date(2024, 1, 1))
    assert engine.step_range(+1).selection == Selection(date(2024, 1, 1), None)

    settings = EngineSettings(bounds=Bounds(max_date=date(2024, 1, 5)))
    engine = _engine(settings=settings, focus=date(2024, 1, 1))
    engine.click(date(2024, 1, 1))
    engine.click(date(2024, 1, 3))
    assert engine.step_range(+1).selection == Selection(date(2024, 1, 1), date(2024, 1, 3))


def test_oversized_initial_selection_becomes_open_range() -> None:
    engine = _engine(selection=Selection(date(2024, 3, 1), date(2024, 1, 1)))
    assert engine.state.selection == Selection(date(2024, 1, 1), None)

    engine = _engine(selection=Selection(date(2024, 1, 9), date(2024, 1, 2)))
    assert engine.state.selection == Selection(date(2024, 1, 2), date(2024, 1, 9))


def test_focus_defaults_to_clock() -> None:
    engine = SelectionEngine(clock=lambda: TODAY)
    assert engine.state.focus == TODAY
    assert engine.today() == TODAY


def test_single_mode_initial_selection_selects_its_day() -> None:
    recorder = Recorder()
    engine = _engine(
        recorder,
        view_type="daily",
        selection=Selection(date(2024, 1, 9), date(2024, 1, 12)),
    )

    assert engine.state.mode == "single"
    assert engine.state.selected_day == date(2024, 1, 9)
    assert engine.state.selection == Selection()
    assert engine.state.current_selection == Selection(date(2024, 1, 9), date(2024, 1, 9))

    engine.click(date(2024, 1, 10))
    assert recorder.ranges == [Selection(date(2024, 1, 10), date(2024, 1, 10))]
