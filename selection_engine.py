#!/usr/bin/env python3
"""Day-click state machine behind the calendar widget.

Every gesture is an event value; ``transition`` maps ``(state, event)`` to
the next state without side effects. ``SelectionEngine`` holds the state for
one widget, supplies the clock and turns state differences into host
callbacks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Callable, Optional, Union

from models import (
    DEFAULT_MAX_SPAN_DAYS,
    EMPTY_SELECTION,
    Bounds,
    HoverPreview,
    Mode,
    Selection,
    ViewType,
)
from range_math import UNIT_FOR_VIEW, exceeds_span, normalize, shift, span_days
from view_sync import mode_for_view, sync_on_completion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSettings:
    bounds: Bounds = field(default_factory=Bounds)
    max_span_days: int = DEFAULT_MAX_SPAN_DAYS
    auto_sync_view: bool = True


@dataclass(frozen=True)
class EngineState:
    focus: date
    mode: Mode = "range"
    view_type: ViewType = "range"
    selection: Selection = EMPTY_SELECTION
    selected_day: Optional[date] = None
    hover: Optional[HoverPreview] = None
    # View suggested by a completed range while auto sync is off
    proposed_view: Optional[ViewType] = None
    # Set only on the state produced by an overflow-restart click
    overflowed: bool = False

    @property
    def current_selection(self) -> Selection:
        if self.mode == "single":
            if self.selected_day is None:
                return EMPTY_SELECTION
            return Selection(self.selected_day, self.selected_day)
        return self.selection


# Events


@dataclass(frozen=True)
class DayClicked:
    day: date


@dataclass(frozen=True)
class DayHovered:
    day: date


@dataclass(frozen=True)
class GridLeft:
    pass


@dataclass(frozen=True)
class Cleared:
    pass


@dataclass(frozen=True)
class TodayRequested:
    today: date


@dataclass(frozen=True)
class ModeChanged:
    mode: Mode


@dataclass(frozen=True)
class ViewTypeChanged:
    view_type: ViewType


@dataclass(frozen=True)
class Navigated:
    direction: int


@dataclass(frozen=True)
class RangeStepped:
    direction: int


@dataclass(frozen=True)
class ProposalAccepted:
    pass


Event = Union[
    DayClicked,
    DayHovered,
    GridLeft,
    Cleared,
    TodayRequested,
    ModeChanged,
    ViewTypeChanged,
    Navigated,
    RangeStepped,
    ProposalAccepted,
]


def transition(state: EngineState, event: Event, settings: EngineSettings) -> EngineState:
    """Return the state after ``event``; a no-op returns ``state`` itself."""
    if state.overflowed:
        state = replace(state, overflowed=False)

    if isinstance(event, DayClicked):
        return _click(state, event.day, settings)
    if isinstance(event, DayHovered):
        return _hover(state, event.day, settings)
    if isinstance(event, GridLeft):
        return _leave_grid(state)
    if isinstance(event, Cleared):
        return _clear(state)
    if isinstance(event, TodayRequested):
        return _today(state, event.today, settings)
    if isinstance(event, ModeChanged):
        return _set_mode(state, event.mode)
    if isinstance(event, ViewTypeChanged):
        return _set_view_type(state, event.view_type)
    if isinstance(event, Navigated):
        return _navigate(state, event.direction, settings)
    if isinstance(event, RangeStepped):
        return _step_range(state, event.direction, settings)
    if isinstance(event, ProposalAccepted):
        return _accept_proposal(state)
    raise TypeError(f"Unknown engine event: {event!r}")


def _click(state: EngineState, day: date, settings: EngineSettings) -> EngineState:
    if settings.bounds.is_disabled(day):
        return state

    if state.mode == "single":
        return replace(state, selected_day=day, focus=day, hover=None)

    anchor = state.selection.anchor
    if anchor is None:
        return replace(
            state,
            selection=Selection(day, None),
            hover=None,
            proposed_view=None,
        )

    start, end = normalize(anchor, day)
    if exceeds_span(start, end, settings.max_span_days):
        logger.info(
            "Range %s..%s spans %d days (max %d); restarting at %s",
            start,
            end,
            span_days(start, end),
            settings.max_span_days,
            day,
        )
        return replace(
            state,
            selection=Selection(day, None),
            hover=None,
            proposed_view=None,
            overflowed=True,
        )

    completed = Selection(start, end)
    proposal = sync_on_completion(completed, state.view_type)
    if proposal == state.view_type:
        return replace(state, selection=completed, hover=None)
    if settings.auto_sync_view:
        # The synced view shows the picked range, so focus follows its start
        return replace(
            state,
            selection=completed,
            hover=None,
            focus=start,
            view_type=proposal,
            proposed_view=None,
        )
    return replace(state, selection=completed, hover=None, proposed_view=proposal)


def _hover(state: EngineState, day: date, settings: EngineSettings) -> EngineState:
    if settings.bounds.is_disabled(day):
        return state

    anchor = state.selection.anchor
    if state.mode != "range" or anchor is None:
        if state.hover is None:
            return state
        return replace(state, hover=None)

    start, end = normalize(anchor, day)
    preview = HoverPreview(
        start=anchor,
        candidate_end=day,
        valid=not exceeds_span(start, end, settings.max_span_days),
    )
    if preview == state.hover:
        return state
    return replace(state, hover=preview)


def _leave_grid(state: EngineState) -> EngineState:
    # Mid-selection the preview survives the pointer leaving the grid
    if state.mode == "range" and state.selection.is_open:
        return state
    if state.hover is None:
        return state
    return replace(state, hover=None)


def _clear(state: EngineState) -> EngineState:
    return replace(
        state,
        selection=EMPTY_SELECTION,
        selected_day=None,
        hover=None,
        proposed_view=None,
    )


def _today(state: EngineState, today: date, settings: EngineSettings) -> EngineState:
    if settings.bounds.is_disabled(today):
        return state
    if state.mode == "single":
        return replace(state, selected_day=today, focus=today, hover=None)
    return replace(
        state,
        selection=Selection(today, None),
        focus=today,
        hover=None,
        proposed_view=None,
    )


def _set_mode(state: EngineState, mode: Mode) -> EngineState:
    if mode == state.mode:
        return state
    if state.mode == "range":
        return replace(
            state,
            mode=mode,
            selection=EMPTY_SELECTION,
            hover=None,
            proposed_view=None,
        )
    return replace(state, mode=mode, hover=None)


def _set_view_type(state: EngineState, view_type: ViewType) -> EngineState:
    if view_type == state.view_type:
        return state
    if state.view_type == "range" and state.selection.is_open:
        state = replace(state, selection=EMPTY_SELECTION, hover=None)
    state = _set_mode(state, mode_for_view(view_type))
    return replace(state, view_type=view_type, proposed_view=None)


def _navigate(state: EngineState, direction: int, settings: EngineSettings) -> EngineState:
    unit = UNIT_FOR_VIEW[state.view_type]
    focus = settings.bounds.clamp(shift(state.focus, unit, direction))
    if focus == state.focus:
        return state
    return replace(state, focus=focus)


def _step_range(state: EngineState, direction: int, settings: EngineSettings) -> EngineState:
    start, end = state.selection.start, state.selection.end
    if state.mode != "range" or start is None or end is None or direction == 0:
        return state
    delta = span_days(start, end) * direction
    new_start = shift(start, "day", delta)
    new_end = shift(end, "day", delta)
    if settings.bounds.is_disabled(new_start) or settings.bounds.is_disabled(new_end):
        return state
    return replace(state, selection=Selection(new_start, new_end), hover=None)


def _accept_proposal(state: EngineState) -> EngineState:
    start = state.selection.start
    if state.proposed_view is None or start is None:
        return state
    return replace(state, focus=start, view_type=state.proposed_view, proposed_view=None)


@dataclass
class HostCallbacks:
    on_date_change: Optional[Callable[[date], None]] = None
    on_range_change: Optional[Callable[[Selection], None]] = None
    on_view_type_change: Optional[Callable[[ViewType], None]] = None
    on_overflow: Optional[Callable[[date], None]] = None


class SelectionEngine:
    """One calendar widget's selection state plus its host notifications."""

    def __init__(
        self,
        *,
        focus: Optional[date] = None,
        view_type: ViewType = "range",
        mode: Optional[Mode] = None,
        selection: Optional[Selection] = None,
        settings: Optional[EngineSettings] = None,
        callbacks: Optional[HostCallbacks] = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.callbacks = callbacks or HostCallbacks()
        self._clock = clock

        mode = mode or mode_for_view(view_type)
        initial = self._initial_selection(selection) if mode == "range" else EMPTY_SELECTION
        selected_day = None
        if mode == "single" and selection is not None and selection.start is not None:
            selected_day = selection.start
        self._state = EngineState(
            focus=focus if focus is not None else clock(),
            mode=mode,
            view_type=view_type,
            selection=initial,
            selected_day=selected_day,
        )

    def _initial_selection(self, selection: Optional[Selection]) -> Selection:
        if selection is None or selection.start is None:
            return EMPTY_SELECTION
        if selection.end is None:
            return Selection(selection.start, None)
        start, end = normalize(selection.start, selection.end)
        if exceeds_span(start, end, self.settings.max_span_days):
            logger.warning(
                "Initial range %s..%s exceeds %d days; keeping %s as an open range",
                start,
                end,
                self.settings.max_span_days,
                start,
            )
            return Selection(start, None)
        return Selection(start, end)

    @property
    def state(self) -> EngineState:
        return self._state

    def today(self) -> date:
        return self._clock()

    def dispatch(self, event: Event) -> EngineState:
        old = self._state
        new = transition(old, event, self.settings)
        self._state = new
        if new != old:
            logger.debug(
                "%s: selection=%s hover=%s view=%s focus=%s",
                type(event).__name__,
                new.selection,
                new.hover,
                new.view_type,
                new.focus,
            )
            self._notify(old, new, event)
        return new

    def _notify(self, old: EngineState, new: EngineState, event: Event) -> None:
        cb = self.callbacks
        if new.focus != old.focus and cb.on_date_change:
            cb.on_date_change(new.focus)
        if new.current_selection != old.current_selection and cb.on_range_change:
            cb.on_range_change(new.current_selection)
        if new.view_type != old.view_type and cb.on_view_type_change:
            cb.on_view_type_change(new.view_type)
        if new.overflowed and isinstance(event, DayClicked) and cb.on_overflow:
            cb.on_overflow(event.day)

    # Gestures

    def click(self, day: date) -> EngineState:
        return self.dispatch(DayClicked(day))

    def hover(self, day: date) -> EngineState:
        return self.dispatch(DayHovered(day))

    def leave_grid(self) -> EngineState:
        return self.dispatch(GridLeft())

    def clear(self) -> EngineState:
        return self.dispatch(Cleared())

    def go_to_today(self) -> EngineState:
        return self.dispatch(TodayRequested(self._clock()))

    def set_mode(self, mode: Mode) -> EngineState:
        return self.dispatch(ModeChanged(mode))

    def set_view_type(self, view_type: ViewType) -> EngineState:
        return self.dispatch(ViewTypeChanged(view_type))

    def previous(self) -> EngineState:
        return self.dispatch(Navigated(-1))

    def next(self) -> EngineState:
        return self.dispatch(Navigated(+1))

    def step_range(self, direction: int) -> EngineState:
        return self.dispatch(RangeStepped(direction))

    def accept_proposal(self) -> EngineState:
        return self.dispatch(ProposalAccepted())


__all__ = [
    "Cleared",
    "DayClicked",
    "DayHovered",
    "EngineSettings",
    "EngineState",
    "Event",
    "GridLeft",
    "HostCallbacks",
    "ModeChanged",
    "Navigated",
    "ProposalAccepted",
    "RangeStepped",
    "SelectionEngine",
    "TodayRequested",
    "ViewTypeChanged",
    "transition",
]
