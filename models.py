#!/usr/bin/env python3
"""Core models and validation helpers for atcal."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal, Optional, Sequence

DATE_FMT = "%Y-%m-%d"
DATETIME_FMT = "%Y-%m-%d %H:%M:%S"

DEFAULT_MAX_SPAN_DAYS = 31

Mode = Literal["single", "range"]
ViewType = Literal["daily", "weekly", "monthly", "range"]

MODES: Sequence[Mode] = ("single", "range")
VIEW_TYPES: Sequence[ViewType] = ("daily", "weekly", "monthly", "range")


class ValidationError(Exception):
    pass


@dataclass(frozen=True)
class Selection:
    """A range selection; ``start`` without ``end`` is an open range."""

    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_empty(self) -> bool:
        return self.start is None

    @property
    def is_open(self) -> bool:
        return self.start is not None and self.end is None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def anchor(self) -> Optional[date]:
        return self.start if self.is_open else None


EMPTY_SELECTION = Selection()


@dataclass(frozen=True)
class HoverPreview:
    start: date
    candidate_end: date
    valid: bool

    @property
    def span_days(self) -> int:
        return abs((self.candidate_end - self.start).days) + 1

    def contains(self, day: date) -> bool:
        low, high = sorted((self.start, self.candidate_end))
        return low <= day <= high


@dataclass(frozen=True)
class Bounds:
    min_date: Optional[date] = None
    max_date: Optional[date] = None

    def is_disabled(self, day: date) -> bool:
        if self.min_date is not None and day < self.min_date:
            return True
        if self.max_date is not None and day > self.max_date:
            return True
        return False

    def clamp(self, day: date) -> date:
        if self.min_date is not None and day < self.min_date:
            return self.min_date
        if self.max_date is not None and day > self.max_date:
            return self.max_date
        return day


@dataclass(frozen=True)
class AttendanceRecord:
    user: str
    day: date
    check_in: datetime
    check_out: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.check_out is None

    def with_check_out(self, when: datetime) -> "AttendanceRecord":
        return AttendanceRecord(
            user=self.user,
            day=self.day,
            check_in=self.check_in,
            check_out=when,
        )


def to_day(value: date) -> date:
    """Drop any time-of-day component so comparisons are per calendar day.

    The selection engine only ever compares ``date`` objects; hosts holding
    timestamps must pass them through here first.
    """
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_date(value: str) -> date:
    value = value.strip()
    if not value:
        raise ValidationError("Date cannot be empty")

    try:
        return datetime.strptime(value, DATE_FMT).date()
    except ValueError:
        pass

    # Accept ISO-8601 datetimes like YYYY-MM-DDTHH:MM[:SS][Z] and keep the day
    iso_candidate = value[:-1] if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(iso_candidate.replace("T", " ")).date()
    except ValueError as exc:
        raise ValidationError(
            f"Invalid date format: '{value}'. Expected YYYY-MM-DD"
        ) from exc


def parse_view_type(value: object) -> ViewType:
    view = str(value).strip().lower()
    if view not in VIEW_TYPES:
        valid = ", ".join(VIEW_TYPES)
        raise ValidationError(f"Invalid view '{view}'. Expected one of: {valid}")
    return view  # type: ignore[return-value]


def parse_mode(value: object) -> Mode:
    mode = str(value).strip().lower()
    if mode not in MODES:
        valid = ", ".join(MODES)
        raise ValidationError(f"Invalid mode '{mode}'. Expected one of: {valid}")
    return mode  # type: ignore[return-value]


def normalize_user(value: object) -> str:
    if value is None:
        raise ValidationError("Missing user name")
    user = str(value).strip()
    if not user:
        raise ValidationError("User name cannot be empty")
    return user


__all__ = [
    "AttendanceRecord",
    "Bounds",
    "DATE_FMT",
    "DATETIME_FMT",
    "DEFAULT_MAX_SPAN_DAYS",
    "EMPTY_SELECTION",
    "HoverPreview",
    "MODES",
    "Mode",
    "Selection",
    "VIEW_TYPES",
    "ValidationError",
    "ViewType",
    "normalize_user",
    "parse_date",
    "parse_mode",
    "parse_view_type",
    "to_day",
]
