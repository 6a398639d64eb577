#!/usr/bin/env python3
"""Attendance log operations used by the picker host."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Dict, Iterable, List

from date_ranges import DateRange
from models import AttendanceRecord, ValidationError, normalize_user, to_day
from store import StorageError, load_records, save_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceSummary:
    total_records: int
    workers_present: int
    currently_in: int
    completed: int


class AttendanceService:
    """Wrapper around persistent attendance storage operations."""

    def __init__(self, data_path: Path) -> None:
        self._data_path = data_path

    @property
    def data_path(self) -> Path:
        return self._data_path

    def load_records(self) -> List[AttendanceRecord]:
        """Load all attendance records from storage."""
        return load_records(self._data_path)

    @staticmethod
    def records_in_window(
        records: Iterable[AttendanceRecord], window: DateRange
    ) -> List[AttendanceRecord]:
        return [r for r in records if window.covers_day(r.day)]

    @staticmethod
    def daily_counts(records: Iterable[AttendanceRecord]) -> Dict[date, int]:
        counts: Dict[date, int] = {}
        for record in records:
            counts[record.day] = counts.get(record.day, 0) + 1
        return counts

    def summarize(
        self, records: Iterable[AttendanceRecord], window: DateRange
    ) -> AttendanceSummary:
        in_window = self.records_in_window(records, window)
        return AttendanceSummary(
            total_records=len(in_window),
            workers_present=len({r.user for r in in_window}),
            currently_in=sum(1 for r in in_window if r.is_open),
            completed=sum(1 for r in in_window if not r.is_open),
        )

    def check_in(self, user: str, now: datetime) -> AttendanceRecord:
        user = normalize_user(user)
        records = self.load_records()
        today = to_day(now)
        if any(r.user == user and r.is_open and r.day == today for r in records):
            raise ValidationError(
                f"'{user}' is already checked in. Check out before checking in again."
            )
        record = AttendanceRecord(user=user, day=today, check_in=now)
        records.append(record)
        save_records(self._data_path, records)
        logger.info("Checked in %s at %s", user, now)
        return record

    def check_out(self, user: str, now: datetime) -> AttendanceRecord:
        user = normalize_user(user)
        records = self.load_records()
        today = to_day(now)
        for idx, record in enumerate(records):
            if record.user == user and record.is_open and record.day == today:
                closed = record.with_check_out(now)
                records[idx] = closed
                save_records(self._data_path, records)
                logger.info("Checked out %s at %s", user, now)
                return closed
        raise ValidationError(f"No check-in found today for '{user}'")


__all__ = ["AttendanceService", "AttendanceSummary", "StorageError"]
