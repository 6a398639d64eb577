#!/usr/bin/env python3
"""PyArrow-backed storage for attendance records."""
from __future__ import annotations

import logging
import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Iterable, List, Set, Tuple

import pyarrow as pa
import pyarrow.parquet as pq

from models import AttendanceRecord, ValidationError

logger = logging.getLogger(__name__)


_SCHEMA = pa.schema(
    [
        ("user", pa.string()),
        ("day", pa.date32()),
        ("check_in", pa.timestamp("us")),
        ("check_out", pa.timestamp("us")),
    ]
)


class StorageError(Exception):
    pass


def _records_to_table(records: Iterable[AttendanceRecord]) -> pa.Table:
    records = list(records)
    return pa.Table.from_pydict(
        {
            "user": [r.user for r in records],
            "day": [r.day for r in records],
            "check_in": [r.check_in for r in records],
            "check_out": [r.check_out for r in records],
        },
        schema=_SCHEMA,
    )


def _table_to_records(table: pa.Table) -> List[AttendanceRecord]:
    # Validate schema shape explicitly
    if table.schema != _SCHEMA:
        raise StorageError("Parquet schema mismatch for attendance records")
    users = table.column("user").to_pylist()
    days = table.column("day").to_pylist()
    check_ins = table.column("check_in").to_pylist()
    check_outs = table.column("check_out").to_pylist()
    records = [
        AttendanceRecord(user=user, day=day, check_in=check_in, check_out=check_out)
        for user, day, check_in, check_out in zip(users, days, check_ins, check_outs)
    ]
    records.sort(key=lambda r: (r.check_in, r.user))
    return records


def load_records(path: Path) -> List[AttendanceRecord]:
    if not path.exists():
        return []
    try:
        table = pq.read_table(path)
        return _table_to_records(table)
    except StorageError:
        raise
    except Exception as exc:
        raise StorageError(f"Failed to read attendance from {path}: {exc}") from exc


def _write_atomic(path: Path, table: pa.Table) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(dir=str(path.parent), delete=False) as tmp:
        tmp_path = Path(tmp.name)
    try:
        pq.write_table(table, tmp_path)
        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            try:
                os.remove(tmp_path)
            except OSError:
                pass


def save_records(path: Path, records: Iterable[AttendanceRecord]) -> None:
    ordered: List[AttendanceRecord] = []
    open_days: Set[Tuple[str, date]] = set()
    for record in records:
        if record.is_open:
            key = (record.user, record.day)
            if key in open_days:
                raise ValidationError(
                    f"'{record.user}' has more than one open check-in on {record.day}"
                )
            open_days.add(key)
        elif record.check_out is not None and record.check_out < record.check_in:
            raise ValidationError(f"Check-out before check-in for '{record.user}'")
        ordered.append(record)
    ordered.sort(key=lambda r: (r.check_in, r.user))
    _write_atomic(path, _records_to_table(ordered))
    logger.debug("Wrote %d attendance records to %s", len(ordered), path)


__all__ = [
    "load_records",
    "save_records",
    "StorageError",
]
