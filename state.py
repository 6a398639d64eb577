#!/usr/bin/env python3
"""App state container for atcal."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Literal

from models import AttendanceRecord

FocusName = Literal["grid", "summary"]
OverlayKind = Literal["none", "help", "error", "message"]


@dataclass
class AppState:
    overlay: OverlayKind = "none"
    overlay_message: str = ""
    focus_area: FocusName = "grid"

    # Grid cursor; every move is a hover over the cell it lands on
    cursor: date = field(default_factory=lambda: date.today())

    records: List[AttendanceRecord] = field(default_factory=list)


__all__ = ["AppState", "FocusName", "OverlayKind"]
