#!/usr/bin/env python3
"""Thin entrypoint for atcal."""

from __future__ import annotations

import logging
import os
import sys
from typing import Sequence

from config import Config, load_config
from models import ValidationError, parse_date, parse_view_type
from orchestrator import Orchestrator

__version__ = "0.1.0"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

VALUE_FLAGS = {
    "-i": ("check_in", "a user name"),
    "-o": ("check_out", "a user name"),
    "-d": ("date", "a YYYY-MM-DD date"),
    "-V": ("view", "a view type"),
}


def _print_help() -> None:
    print(
        "atcal - terminal date/range picker for attendance reports\n\n"
        "Usage:\n"
        "  atcal                  Launch curses UI\n"
        "  atcal -d YYYY-MM-DD    Launch focused on a date\n"
        "  atcal -V VIEW          Launch in daily|weekly|monthly|range view\n"
        "  atcal -i USER          Check USER in now\n"
        "  atcal -o USER          Check USER out now\n"
        "  atcal -h               Show this help\n"
        "  atcal -v               Show installed version\n"
    )


def parse_args(argv: Sequence[str]) -> tuple[dict[str, str], bool, bool]:
    flags: dict[str, str] = {}
    show_version = False
    show_help = False

    idx = 0
    while idx < len(argv):
        arg = argv[idx]
        if arg == "-h":
            show_help = True
            idx += 1
            continue
        if arg == "-v":
            show_version = True
            idx += 1
            continue
        if arg in VALUE_FLAGS:
            name, expected = VALUE_FLAGS[arg]
            idx += 1
            if idx >= len(argv):
                raise ValidationError(f"{arg} requires {expected}")
            flags[name] = argv[idx]
            idx += 1
            continue
        raise ValidationError(f"Unknown flag '{arg}'")

    if "check_in" in flags and "check_out" in flags:
        raise ValidationError("-i and -o cannot be combined")
    return flags, show_version, show_help


def configure_logging(config: Config) -> None:
    # Log to a file so curses output stays intact
    logging.basicConfig(
        filename=str(config.log_path),
        level=getattr(logging, config.log_level),
        format=LOG_FORMAT,
    )


def main(argv: list[str] | None = None) -> int:
    # Make ESC detection snappy inside curses.
    os.environ.setdefault("ESCDELAY", "25")

    if argv is None:
        argv = sys.argv[1:]

    try:
        flag_values, show_version, show_help = parse_args(argv)
    except ValidationError as exc:
        print(str(exc))
        return 1

    if show_version:
        print(__version__)
        return 0

    if show_help:
        _print_help()
        return 0

    try:
        config = load_config()
        focus = parse_date(flag_values["date"]) if "date" in flag_values else None
        view = parse_view_type(flag_values["view"]) if "view" in flag_values else None
    except ValidationError as exc:
        print(str(exc))
        return 1

    configure_logging(config)
    orchestrator = Orchestrator(__version__, config=config, focus=focus, view_type=view)

    if "check_in" in flag_values:
        return orchestrator.handle_check_in(flag_values["check_in"])
    if "check_out" in flag_values:
        return orchestrator.handle_check_out(flag_values["check_out"])

    return orchestrator.run()


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
