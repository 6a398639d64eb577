#!/usr/bin/env python3
"""Configuration loading and path resolution for atcal."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from models import (
    DEFAULT_MAX_SPAN_DAYS,
    Bounds,
    ValidationError,
    ViewType,
    parse_date,
    parse_view_type,
)
from paths import app_config_dir, app_data_dir, ensure_dir

logger = logging.getLogger(__name__)


@dataclass
class Config:
    data_parquet_path: Path
    log_path: Path
    log_level: str
    max_span_days: int
    bounds: Bounds
    default_view: ViewType
    auto_sync_view: bool


DEFAULT_DATA_FILENAME = "attendance.parquet"
DEFAULT_LOG_FILENAME = "atcal.log"
CONFIG_FILENAME = "config.json"
DEFAULT_VIEW: ViewType = "monthly"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def config_path() -> Path:
    return app_config_dir() / CONFIG_FILENAME


def _read_raw(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    raw_text = path.read_text()
    try:
        raw = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            raw = json.loads(_strip_trailing_commas(raw_text))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable config file %s", path)
            return {}
    if not isinstance(raw, dict):
        logger.warning("Ignoring config file %s: top level is not an object", path)
        return {}
    return raw


def _optional_date(raw: Dict[str, Any], key: str) -> Optional[date]:
    value = raw.get(key)
    if value in (None, ""):
        return None
    return parse_date(str(value))


def _max_span(raw: Dict[str, Any]) -> int:
    value = raw.get("max_span_days", DEFAULT_MAX_SPAN_DAYS)
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValidationError("'max_span_days' must be a positive integer")
    try:
        days = int(value)
    except ValueError as exc:
        raise ValidationError("'max_span_days' must be a positive integer") from exc
    if days < 1:
        raise ValidationError("'max_span_days' must be a positive integer")
    return days


def _log_level(raw: Dict[str, Any]) -> str:
    level = str(raw.get("log_level") or "INFO").strip().upper()
    if level not in LOG_LEVELS:
        raise ValidationError(
            f"Invalid log_level '{level}'. Expected one of: {', '.join(LOG_LEVELS)}"
        )
    return level


def load_config(path: Optional[Path] = None) -> Config:
    """Load config from XDG path, falling back to defaults.

    A missing or unparseable file yields the defaults; values that parse but
    make no sense raise ``ValidationError``.
    """

    raw = _read_raw((path or config_path()).expanduser())

    data_dir = app_data_dir()
    data_path = Path(raw.get("data_parquet_path") or data_dir / DEFAULT_DATA_FILENAME).expanduser()
    log_path = Path(raw.get("log_path") or data_dir / DEFAULT_LOG_FILENAME).expanduser()

    bounds = Bounds(
        min_date=_optional_date(raw, "min_date"),
        max_date=_optional_date(raw, "max_date"),
    )
    if bounds.min_date and bounds.max_date and bounds.min_date > bounds.max_date:
        raise ValidationError("'min_date' must not be after 'max_date'")

    auto_sync = raw.get("auto_sync_view", True)
    if not isinstance(auto_sync, bool):
        raise ValidationError("'auto_sync_view' must be true or false")

    ensure_dir(data_path.parent)
    ensure_dir(log_path.parent)

    return Config(
        data_parquet_path=data_path,
        log_path=log_path,
        log_level=_log_level(raw),
        max_span_days=_max_span(raw),
        bounds=bounds,
        default_view=parse_view_type(raw.get("default_view") or DEFAULT_VIEW),
        auto_sync_view=auto_sync,
    )


def _strip_trailing_commas(text: str) -> str:
    """Remove trailing commas before closing braces/brackets."""
    return re.sub(r",(\s*[}\]])", r"\1", text)


__all__ = ["Config", "load_config", "config_path", "CONFIG_FILENAME"]
