"""Datetime helpers."""

from __future__ import annotations

import os
from datetime import datetime

import pendulum

DEFAULT_TZ = "America/New_York"


def timezone_name() -> str:
    return os.environ.get("TIMEZONE", DEFAULT_TZ)


def utc_now() -> pendulum.DateTime:
    return pendulum.now("UTC")


def parse_event_date(value: object) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = pendulum.parse(value)
    except ValueError:
        return None
    if not isinstance(parsed, datetime):
        return None
    return parsed
