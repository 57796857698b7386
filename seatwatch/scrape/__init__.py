"""Marketplace scraping pipeline."""

from __future__ import annotations

import pathlib

import yaml

from seatwatch.scrape.models import TrackedEvent
from seatwatch.utils.dates import parse_event_date

EVENTS_PATH = pathlib.Path(__file__).with_name("events.yml")


def load_tracked_events(path: pathlib.Path = EVENTS_PATH, limit: int | None = None) -> list[TrackedEvent]:
    data = yaml.safe_load(path.read_text()) or []
    tracked = []
    for item in data:
        item = dict(item)
        item["production_id"] = str(item["production_id"])
        item["date"] = parse_event_date(item.get("date"))
        tracked.append(TrackedEvent(**item))
    if limit:
        return tracked[:limit]
    return tracked
