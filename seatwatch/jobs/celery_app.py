"""Celery configuration for scheduled jobs."""

from __future__ import annotations

import os

from celery import Celery
from celery.schedules import crontab

from seatwatch.utils.dates import timezone_name

broker_url = os.environ.get("REDIS_URL", "redis://redis:6379/0")
backend_url = os.environ.get("REDIS_URL", "redis://redis:6379/0")

SCRAPER_INTERVAL_MINUTES = int(os.environ.get("SCRAPER_INTERVAL_MINUTES", "15"))
AGGREGATION_ENABLED = os.environ.get("AGGREGATION_ENABLED", "true").lower() != "false"


def build_beat_schedule(interval_minutes: int = SCRAPER_INTERVAL_MINUTES, aggregation: bool = AGGREGATION_ENABLED) -> dict:
    # Expiry keeps a backed-up queue from replaying overlapping runs.
    schedule = {
        "scrape-all-events": {
            "task": "seatwatch.jobs.scrape.run_scrape_cycle",
            "schedule": crontab(minute=f"*/{interval_minutes}"),
            "options": {"expires": interval_minutes * 60},
        },
    }
    if aggregation:
        schedule["hourly-aggregation"] = {
            "task": "seatwatch.jobs.aggregate.run_hourly_aggregation",
            "schedule": crontab(minute=0),
            "options": {"expires": 3600},
        }
        schedule["daily-aggregation"] = {
            "task": "seatwatch.jobs.aggregate.run_daily_aggregation",
            "schedule": crontab(hour=1, minute=0),
            "options": {"expires": 86400},
        }
    return schedule


celery_app = Celery("seatwatch", broker=broker_url, backend=backend_url)
celery_app.conf.timezone = timezone_name()
celery_app.conf.beat_schedule = build_beat_schedule()


@celery_app.task(name="seatwatch.jobs.scrape.run_scrape_cycle")
def run_scrape_cycle_task():  # pragma: no cover - executed by worker
    import asyncio

    from seatwatch.jobs.scrape import run_scrape_cycle

    asyncio.run(run_scrape_cycle())


@celery_app.task(name="seatwatch.jobs.aggregate.run_hourly_aggregation")
def run_hourly_aggregation_task():  # pragma: no cover - executed by worker
    import asyncio

    from seatwatch.jobs.aggregate import run_hourly_aggregation

    asyncio.run(run_hourly_aggregation())


@celery_app.task(name="seatwatch.jobs.aggregate.run_daily_aggregation")
def run_daily_aggregation_task():  # pragma: no cover - executed by worker
    import asyncio

    from seatwatch.jobs.aggregate import run_daily_aggregation

    asyncio.run(run_daily_aggregation())
