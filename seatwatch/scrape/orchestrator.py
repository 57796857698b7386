"""Scrape orchestration across quantity filters and tracked events."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from seatwatch.db.tables import events
from seatwatch.scrape.errors import PersistenceError, ScrapeCancelled
from seatwatch.scrape.models import QUANTITY_FILTERS, BatchSummary, ListingSource, ScrapeSummary
from seatwatch.scrape.snapshots import SnapshotWriter
from seatwatch.scrape.tracker import JobTracker
from seatwatch.scrape.vividseats import VividSeatsClient
from seatwatch.utils.dates import utc_now

logger = logging.getLogger(__name__)

QUANTITY_DELAY = float(os.environ.get("SCRAPER_QUANTITY_DELAY_MS", 500)) / 1000
EVENT_DELAY = float(os.environ.get("SCRAPER_EVENT_DELAY_MS", 1000)) / 1000
PERSIST_MOCK = os.environ.get("SCRAPER_PERSIST_MOCK", "true").lower() != "false"


class ScrapeOrchestrator:
    """Drive job tracking, fetching and snapshot writes for tracked events.

    Everything runs sequentially on the calling task: one fetch finishes
    before the next starts, so the client's rate limiter is never contended.
    A ``cancel`` event is checked before each quantity iteration and before
    each event; work already started (including a save) always finishes.
    """

    def __init__(
        self,
        engine: Engine,
        client: VividSeatsClient | None = None,
        *,
        tracker: JobTracker | None = None,
        writer: SnapshotWriter | None = None,
        quantity_filters: Sequence[int] = QUANTITY_FILTERS,
        quantity_delay: float = QUANTITY_DELAY,
        event_delay: float = EVENT_DELAY,
        persist_mock: bool = PERSIST_MOCK,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.engine = engine
        self.client = client or VividSeatsClient()
        self.tracker = tracker or JobTracker(engine)
        self.writer = writer or SnapshotWriter(engine)
        self.quantity_filters = tuple(quantity_filters)
        self.quantity_delay = quantity_delay
        self.event_delay = event_delay
        self.persist_mock = persist_mock
        self._sleep = sleep

    async def scrape_event(
        self,
        event_id: int,
        production_id: str | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> ScrapeSummary:
        production_id = production_id or str(event_id)
        job_id = await self.tracker.create_job(event_id)
        logger.info("Starting scrape job %s for event %s", job_id, event_id)
        try:
            total_saved = 0
            for quantity_filter in self.quantity_filters:
                if _is_set(cancel):
                    raise ScrapeCancelled(f"Scrape cancelled before quantity {quantity_filter}")
                listings = await self.client.fetch_event(production_id, quantity_filter)
                if listings.source is ListingSource.MOCK and not self.persist_mock:
                    logger.info("Skipping mock batch for event %s at quantity %s", event_id, quantity_filter)
                    saved = 0
                else:
                    saved = await self.writer.save_tickets(
                        event_id, listings.tickets, quantity_filter, source=listings.source
                    )
                total_saved += saved
                await self._sleep(self.quantity_delay)
        except asyncio.CancelledError:
            await self.tracker.fail_job(job_id, ScrapeCancelled("Scrape task cancelled"))
            raise
        except Exception as exc:
            await self.tracker.fail_job(job_id, exc)
            logger.error("Failed scrape job %s: %s", job_id, exc)
            raise

        await self.tracker.complete_job(job_id, total_saved)
        logger.info("Completed scrape job %s, saved %s tickets", job_id, total_saved)
        return ScrapeSummary(job_id=job_id, ticket_count=total_saved)

    async def scrape_all_events(self, *, cancel: asyncio.Event | None = None) -> BatchSummary:
        logger.info("Starting scrape for all active events")
        summary = BatchSummary()
        try:
            active = await self.load_active_events()
        except PersistenceError as exc:
            logger.error("Error fetching events: %s", exc)
            return summary

        summary.events = len(active)
        logger.info("Found %s active events to scrape", len(active))
        for index, event in enumerate(active):
            if index and not _is_set(cancel):
                await self._sleep(self.event_delay)
            if _is_set(cancel):
                logger.info("Scrape cancelled; %s events not started", len(active) - index)
                summary.cancelled = True
                break
            try:
                await self.scrape_event(event["id"], event["event_id"], cancel=cancel)
            except ScrapeCancelled:
                summary.failed.append(event["id"])
                summary.cancelled = True
                break
            except Exception:
                logger.exception("Error scraping event %s", event["id"])
                summary.failed.append(event["id"])
            else:
                summary.succeeded.append(event["id"])

        logger.info(
            "Completed scraping all events: %s succeeded, %s failed",
            len(summary.succeeded),
            len(summary.failed),
        )
        return summary

    async def load_active_events(self, now: datetime | None = None) -> list[dict[str, object]]:
        try:
            return await asyncio.get_running_loop().run_in_executor(None, self._select_active_events, now or utc_now())
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not load active events: {exc}", kind="event_read") from exc

    def _select_active_events(self, now: datetime) -> list[dict[str, object]]:
        query = (
            select(events.c.id, events.c.event_id, events.c.event_name)
            .where(events.c.date >= now)
            .order_by(events.c.date, events.c.id)
        )
        with self.engine.connect() as conn:
            return [dict(row) for row in conn.execute(query).mappings()]


def _is_set(cancel: asyncio.Event | None) -> bool:
    return cancel is not None and cancel.is_set()
