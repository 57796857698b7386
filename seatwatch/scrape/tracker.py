"""Scrape job lifecycle tracking."""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import insert, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from seatwatch.db.tables import scraper_jobs
from seatwatch.scrape.errors import PersistenceError
from seatwatch.scrape.models import JobStatus
from seatwatch.utils.dates import utc_now

logger = logging.getLogger(__name__)


class JobTracker:
    """Persist scrape jobs as they move from running to completed or failed.

    Only ``create_job`` raises. Terminal updates are best-effort so that a
    tracking failure never replaces the outcome of the scrape itself, and
    they only touch rows that are still running.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    async def create_job(self, event_id: int) -> int:
        try:
            return await asyncio.get_running_loop().run_in_executor(None, self._insert_job, event_id)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not create scrape job for event {event_id}: {exc}", kind="job_create") from exc

    async def complete_job(self, job_id: int, tickets_scraped: int) -> bool:
        values = {
            "status": JobStatus.COMPLETED.value,
            "completed_at": utc_now(),
            "tickets_scraped": tickets_scraped,
        }
        return await self._finish(job_id, values)

    async def fail_job(self, job_id: int, error: BaseException | str) -> bool:
        message = str(error) or type(error).__name__
        values = {
            "status": JobStatus.FAILED.value,
            "completed_at": utc_now(),
            "error_message": message,
        }
        return await self._finish(job_id, values)

    async def _finish(self, job_id: int, values: dict[str, object]) -> bool:
        try:
            updated = await asyncio.get_running_loop().run_in_executor(None, self._update_running_job, job_id, values)
        except SQLAlchemyError:
            logger.exception("Could not mark job %s as %s", job_id, values["status"])
            return False
        if not updated:
            logger.warning("Job %s is not running; leaving status unchanged", job_id)
        return updated

    def _insert_job(self, event_id: int) -> int:
        with self.engine.begin() as conn:
            result = conn.execute(
                insert(scraper_jobs).values(
                    event_id=event_id,
                    started_at=utc_now(),
                    status=JobStatus.RUNNING.value,
                )
            )
            return int(result.inserted_primary_key[0])

    def _update_running_job(self, job_id: int, values: dict[str, object]) -> bool:
        with self.engine.begin() as conn:
            result = conn.execute(
                update(scraper_jobs)
                .where(scraper_jobs.c.id == job_id)
                .where(scraper_jobs.c.status == JobStatus.RUNNING.value)
                .values(**values)
            )
            return result.rowcount == 1
