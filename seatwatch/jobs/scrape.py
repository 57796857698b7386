"""Scrape cycle job."""

from __future__ import annotations

import asyncio
import logging
import os

from dotenv import load_dotenv

from seatwatch.db.session import create_engine_from_env
from seatwatch.scrape.models import BatchSummary
from seatwatch.scrape.orchestrator import ScrapeOrchestrator
from seatwatch.scrape.vividseats import VividSeatsClient

logger = logging.getLogger(__name__)


async def run_scrape_cycle(cancel: asyncio.Event | None = None) -> BatchSummary:
    load_dotenv()
    engine = create_engine_from_env()
    client = VividSeatsClient()
    orchestrator = ScrapeOrchestrator(engine, client)
    try:
        return await orchestrator.scrape_all_events(cancel=cancel)
    finally:
        await client.close()
        engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    asyncio.run(run_scrape_cycle())
