"""Scrape a single tracked event on demand."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os

from dotenv import load_dotenv

from seatwatch.db.session import create_engine_from_env
from seatwatch.scrape.orchestrator import ScrapeOrchestrator
from seatwatch.scrape.vividseats import VividSeatsClient


async def main(event_id: int, production_id: str | None) -> None:
    load_dotenv()
    engine = create_engine_from_env()
    client = VividSeatsClient()
    try:
        summary = await ScrapeOrchestrator(engine, client).scrape_event(event_id, production_id)
    finally:
        await client.close()
    print(f"Job {summary.job_id} saved {summary.ticket_count} tickets")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("event_id", type=int, help="events.id of the tracked event")
    parser.add_argument("--production-id", help="marketplace production id (defaults to event_id)")
    args = parser.parse_args()
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    asyncio.run(main(args.event_id, args.production_id))
