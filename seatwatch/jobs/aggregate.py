"""Analytics rollup jobs.

The rollups themselves are database functions; these jobs only invoke them.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from seatwatch.db.session import create_engine_from_env
from seatwatch.scrape.errors import PersistenceError

logger = logging.getLogger(__name__)

HOURLY_PROCEDURE = "aggregate_hourly_analytics"
DAILY_PROCEDURE = "aggregate_daily_analytics"


async def run_hourly_aggregation(engine: Engine | None = None) -> None:
    await _run_aggregation(HOURLY_PROCEDURE, "hourly", engine)


async def run_daily_aggregation(engine: Engine | None = None) -> None:
    await _run_aggregation(DAILY_PROCEDURE, "daily", engine)


async def _run_aggregation(procedure: str, label: str, engine: Engine | None) -> None:
    owns_engine = engine is None
    if owns_engine:
        load_dotenv()
        engine = create_engine_from_env()
    logger.info("Running %s aggregation", label)
    try:
        await asyncio.get_running_loop().run_in_executor(None, _call_procedure, engine, procedure)
    except SQLAlchemyError as exc:
        logger.error("Error running %s aggregation: %s", label, exc)
        raise PersistenceError(f"{label.title()} aggregation failed: {exc}", kind="aggregation") from exc
    finally:
        if owns_engine:
            engine.dispose()
    logger.info("%s aggregation completed", label.title())


def _call_procedure(engine: Engine, procedure: str) -> None:
    with engine.begin() as conn:
        conn.execute(text(f"SELECT {procedure}()"))


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    kind = sys.argv[1] if len(sys.argv) > 1 else "hourly"
    job = run_daily_aggregation if kind == "daily" else run_hourly_aggregation
    asyncio.run(job())
