"""Ticket snapshot persistence."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Sequence

from sqlalchemy import insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from seatwatch.db.tables import ticket_snapshots
from seatwatch.scrape.errors import PersistenceError
from seatwatch.scrape.models import ListingSource, TicketListing
from seatwatch.utils.dates import utc_now

logger = logging.getLogger(__name__)


class SnapshotWriter:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    async def save_tickets(
        self,
        event_id: int,
        tickets: Sequence[TicketListing],
        quantity_filter: int = 1,
        *,
        source: ListingSource = ListingSource.LIVE,
    ) -> int:
        """Insert one batch stamped with a single scraped_at; all rows or none."""
        if not tickets:
            return 0
        scraped_at = utc_now()
        rows = [_snapshot_row(event_id, ticket, quantity_filter, source, scraped_at) for ticket in tickets]
        try:
            await asyncio.get_running_loop().run_in_executor(None, self._insert_batch, rows)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Snapshot batch for event {event_id} (quantity {quantity_filter}) failed: {exc}",
                kind="snapshot_write",
            ) from exc
        logger.info("Saved %s %s snapshots for event %s at quantity %s", len(rows), source.value, event_id, quantity_filter)
        return len(rows)

    def _insert_batch(self, rows: list[dict[str, object]]) -> None:
        with self.engine.begin() as conn:
            conn.execute(insert(ticket_snapshots), rows)


def _snapshot_row(
    event_id: int,
    ticket: TicketListing,
    quantity_filter: int,
    source: ListingSource,
    scraped_at: datetime,
) -> dict[str, object]:
    return {
        "event_id": event_id,
        "section": ticket.section,
        "zone": ticket.zone,
        "row_name": ticket.row,
        "quantity": ticket.quantity,
        "quantity_filter": quantity_filter,
        "price": ticket.price,
        "rating": ticket.rating,
        "tags": list(ticket.tags),
        "source": source.value,
        "scraped_at": scraped_at,
    }
