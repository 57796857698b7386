import random
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from seatwatch.db.tables import ticket_snapshots
from seatwatch.scrape.errors import PersistenceError
from seatwatch.scrape.mock import generate_mock_tickets
from seatwatch.scrape.models import ListingSource, TicketListing
from seatwatch.scrape.snapshots import SnapshotWriter


@pytest.mark.asyncio
async def test_save_tickets_stamps_batch(seeded_engine):
    writer = SnapshotWriter(seeded_engine)
    tickets = generate_mock_tickets(random.Random(7))

    saved = await writer.save_tickets(1, tickets, 2, source=ListingSource.MOCK)

    assert saved == 50
    with seeded_engine.connect() as conn:
        rows = conn.execute(select(ticket_snapshots)).mappings().all()
    assert len(rows) == 50
    assert {row["scraped_at"] for row in rows} == {rows[0]["scraped_at"]}
    assert {row["quantity_filter"] for row in rows} == {2}
    assert {row["source"] for row in rows} == {"mock"}
    assert {row["event_id"] for row in rows} == {1}
    assert rows[0]["row_name"] == tickets[0].row
    assert rows[0]["tags"] == list(tickets[0].tags)


@pytest.mark.asyncio
async def test_save_tickets_is_all_or_nothing(seeded_engine):
    writer = SnapshotWriter(seeded_engine)
    good = TicketListing(section="101", zone="Lower Bowl", row="A", quantity=2, price=Decimal("120"))
    bad = TicketListing(section="102", zone=None, row="B", quantity=2, price=Decimal("80"))

    with pytest.raises(PersistenceError) as excinfo:
        await writer.save_tickets(1, [good, bad], 1)

    assert excinfo.value.kind == "snapshot_write"
    with seeded_engine.connect() as conn:
        assert conn.execute(select(func.count()).select_from(ticket_snapshots)).scalar() == 0


@pytest.mark.asyncio
async def test_save_empty_batch(seeded_engine):
    assert await SnapshotWriter(seeded_engine).save_tickets(1, [], 1) == 0
