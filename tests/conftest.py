from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from seatwatch.db.tables import events, metadata
from seatwatch.utils.dates import utc_now


@pytest.fixture()
def engine():
    # One shared connection so executor threads see the same in-memory database.
    engine = create_engine(
        "sqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def seeded_engine(engine):
    now = utc_now()
    with engine.begin() as conn:
        conn.execute(events.insert(), [
            {"event_id": "A", "event_name": "Event A", "venue": "Arena", "date": now + timedelta(days=1)},
            {"event_id": "B", "event_name": "Event B", "venue": "Arena", "date": now + timedelta(days=2)},
            {"event_id": "C", "event_name": "Event C", "venue": "Arena", "date": now + timedelta(days=3)},
            {"event_id": "OLD", "event_name": "Past Event", "venue": "Arena", "date": now - timedelta(days=1)},
        ])
    return engine


@pytest.fixture()
def no_sleep():
    delays = []

    async def sleep(seconds):
        delays.append(seconds)

    sleep.delays = delays
    return sleep
