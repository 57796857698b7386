"""Seed database with tracked events."""

from __future__ import annotations

from dotenv import load_dotenv
from sqlalchemy import text

from seatwatch.db.session import create_engine_from_env
from seatwatch.scrape import load_tracked_events


def main() -> None:
    load_dotenv()
    engine = create_engine_from_env()
    tracked = load_tracked_events()
    with engine.begin() as conn:
        for event in tracked:
            conn.execute(
                text(
                    """
                    INSERT INTO events (event_id, event_name, venue, date)
                    VALUES (:event_id, :event_name, :venue, :date)
                    ON CONFLICT (event_id) DO UPDATE SET
                      event_name = EXCLUDED.event_name,
                      venue = EXCLUDED.venue,
                      date = EXCLUDED.date
                    """
                ),
                {
                    "event_id": event.production_id,
                    "event_name": event.name,
                    "venue": event.venue,
                    "date": event.date,
                },
            )
    print(f"Seeded {len(tracked)} events")


if __name__ == "__main__":
    main()
