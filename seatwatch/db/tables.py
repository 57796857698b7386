"""SQLAlchemy Core table definitions mirroring schema.sql."""

from __future__ import annotations

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, MetaData, Numeric, Table, Text

metadata = MetaData()

events = Table(
    "events",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("event_id", Text, nullable=False, unique=True),
    Column("event_name", Text, nullable=False),
    Column("venue", Text),
    Column("date", DateTime(timezone=True), nullable=False),
)

scraper_jobs = Table(
    "scraper_jobs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("event_id", Integer, ForeignKey("events.id"), nullable=False),
    Column("started_at", DateTime(timezone=True), nullable=False),
    Column("completed_at", DateTime(timezone=True)),
    Column("status", Text, nullable=False),
    Column("tickets_scraped", Integer),
    Column("error_message", Text),
)

ticket_snapshots = Table(
    "ticket_snapshots",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("event_id", Integer, ForeignKey("events.id"), nullable=False),
    Column("section", Text),
    Column("zone", Text, nullable=False),
    Column("row_name", Text),
    Column("quantity", Integer, nullable=False),
    Column("quantity_filter", Integer, nullable=False),
    Column("price", Numeric(10, 2), nullable=False),
    Column("rating", Numeric(4, 1)),
    Column("tags", JSON),
    Column("source", Text, nullable=False),
    Column("scraped_at", DateTime(timezone=True), nullable=False),
)
