"""Scrape data models."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

QUANTITY_FILTERS = (1, 2, 4)

DEFAULT_RATING = Decimal("5.0")

LOWER_BOWL = "Lower Bowl"
UPPER_BOWL = "Upper Bowl"
CLUB_LEVEL = "Club Level"
UPPER_DECK = "Upper Deck"
GENERAL_ADMISSION = "General Admission"

# Listing flag -> tag label, in output order.
TAG_FLAGS = (
    ("instantDownload", "Instant Download"),
    ("mobileTransfer", "Mobile Transfer"),
    ("aisle", "Aisle Seats"),
    ("vip", "VIP Access"),
    ("parkingIncluded", "Parking Included"),
)


class ListingSource(str, enum.Enum):
    LIVE = "live"
    MOCK = "mock"


class JobStatus(str, enum.Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True)
class TrackedEvent:
    name: str
    production_id: str
    venue: str | None = None
    date: datetime | None = None


@dataclass(slots=True)
class TicketListing:
    section: str | None
    zone: str
    row: str | None
    quantity: int
    price: Decimal
    rating: Decimal = DEFAULT_RATING
    tags: tuple[str, ...] = ()


@dataclass(slots=True)
class EventListings:
    production_id: str
    name: str
    venue: str
    date: datetime
    tickets: list[TicketListing]
    source: ListingSource = ListingSource.LIVE


@dataclass(slots=True)
class ScrapeSummary:
    job_id: int
    ticket_count: int
    success: bool = True


@dataclass(slots=True)
class BatchSummary:
    events: int = 0
    succeeded: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)
    cancelled: bool = False
