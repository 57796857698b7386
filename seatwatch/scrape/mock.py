"""Synthetic listings used when the marketplace is unavailable."""

from __future__ import annotations

import random
import string
from decimal import Decimal

from seatwatch.scrape.models import CLUB_LEVEL, LOWER_BOWL, UPPER_BOWL, TicketListing

MOCK_TICKET_COUNT = 50
MOCK_SECTIONS = ("101", "102", "103", "201", "202", "203")
MOCK_ZONES = (LOWER_BOWL, UPPER_BOWL, CLUB_LEVEL)
MOCK_ROWS = string.ascii_uppercase[:10]
MOCK_TAGS = ("Mobile Transfer", "Instant Download", "Aisle Seats", "VIP Access")


def generate_mock_tickets(rng: random.Random | None = None) -> list[TicketListing]:
    rng = rng or random.Random()
    return [_mock_ticket(rng) for _ in range(MOCK_TICKET_COUNT)]


def _mock_ticket(rng: random.Random) -> TicketListing:
    # Zone is drawn independently of section.
    return TicketListing(
        section=rng.choice(MOCK_SECTIONS),
        zone=rng.choice(MOCK_ZONES),
        row=rng.choice(MOCK_ROWS),
        quantity=rng.randint(1, 6),
        price=Decimal(rng.randrange(50, 550)),
        rating=Decimal(rng.randrange(50, 100)) / 10,
        tags=MOCK_TAGS[: rng.randint(0, 2)],
    )
