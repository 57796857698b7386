"""Normalization of raw marketplace listings into ticket records."""

from __future__ import annotations

import logging
import random
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from seatwatch.scrape.mock import generate_mock_tickets
from seatwatch.scrape.models import (
    CLUB_LEVEL,
    DEFAULT_RATING,
    GENERAL_ADMISSION,
    LOWER_BOWL,
    TAG_FLAGS,
    UPPER_BOWL,
    UPPER_DECK,
    EventListings,
    ListingSource,
    TicketListing,
)
from seatwatch.utils.dates import parse_event_date, utc_now

logger = logging.getLogger(__name__)

LEADING_INT_RE = re.compile(r"^\s*([+-]?\d{1,9})")
LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Bounds of ticket_snapshots.price NUMERIC(10, 2) and rating NUMERIC(4, 1).
MAX_PRICE = Decimal("99999999.99")
MAX_RATING = Decimal("999.9")
MAX_LEADING_INT = 999_999_999

UNKNOWN_EVENT = "Unknown Event"
UNKNOWN_VENUE = "Unknown Venue"


def derive_zone(section: Any) -> str:
    """Map a section identifier to a seating zone by its leading integer."""
    number = _leading_int(section)
    if number is None:
        return GENERAL_ADMISSION
    if 100 <= number < 200:
        return LOWER_BOWL
    if 200 <= number < 300:
        return UPPER_BOWL
    if 300 <= number < 400:
        return CLUB_LEVEL
    if number >= 500:
        return UPPER_DECK
    return GENERAL_ADMISSION


def extract_tags(listing: Mapping[str, Any]) -> tuple[str, ...]:
    return tuple(label for flag, label in TAG_FLAGS if listing.get(flag))


def parse_price(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        text = repr(value)
    else:
        match = LEADING_NUMBER_RE.match(str(value))
        if not match:
            return None
        text = match.group(1)
    try:
        price = Decimal(text)
    except InvalidOperation:
        return None
    if not price.is_finite() or price < 0 or price > MAX_PRICE:
        return None
    return price


def normalize_listing(listing: Mapping[str, Any]) -> TicketListing | None:
    """Build a ticket from one raw listing, or None when it cannot be priced or counted."""
    price = parse_price(_first(listing, "price", "faceValue"))
    if price is None:
        logger.warning("Dropping listing %s: unparseable price", listing.get("id"))
        return None
    quantity = _positive_int(_first(listing, "quantity", "splitQuantity"))
    if quantity is None:
        logger.warning("Dropping listing %s: invalid quantity", listing.get("id"))
        return None
    section = _as_text(_first(listing, "section", "sectionName"))
    zone = _as_text(listing.get("zone")) or derive_zone(section)
    return TicketListing(
        section=section,
        zone=zone,
        row=_as_text(listing.get("row")),
        quantity=quantity,
        price=price,
        rating=_rating(listing.get("dealScore")),
        tags=extract_tags(listing),
    )


def normalize_listings(
    payload: Any,
    production_id: str,
    *,
    rng: random.Random | None = None,
) -> EventListings:
    """Normalize a listings payload; an empty result is replaced by mock tickets."""
    data = payload if isinstance(payload, Mapping) else {}
    raw_listings = data.get("listings")
    tickets: list[TicketListing] = []
    if isinstance(raw_listings, list):
        for raw in raw_listings:
            if not isinstance(raw, Mapping):
                logger.warning("Dropping non-object listing for production %s", production_id)
                continue
            ticket = normalize_listing(raw)
            if ticket is not None:
                tickets.append(ticket)

    event = data.get("event") if isinstance(data.get("event"), Mapping) else {}
    venue = data.get("venue") if isinstance(data.get("venue"), Mapping) else {}
    result = EventListings(
        production_id=production_id,
        name=event.get("name") or UNKNOWN_EVENT,
        venue=venue.get("name") or UNKNOWN_VENUE,
        date=parse_event_date(event.get("date")) or utc_now(),
        tickets=tickets,
    )
    if not tickets:
        logger.info("No usable listings for production %s, using mock data", production_id)
        result.tickets = generate_mock_tickets(rng)
        result.source = ListingSource.MOCK
    return result


def _first(listing: Mapping[str, Any], *keys: str) -> Any:
    """Return the first truthy field, else whatever the last key holds."""
    for key in keys[:-1]:
        value = listing.get(key)
        if value:
            return value
    return listing.get(keys[-1])


def _leading_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if abs(value) <= MAX_LEADING_INT else None
    match = LEADING_INT_RE.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def _positive_int(value: Any) -> int | None:
    number = _leading_int(value)
    if number is None or number <= 0:
        return None
    return number


def _as_text(value: Any) -> str | None:
    if value in (None, ""):
        return None
    return str(value)


def _rating(value: Any) -> Decimal:
    if not value or isinstance(value, bool):
        return DEFAULT_RATING
    try:
        rating = Decimal(str(value))
    except InvalidOperation:
        return DEFAULT_RATING
    if not rating.is_finite() or rating == 0 or abs(rating) > MAX_RATING:
        return DEFAULT_RATING
    return rating
