"""Vivid Seats listings client."""

from __future__ import annotations

import json
import logging
import os
import random

import httpx

from seatwatch.scrape.errors import FetchError
from seatwatch.scrape.mock import generate_mock_tickets
from seatwatch.scrape.models import EventListings, ListingSource
from seatwatch.scrape.normalize import normalize_listings
from seatwatch.utils.dates import utc_now
from seatwatch.utils.rate_limit import RateLimiter

logger = logging.getLogger(__name__)

BASE_URL = os.environ.get("VIVIDSEATS_BASE_URL", "https://www.vividseats.com")
LISTINGS_PATH = "/hermes/api/v1/listings"
REQUEST_DELAY = float(os.environ.get("SCRAPER_REQUEST_DELAY_MS", 2000)) / 1000

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "application/json",
}

SAMPLE_EVENT = "Sample Event"
SAMPLE_VENUE = "Sample Venue"


class VividSeatsClient:
    def __init__(
        self,
        *,
        session: httpx.AsyncClient | None = None,
        rate_limiter: RateLimiter | None = None,
        base_url: str = BASE_URL,
        rng: random.Random | None = None,
    ) -> None:
        self._session = session or httpx.AsyncClient(timeout=30.0, headers=DEFAULT_HEADERS)
        self._rate_limiter = rate_limiter or RateLimiter(min_delay=REQUEST_DELAY)
        self._listings_url = base_url.rstrip("/") + LISTINGS_PATH
        self._rng = rng
        self.request_count = 0

    async def close(self) -> None:
        await self._session.aclose()

    async def fetch_event(self, production_id: str, quantity: int = 1) -> EventListings:
        """Fetch listings for one production; failures degrade to mock tickets."""
        await self._rate_limiter.wait()
        self.request_count += 1
        logger.info("Fetching listings for production %s, quantity %s", production_id, quantity)
        try:
            payload = await self._get_listings(production_id, quantity)
            return self._normalize(payload, production_id)
        except FetchError as exc:
            logger.error("Listings fetch failed for %s (%s): %s", production_id, exc.kind, exc)
            logger.info("Using mock data for production %s", production_id)
            return self._mock_event(production_id)

    def _normalize(self, payload: dict, production_id: str) -> EventListings:
        try:
            return normalize_listings(payload, production_id, rng=self._rng)
        except (ValueError, TypeError, ArithmeticError) as exc:
            raise FetchError(f"Unusable listings payload: {exc}", kind="payload") from exc

    async def _get_listings(self, production_id: str, quantity: int) -> dict:
        params = {"productionId": production_id, "quantity": quantity}
        try:
            response = await self._session.get(self._listings_url, params=params, headers=DEFAULT_HEADERS)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"HTTP {exc.response.status_code} from listings endpoint", kind="http_status"
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(str(exc) or type(exc).__name__, kind="transport") from exc
        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise FetchError("Malformed listings payload", kind="payload") from exc
        if not isinstance(payload, dict):
            raise FetchError("Listings payload is not an object", kind="payload")
        return payload

    def _mock_event(self, production_id: str) -> EventListings:
        return EventListings(
            production_id=production_id,
            name=SAMPLE_EVENT,
            venue=SAMPLE_VENUE,
            date=utc_now(),
            tickets=generate_mock_tickets(self._rng),
            source=ListingSource.MOCK,
        )
