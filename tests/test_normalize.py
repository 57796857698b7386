import json
import random
from decimal import Decimal
from pathlib import Path

from seatwatch.scrape import normalize
from seatwatch.scrape.models import ListingSource

FIXTURES = Path(__file__).parent / "fixtures" / "http" / "vividseats"


def load_fixture(name: str) -> dict:
    return json.loads((FIXTURES / name).read_text())


def test_derive_zone_ranges():
    assert normalize.derive_zone("101") == "Lower Bowl"
    assert normalize.derive_zone("199") == "Lower Bowl"
    assert normalize.derive_zone("200") == "Upper Bowl"
    assert normalize.derive_zone("350") == "Club Level"
    assert normalize.derive_zone("400") == "General Admission"
    assert normalize.derive_zone("499") == "General Admission"
    assert normalize.derive_zone("500") == "Upper Deck"
    assert normalize.derive_zone("712") == "Upper Deck"
    assert normalize.derive_zone("99") == "General Admission"


def test_derive_zone_unparseable():
    assert normalize.derive_zone(None) == "General Admission"
    assert normalize.derive_zone("") == "General Admission"
    assert normalize.derive_zone("Floor") == "General Admission"
    assert normalize.derive_zone("GA") == "General Admission"


def test_derive_zone_leading_integer():
    assert normalize.derive_zone("101A") == "Lower Bowl"
    assert normalize.derive_zone(" 210 ") == "Upper Bowl"
    assert normalize.derive_zone(305) == "Club Level"
    assert normalize.derive_zone("A101") == "General Admission"


def test_extract_tags():
    listing = {"instantDownload": True, "mobileTransfer": False, "aisle": 1, "vip": None, "parkingIncluded": True}
    assert normalize.extract_tags(listing) == ("Instant Download", "Aisle Seats", "Parking Included")
    assert normalize.extract_tags({}) == ()


def test_parse_price():
    assert normalize.parse_price("189.50") == Decimal("189.50")
    assert normalize.parse_price(95) == Decimal("95")
    assert normalize.parse_price("120.5 USD") == Decimal("120.5")
    assert normalize.parse_price("$120") is None
    assert normalize.parse_price("free") is None
    assert normalize.parse_price(float("nan")) is None
    assert normalize.parse_price(-5) is None
    assert normalize.parse_price(None) is None


def test_normalize_listings_maps_fields():
    result = normalize.normalize_listings(load_fixture("listings.json"), "5317280")

    assert result.source is ListingSource.LIVE
    assert result.name == "Knicks vs Celtics"
    assert result.venue == "Madison Square Garden"
    assert result.date.year == 2026
    assert len(result.tickets) == 3

    first, second, third = result.tickets
    assert first.section == "105"
    assert first.zone == "Lower Bowl"
    assert first.row == "F"
    assert first.quantity == 2
    assert first.price == Decimal("189.50")
    assert first.rating == Decimal("8.7")
    assert first.tags == ("Instant Download", "Aisle Seats")

    assert second.section == "224"
    assert second.zone == "Upper Bowl"
    assert second.quantity == 4
    assert second.price == Decimal("95")
    assert second.rating == Decimal("5.0")
    assert second.tags == ("Mobile Transfer",)

    assert third.zone == "Courtside"
    assert third.tags == ("VIP Access", "Parking Included")


def test_normalize_listings_drops_unpriceable_listing():
    payload = {
        "listings": [
            {"section": "101", "quantity": 2, "price": "100"},
            {"section": "102", "quantity": 2, "price": "call for price"},
        ]
    }
    result = normalize.normalize_listings(payload, "1")
    assert result.source is ListingSource.LIVE
    assert [t.section for t in result.tickets] == ["101"]
    assert result.name == "Unknown Event"
    assert result.venue == "Unknown Venue"


def test_normalize_empty_listings_falls_back_to_mock():
    result = normalize.normalize_listings(load_fixture("empty.json"), "5317280", rng=random.Random(1))
    assert result.source is ListingSource.MOCK
    assert len(result.tickets) == 50
    assert result.name == "Knicks vs Celtics"


def test_normalize_missing_listings_falls_back_to_mock():
    result = normalize.normalize_listings({"event": {}}, "1")
    assert result.source is ListingSource.MOCK
    assert len(result.tickets) == 50


def test_normalize_falls_back_on_falsy_fields():
    payload = {
        "listings": [
            {"section": "101", "quantity": 0, "splitQuantity": 4, "price": 100},
            {"section": "102", "quantity": 2, "price": 0, "faceValue": 80, "dealScore": 0},
        ]
    }
    result = normalize.normalize_listings(payload, "1")

    assert result.source is ListingSource.LIVE
    assert [(t.section, t.quantity, t.price) for t in result.tickets] == [
        ("101", 4, Decimal("100")),
        ("102", 2, Decimal("80")),
    ]
    assert result.tickets[1].rating == Decimal("5.0")


def test_price_and_rating_stay_within_column_bounds():
    assert normalize.parse_price("99999999.99") == Decimal("99999999.99")
    assert normalize.parse_price("100000000") is None
    assert normalize.parse_price(1e12) is None

    payload = {
        "listings": [
            {"section": "101", "quantity": 2, "price": "1e9"},
            {"section": "102", "quantity": 2, "price": 50, "dealScore": 4500},
        ]
    }
    result = normalize.normalize_listings(payload, "1")
    assert [t.section for t in result.tickets] == ["102"]
    assert result.tickets[0].rating == Decimal("5.0")


def test_overlong_digit_runs_do_not_raise():
    digits = "1" * 5000
    assert normalize.derive_zone(digits) == "Upper Deck"
    ticket = normalize.normalize_listing({"section": digits, "quantity": digits, "price": 10})
    assert ticket is not None
    assert ticket.quantity == 111111111
    assert normalize.normalize_listing({"section": "101", "quantity": 10**20, "price": 10}) is None
