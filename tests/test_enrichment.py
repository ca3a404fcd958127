from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from config import EASTERN_TZ
from core import BackgroundWrites, ProviderError, choose_display_hours, enrich_page
from models import PlaceDetails, PointOfInterest

SUNDAY = EASTERN_TZ.localize(datetime(2026, 10, 18, 12, 0))
WEEK = [f"{day}: 8:00 AM – 8:00 PM" for day in
        ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")]


def point(i, name="Stored", hours=None):
    return PointOfInterest(id=str(i), name=name, hours=hours, distance=0.1 * i,
                           place_id=f"place{i}")


def test_temporary_closure_overrides_live_hours():
    details = PlaceDetails(weekday_text=WEEK, business_status="CLOSED_TEMPORARILY", url="u")
    assert choose_display_hours(point(1, hours="stored"), details, SUNDAY) == "Temporarily Closed"


def test_live_hours_preferred_over_stored():
    details = PlaceDetails(weekday_text=WEEK, business_status="OPERATIONAL", url="u")
    assert choose_display_hours(point(1, hours="stored"), details, SUNDAY) == "Sunday, 8:00 AM – 8:00 PM"


def test_stored_hours_used_without_live_hours():
    details = PlaceDetails(url="u")
    assert choose_display_hours(point(1, hours="24 hours"), details, SUNDAY) == "24 hours"
    assert choose_display_hours(point(1), details, SUNDAY) is None


@pytest.fixture
def store():
    s = MagicMock()
    s.update_cached_hours = AsyncMock()
    s.update_cached_name = AsyncMock()
    return s


@pytest.fixture
def shortener():
    s = MagicMock()
    s.shorten = AsyncMock(side_effect=lambda url: f"bit.ly/{url}")
    return s


@pytest.mark.asyncio
async def test_enrich_page_keeps_order_and_writes_back(store, shortener):
    details = {
        "place0": PlaceDetails(name="Live A", weekday_text=WEEK, url="a"),
        "place1": PlaceDetails(name="Live B", url="b"),
        "place2": PlaceDetails(name=None, weekday_text=WEEK,
                               business_status="CLOSED_TEMPORARILY", url="c"),
    }
    places = MagicMock()
    places.fetch_details = AsyncMock(side_effect=lambda pid: details[pid])
    writes = BackgroundWrites()

    points = [point(0), point(1, name=None), point(2, name=None, hours="old")]
    enriched = await enrich_page(points, places, shortener, writes, store, now=SUNDAY)
    await writes.drain()

    assert [e.point.id for e in enriched] == ["0", "1", "2"]
    assert [e.short_url for e in enriched] == ["bit.ly/a", "bit.ly/b", "bit.ly/c"]
    assert enriched[0].display_name == "Stored"
    assert enriched[1].display_name == "Live B"
    assert enriched[2].display_hours == "Temporarily Closed"

    hours_calls = {c.args[0] for c in store.update_cached_hours.await_args_list}
    assert hours_calls == {"0", "2"}
    store.update_cached_name.assert_awaited_once_with("1", "Live B")


@pytest.mark.asyncio
async def test_enrich_page_is_all_or_nothing(store, shortener):
    places = MagicMock()

    async def fetch(pid):
        if pid == "place1":
            raise ProviderError("google_maps", "boom")
        return PlaceDetails(url=pid)

    places.fetch_details = AsyncMock(side_effect=fetch)

    with pytest.raises(ProviderError):
        await enrich_page([point(0), point(1), point(2)], places, shortener,
                          BackgroundWrites(), store, now=SUNDAY)
    shortener.shorten.assert_not_awaited()


@pytest.mark.asyncio
async def test_shortener_failure_fails_the_page(store):
    places = MagicMock()
    places.fetch_details = AsyncMock(return_value=PlaceDetails(url="u"))
    shortener = MagicMock()
    shortener.shorten = AsyncMock(side_effect=ProviderError("bitly", "down"))

    with pytest.raises(ProviderError):
        await enrich_page([point(0)], places, shortener, BackgroundWrites(), store, now=SUNDAY)
