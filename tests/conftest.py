from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from core import MemoryStore, SessionOrchestrator
from core.errors import ProviderError
from models import GeoPoint, PlaceDetails, PointOfInterest

ORIGIN = GeoPoint(lat=40.7500, lng=-73.9800)

# About 0.069 miles per 0.001 degree of latitude
DEGREES_PER_STEP = 0.004


class Clock:
    """Settable UTC clock for stores"""

    def __init__(self):
        self.now = datetime(2026, 10, 18, 16, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeMaps:
    """Geocoder + place details fake that records calls"""

    def __init__(self, location=ORIGIN):
        self.location = location
        self.geocode = AsyncMock(return_value=location)
        self.fetch_details = AsyncMock(side_effect=self._details)
        self.failing_place_ids = set()

    async def _details(self, place_id):
        if place_id in self.failing_place_ids:
            raise ProviderError("google_maps", f"boom for {place_id}")
        return PlaceDetails(
            name=f"Live {place_id}",
            url=f"https://maps.google.com/?cid={place_id}",
        )


class FakeShortener:
    def __init__(self):
        self.shorten = AsyncMock(side_effect=self._shorten)

    async def _shorten(self, url):
        return "bit.ly/" + url.rsplit("=", 1)[-1]


def make_point(i, name=None, hours=None, category=None):
    return PointOfInterest(
        id=str(i),
        name=name if name is not None else f"Restroom {i}",
        hours=hours,
        category=category,
        distance=0.0,
        place_id=f"place{i}",
        lat=ORIGIN.lat + DEGREES_PER_STEP * (i + 1),
        lng=ORIGIN.lng,
    )


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def store(clock):
    s = MemoryStore(now_fn=clock)
    for i in range(12):
        point = make_point(i)
        s.points[point.id] = point
    return s


@pytest.fixture
def maps():
    return FakeMaps()


@pytest.fixture
def shortener():
    return FakeShortener()


@pytest.fixture
def orchestrator(store, maps, shortener):
    eastern_noon = datetime(2026, 10, 18, 12, 0, tzinfo=timezone(timedelta(hours=-4)))
    return SessionOrchestrator(
        store=store,
        geocoder=maps,
        places=maps,
        shortener=shortener,
        clock=lambda: eastern_noon,
    )
