from datetime import datetime, timedelta

from models import GeoPoint
from utils import GeocodeCache


def test_get_returns_fresh_value_case_insensitively():
    cache = GeocodeCache(max_size=10, ttl_seconds=60)
    cache.set("Brooklyn+NY", GeoPoint(lat=40.68, lng=-73.94))
    assert cache.get("brooklyn+ny") == GeoPoint(lat=40.68, lng=-73.94)


def test_expired_entries_are_dropped():
    cache = GeocodeCache(max_size=10, ttl_seconds=60)
    cache.set("Brooklyn+NY", "x")
    value, _ = cache.cache["brooklyn+ny"]
    cache.cache["brooklyn+ny"] = (value, datetime.now() - timedelta(seconds=61))

    assert cache.get("Brooklyn+NY") is None
    assert cache.size() == 0


def test_oldest_entry_evicted_over_capacity():
    cache = GeocodeCache(max_size=2, ttl_seconds=60)
    cache.set("a", 1)
    cache.cache["a"] = (1, datetime.now() - timedelta(seconds=5))
    cache.set("b", 2)
    cache.set("c", 3)

    assert cache.get("a") is None
    assert cache.get("b") == 2
    assert cache.get("c") == 3
    assert cache.stats()["size"] == 2
