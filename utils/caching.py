"""
Cache Management Utilities
Geocode result caching with TTL and size limits
"""

from datetime import datetime
from typing import Dict

from config import GEOCODE_CACHE_SIZE, GEOCODE_CACHE_TTL_SECONDS, get_logger

logger = get_logger(__name__)

class GeocodeCache:
    """
    Search-string keyed cache of resolved coordinates with TTL and size limits

    Only successful single-match lookups are stored; "not found" and
    "ambiguous" answers are always re-asked.
    """

    def __init__(self, max_size=GEOCODE_CACHE_SIZE, ttl_seconds=GEOCODE_CACHE_TTL_SECONDS):
        """
        Initialize cache

        Args:
            max_size: Maximum number of cached search strings
            ttl_seconds: Time-to-live for cached coordinates in seconds
        """
        self.cache = {}
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds

    def _make_key(self, search_str: str) -> str:
        """Geocoding is case-insensitive, so keys are too"""
        return search_str.lower().strip()

    def get(self, search_str: str):
        """
        Get a cached coordinate if available and fresh

        Args:
            search_str: Normalized search string

        Returns:
            Cached value or None
        """
        cache_key = self._make_key(search_str)

        if cache_key not in self.cache:
            return None

        value, timestamp = self.cache[cache_key]

        age = (datetime.now() - timestamp).total_seconds()
        if age < self.ttl_seconds:
            logger.debug("Geocode cache HIT: '%s'", search_str)
            return value

        logger.debug("Geocode cache EXPIRED: %.1f minutes old", age / 60)
        del self.cache[cache_key]
        return None

    def set(self, search_str: str, value):
        """
        Cache a resolved coordinate

        Args:
            search_str: Normalized search string
            value: Value to cache
        """
        cache_key = self._make_key(search_str)

        self.cache[cache_key] = (value, datetime.now())

        # Evict oldest entry once over capacity
        if len(self.cache) > self.max_size:
            oldest_key = min(
                self.cache.keys(),
                key=lambda k: self.cache[k][1]
            )
            del self.cache[oldest_key]

    def clear(self):
        """Clear entire cache"""
        self.cache.clear()

    def size(self) -> int:
        """Get current cache size"""
        return len(self.cache)

    def stats(self) -> Dict:
        """
        Get cache statistics

        Returns:
            Dictionary with cache stats
        """
        if not self.cache:
            return {
                'size': 0,
                'max_size': self.max_size,
                'ttl_seconds': self.ttl_seconds,
                'oldest_age_seconds': None,
                'newest_age_seconds': None
            }

        now = datetime.now()
        ages = [(now - timestamp).total_seconds() for _, timestamp in self.cache.values()]

        return {
            'size': len(self.cache),
            'max_size': self.max_size,
            'ttl_seconds': self.ttl_seconds,
            'oldest_age_seconds': max(ages),
            'newest_age_seconds': min(ages)
        }
