"""
Geolocation Utilities
Search string normalization and distance helpers
"""

import math
import re

from config import CITY_ALIASES, STATE_SUFFIX, CITY_STATE_SUFFIX

EARTH_RADIUS_MILES = 3958.8

_ZIP_PATTERN = re.compile(r'\d{5}$')
_STATE_PATTERNS = (
    re.compile(r'NY \d{5}', re.IGNORECASE),
    re.compile(r',\s*NY'),
    re.compile(r'\sNY$'),
)
_CITY_PATTERNS = tuple(
    re.compile(re.escape(alias), re.IGNORECASE) for alias in CITY_ALIASES
)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate distance between two points using Haversine formula

    Args:
        lat1: Latitude of point 1
        lon1: Longitude of point 1
        lat2: Latitude of point 2
        lon2: Longitude of point 2

    Returns:
        Distance in miles
    """
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])

    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat/2)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon/2)**2
    c = 2 * math.asin(math.sqrt(a))
    return c * EARTH_RADIUS_MILES


def has_zip(text: str) -> bool:
    """True if the text ends in a 5-digit postal code"""
    return bool(_ZIP_PATTERN.search(text))


def has_state(text: str) -> bool:
    """True if the text carries a New York state token"""
    return any(p.search(text) for p in _STATE_PATTERNS)


def has_city(text: str) -> bool:
    """True if the text names New York City or one of its boroughs"""
    return any(p.search(text) for p in _CITY_PATTERNS)


def build_search_string(raw_text: str) -> str:
    """
    Turn a free-text address into a geocoder-ready search string.

    Users often leave out city and state, so missing context is appended:
    - zip code, or city + state present → search as is
    - city but no state → append "+NY"
    - no city → append "+New+York,+NY"

    Whitespace is replaced with '+' in every case.

    Args:
        raw_text: Message body as received

    Returns:
        Search string, e.g. "45th+st+&+8th+Ave+New+York,+NY"
    """
    text = raw_text.strip()
    search_str = re.sub(r'\s', '+', text)

    city = has_city(text)
    state = has_state(text)

    if has_zip(text) or (city and state):
        return search_str

    if city:
        return search_str + STATE_SUFFIX

    return search_str + CITY_STATE_SUFFIX
