"""
Utilities Module - Helper Functions
"""
from .text import (
    shorten,
    clean_text,
    normalize_command,
    is_next_command,
)

from .geo import (
    haversine_distance,
    has_zip,
    has_state,
    has_city,
    build_search_string,
)

from .hours import (
    provider_day_index,
    sunday_first_index,
    today_hours_line,
    join_weekly_hours,
)

from .caching import GeocodeCache

__all__ = [
    # Text utilities
    'shorten',
    'clean_text',
    'normalize_command',
    'is_next_command',

    # Geo utilities
    'haversine_distance',
    'has_zip',
    'has_state',
    'has_city',
    'build_search_string',

    # Hours utilities
    'provider_day_index',
    'sunday_first_index',
    'today_hours_line',
    'join_weekly_hours',

    # Caching
    'GeocodeCache',
]
