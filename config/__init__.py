"""
Configuration Module for Ask George SMS Search
"""
from .settings import (
    # Providers
    GOOGLE_MAPS_API_KEY,
    BITLY_ACCESS_TOKEN,
    GOOGLE_GEOCODE_URL,
    GOOGLE_PLACE_DETAILS_URL,
    BITLY_SHORTEN_URL,
    HTTP_TIMEOUT_SECONDS,

    # Store
    REDIS_URL,
    REDIS_POOL_MAX,

    # Logging
    LOG_LEVEL,
    LOG_DIR,
    LOG_FILE,

    # Timezone
    EASTERN_TZ,
    get_eastern_now,

    # Search Parameters
    PAGE_SIZE,
    INACTIVITY_MINUTES,
    GEOCODE_CACHE_SIZE,
    GEOCODE_CACHE_TTL_SECONDS,

    # Query Normalization
    CITY_ALIASES,
    STATE_SUFFIX,
    CITY_STATE_SUFFIX,

    # Replies
    HELP_TEXT,
    NOT_FOUND_TEXT,
    MULTIPLE_MATCHES_TEXT,
    NO_MORE_RESULTS_TEXT,
    NEXT_HINT_TEXT,
    TEMPORARILY_CLOSED_TEXT,
    NEXT_COMMAND,
)

from .logging_config import (
    setup_logging,
    setup_cli_logging,
    get_logger,
)

__all__ = [
    # Providers
    'GOOGLE_MAPS_API_KEY',
    'BITLY_ACCESS_TOKEN',
    'GOOGLE_GEOCODE_URL',
    'GOOGLE_PLACE_DETAILS_URL',
    'BITLY_SHORTEN_URL',
    'HTTP_TIMEOUT_SECONDS',

    # Store
    'REDIS_URL',
    'REDIS_POOL_MAX',

    # Logging
    'LOG_LEVEL',
    'LOG_DIR',
    'LOG_FILE',

    # Timezone
    'EASTERN_TZ',
    'get_eastern_now',

    # Search Parameters
    'PAGE_SIZE',
    'INACTIVITY_MINUTES',
    'GEOCODE_CACHE_SIZE',
    'GEOCODE_CACHE_TTL_SECONDS',

    # Query Normalization
    'CITY_ALIASES',
    'STATE_SUFFIX',
    'CITY_STATE_SUFFIX',

    # Replies
    'HELP_TEXT',
    'NOT_FOUND_TEXT',
    'MULTIPLE_MATCHES_TEXT',
    'NO_MORE_RESULTS_TEXT',
    'NEXT_HINT_TEXT',
    'TEMPORARILY_CLOSED_TEXT',
    'NEXT_COMMAND',

    # Logging
    'setup_logging',
    'setup_cli_logging',
    'get_logger',
]
