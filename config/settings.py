"""
Configuration Settings for Ask George SMS Search
All constants and fixed reply texts live here
"""

import os
from dotenv import load_dotenv
from pathlib import Path
import pytz
from datetime import datetime, timezone

# ============================================
# LOAD .ENV FROM PROJECT ROOT
# ============================================

# Get project root (parent of config directory)
config_dir = Path(__file__).parent
project_root = config_dir.parent

env_path = project_root / '.env'
load_dotenv(dotenv_path=env_path)

# ============================================
# PROVIDER CREDENTIALS
# ============================================
GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY", "")
BITLY_ACCESS_TOKEN = os.getenv("BITLY_ACCESS_TOKEN", "")

GOOGLE_GEOCODE_URL = os.getenv(
    "GOOGLE_GEOCODE_URL", "https://maps.googleapis.com/maps/api/geocode/json"
)
GOOGLE_PLACE_DETAILS_URL = os.getenv(
    "GOOGLE_PLACE_DETAILS_URL", "https://maps.googleapis.com/maps/api/place/details/json"
)
BITLY_SHORTEN_URL = os.getenv("BITLY_SHORTEN_URL", "https://api-ssl.bitly.com/v4/shorten")

HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "5.0"))

# ============================================
# STORE
# ============================================
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
REDIS_POOL_MAX = int(os.getenv("REDIS_POOL_MAX", "50"))

# ============================================
# LOGGING
# ============================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_FILE = os.getenv("LOG_FILE", "ask_george.log")

# ============================================
# TIMEZONE CONFIGURATION
# ============================================
EASTERN_TZ = pytz.timezone('America/New_York')

def get_eastern_now():
    """Get current time in US Eastern timezone"""
    utc_now = datetime.now(timezone.utc)
    return utc_now.astimezone(EASTERN_TZ)


# ============================================
# SEARCH PARAMETERS
# ============================================
PAGE_SIZE = 5

# A sender is "active" while their last message is younger than this
INACTIVITY_MINUTES = 10

# Geocode cache
GEOCODE_CACHE_SIZE = int(os.getenv("GEOCODE_CACHE_SIZE", "500"))
GEOCODE_CACHE_TTL_SECONDS = int(os.getenv("GEOCODE_CACHE_TTL_SECONDS", "86400"))  # 1 day

# ============================================
# QUERY NORMALIZATION
# ============================================
CITY_ALIASES = (
    'new york',
    'brooklyn',
    'queens',
    'staten island',
    'manhattan',
    'bronx',
    'nyc',
)
STATE_SUFFIX = '+NY'
CITY_STATE_SUFFIX = '+New+York,+NY'

# ============================================
# REPLY TEXTS
# ============================================
HELP_TEXT = """Welcome to Ask George!
 
Text us your address and we'll send you the closest restrooms to you.
Try an an intersection ("45th st & 8th Ave") or a street address ("150 Park Ave, Manhattan").

1-325-8-LET-ME-P
1-325-853-8637
ask-george.herokuapp.com"""

NOT_FOUND_TEXT = 'Address not found.'
MULTIPLE_MATCHES_TEXT = 'Multiple address matches. Please be more specific.'
NO_MORE_RESULTS_TEXT = 'No more results'
NEXT_HINT_TEXT = 'Text NEXT for more results'
TEMPORARILY_CLOSED_TEXT = 'Temporarily Closed'
NEXT_COMMAND = 'next'
