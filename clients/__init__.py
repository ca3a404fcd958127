"""
Clients Module - External Providers
Geocoding, place details and link shortening
"""
from .google_maps import GoogleMapsClient
from .bitly import BitlyShortener

__all__ = [
    'GoogleMapsClient',
    'BitlyShortener',
]
