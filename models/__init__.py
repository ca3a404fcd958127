"""
Models Module - Pydantic Schemas
Data validation and type safety
"""
from .schemas import (
    # Transport
    InboundMessage,

    # Session
    SessionState,
    SearchQuery,
    GeoPoint,

    # Results
    PointOfInterest,
    PlaceDetails,
    EnrichedPoint,
)

__all__ = [
    # Transport
    'InboundMessage',

    # Session
    'SessionState',
    'SearchQuery',
    'GeoPoint',

    # Results
    'PointOfInterest',
    'PlaceDetails',
    'EnrichedPoint',
]
