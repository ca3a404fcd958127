"""
Pydantic Models for Ask George SMS Search
Data validation and schema definitions
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

class InboundMessage(BaseModel):
    """
    Inbound SMS as delivered by the transport (Twilio field names)
    """
    body: str = Field("", alias="Body", description="Message text")
    sender: str = Field(..., alias="From", description="Sender phone number")
    from_city: Optional[str] = Field(None, alias="FromCity")
    from_state: Optional[str] = Field(None, alias="FromState")
    from_country: Optional[str] = Field(None, alias="FromCountry")
    from_zip: Optional[str] = Field(None, alias="FromZip")

    @field_validator('body', mode='before')
    @classmethod
    def strip_body(cls, v):
        """Missing body is treated as empty text"""
        return (v or "").strip()

    @field_validator('sender')
    @classmethod
    def sender_not_empty(cls, v):
        """Validate sender is present"""
        if not v or not v.strip():
            raise ValueError('Sender cannot be empty')
        return v.strip()

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [{
                "Body": "150 Park Ave, Manhattan",
                "From": "+12125550123",
                "FromCity": "NEW YORK",
                "FromState": "NY",
                "FromCountry": "US",
                "FromZip": "10017"
            }]
        }
    }


class GeoPoint(BaseModel):
    """
    Resolved coordinate
    """
    lat: float = Field(..., description="Latitude")
    lng: float = Field(..., description="Longitude")

    @field_validator('lat')
    @classmethod
    def validate_latitude(cls, v):
        """Validate latitude is in valid range"""
        if not (-90 <= v <= 90):
            raise ValueError('Latitude must be between -90 and 90')
        return v

    @field_validator('lng')
    @classmethod
    def validate_longitude(cls, v):
        """Validate longitude is in valid range"""
        if not (-180 <= v <= 180):
            raise ValueError('Longitude must be between -180 and 180')
        return v


class SessionState(BaseModel):
    """
    Per-sender persisted state
    """
    sender: str
    active_lat: Optional[float] = None
    active_lng: Optional[float] = None
    last_active_at: Optional[datetime] = None
    next_page_no: int = Field(0, ge=0, description="Count of completed result pages")
    is_first_contact: bool = True
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip: Optional[str] = None

    @property
    def active_location(self) -> Optional[GeoPoint]:
        if self.active_lat is None or self.active_lng is None:
            return None
        return GeoPoint(lat=self.active_lat, lng=self.active_lng)


class SearchQuery(BaseModel):
    """
    Normalized form of one inbound search
    """
    raw_text: str
    normalized_text: str


class PointOfInterest(BaseModel):
    """
    Store record returned by a proximity query
    """
    id: str
    name: Optional[str] = Field(None, description="Name cached in the store")
    hours: Optional[str] = Field(None, description="Hours text cached in the store")
    category: Optional[str] = None
    distance: float = Field(..., ge=0, description="Distance from the search point in miles")
    place_id: str = Field(..., description="Place details reference")
    lat: Optional[float] = None
    lng: Optional[float] = None

    model_config = {
        "json_schema_extra": {
            "examples": [{
                "id": "42",
                "name": "Bryant Park Public Restroom",
                "hours": None,
                "category": "Park",
                "distance": 0.27,
                "place_id": "ChIJ...",
            }]
        }
    }


class PlaceDetails(BaseModel):
    """
    Live details for one place
    """
    name: Optional[str] = None
    weekday_text: Optional[List[str]] = Field(None, description="Weekly hours, Monday first")
    business_status: Optional[str] = None
    url: str = Field(..., description="Canonical place link")


class EnrichedPoint(BaseModel):
    """
    Store record merged with live details, ready to render
    """
    point: PointOfInterest
    details: PlaceDetails
    display_hours: Optional[str] = Field(None, description="Hours text chosen for display")
    short_url: Optional[str] = None

    @property
    def display_name(self) -> Optional[str]:
        return self.point.name or self.details.name
