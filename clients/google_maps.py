"""
Google Maps Client
Geocoding and place details over the Maps web services
"""

from typing import Optional

import httpx

from config import (
    GOOGLE_MAPS_API_KEY,
    GOOGLE_GEOCODE_URL,
    GOOGLE_PLACE_DETAILS_URL,
    HTTP_TIMEOUT_SECONDS,
    get_logger,
)
from core.errors import AddressNotFoundError, AmbiguousAddressError, ProviderError
from models import GeoPoint, PlaceDetails
from tracing import tracer
from utils import GeocodeCache

logger = get_logger(__name__)

PROVIDER = "google_maps"
PLACE_DETAIL_FIELDS = "name,opening_hours,business_status,url"


class GoogleMapsClient:
    """
    Geocoder and place-details provider.

    Args:
        api_key: Maps API key
        http_client: Shared httpx client (one is created when omitted)
        cache: Geocode cache; pass None to disable caching
    """

    def __init__(self, api_key: str = GOOGLE_MAPS_API_KEY,
                 http_client: Optional[httpx.AsyncClient] = None,
                 cache: Optional[GeocodeCache] = None):
        self.api_key = api_key
        self.http = http_client or httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS)
        self.cache = cache

    async def _get_json(self, url: str, params: dict) -> dict:
        try:
            resp = await self.http.get(url, params={**params, "key": self.api_key})
            resp.raise_for_status()
            return resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderError(PROVIDER, f"request to {url} failed: {e}") from e

    @tracer.tool(name="geocode", description="Resolve a search string to one coordinate")
    async def geocode(self, search_str: str) -> GeoPoint:
        """
        Resolve a search string to exactly one coordinate

        Raises:
            AddressNotFoundError: no match
            AmbiguousAddressError: more than one match
            ProviderError: request failed or the API reported an error
        """
        if self.cache is not None:
            cached = self.cache.get(search_str)
            if cached is not None:
                return cached

        data = await self._get_json(GOOGLE_GEOCODE_URL, {"address": search_str})
        status = data.get("status")
        results = data.get("results") or []

        if status == "ZERO_RESULTS" or (status == "OK" and not results):
            raise AddressNotFoundError(search_str)
        if status != "OK":
            raise ProviderError(PROVIDER, f"geocode status {status}: {data.get('error_message', '')}")
        if len(results) > 1:
            raise AmbiguousAddressError(search_str, len(results))

        location = results[0]["geometry"]["location"]
        point = GeoPoint(lat=location["lat"], lng=location["lng"])

        if self.cache is not None:
            self.cache.set(search_str, point)
        return point

    @tracer.tool(name="place_details", description="Fetch live status, hours and link for a place")
    async def fetch_details(self, place_id: str) -> PlaceDetails:
        """
        Fetch live name, weekly hours, business status and canonical link

        Raises:
            ProviderError: request failed or the API reported an error
        """
        data = await self._get_json(
            GOOGLE_PLACE_DETAILS_URL,
            {"place_id": place_id, "fields": PLACE_DETAIL_FIELDS},
        )
        status = data.get("status")
        if status != "OK":
            raise ProviderError(PROVIDER, f"place details status {status} for {place_id}")

        result = data.get("result") or {}
        if not result.get("url"):
            raise ProviderError(PROVIDER, f"place {place_id} has no url")

        opening_hours = result.get("opening_hours") or {}
        return PlaceDetails(
            name=result.get("name"),
            weekday_text=opening_hours.get("weekday_text"),
            business_status=result.get("business_status"),
            url=result["url"],
        )

    async def aclose(self):
        await self.http.aclose()
