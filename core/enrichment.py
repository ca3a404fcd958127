"""
Enrichment Fan-out
Merges live place details and short links into a page of store records
"""

import asyncio
from datetime import datetime
from typing import List, Optional

from config import TEMPORARILY_CLOSED_TEXT, get_logger
from core.background import BackgroundWrites
from models import EnrichedPoint, PlaceDetails, PointOfInterest
from utils import join_weekly_hours, today_hours_line

logger = get_logger(__name__)

CLOSED_TEMPORARILY = 'CLOSED_TEMPORARILY'


def choose_display_hours(point: PointOfInterest, details: PlaceDetails,
                         now: Optional[datetime] = None) -> Optional[str]:
    """
    Pick the hours text shown for a point.

    Priority: temporary closure, today's live hours, stored hours.
    """
    if details.business_status == CLOSED_TEMPORARILY:
        return TEMPORARILY_CLOSED_TEXT
    if details.weekday_text:
        return today_hours_line(details.weekday_text, now)
    return point.hours


async def enrich_page(points: List[PointOfInterest], places, shortener,
                      writes: BackgroundWrites, store,
                      now: Optional[datetime] = None) -> List[EnrichedPoint]:
    """
    Fetch live details and short links for every point concurrently.

    Any failed fetch fails the whole page. Fresher hours and missing names
    are written back to the store without waiting for the writes.

    Args:
        points: Page of store records, nearest first
        places: Provider with ``fetch_details(place_id)``
        shortener: Provider with ``shorten(url)``
        writes: Background writer for cache-back updates
        store: Store receiving the cache-back updates
        now: Reference time for choosing today's hours

    Returns:
        Enriched points in the same order
    """
    details_list = await asyncio.gather(
        *(places.fetch_details(p.place_id) for p in points)
    )

    for point, details in zip(points, details_list):
        if details.weekday_text:
            writes.submit(
                store.update_cached_hours(point.id, join_weekly_hours(details.weekday_text)),
                f"cache hours for point {point.id}",
            )
        if not point.name and details.name:
            writes.submit(
                store.update_cached_name(point.id, details.name),
                f"cache name for point {point.id}",
            )

    short_urls = await asyncio.gather(
        *(shortener.shorten(d.url) for d in details_list)
    )

    enriched = [
        EnrichedPoint(
            point=point,
            details=details,
            display_hours=choose_display_hours(point, details, now),
            short_url=short_url,
        )
        for point, details, short_url in zip(points, details_list, short_urls)
    ]
    logger.debug("Enriched %d points", len(enriched))
    return enriched
