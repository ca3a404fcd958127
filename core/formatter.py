"""
Response Formatter
Renders a page of enriched points into the SMS reply layout
"""

import math
from typing import List

from config import NEXT_HINT_TEXT
from models import EnrichedPoint

NOT_AVAILABLE = 'na'


def format_distance(distance: float) -> str:
    """
    Format a distance in miles to one decimal place, truncating.

    Examples:
        0.05 → "<0.1 mi"
        1.27 → "1.2 mi"
    """
    if distance < 0.1:
        return '<0.1 mi'
    whole = math.trunc(distance)
    # round first so 2.3 * 10 == 22.999... still reads 2.3
    tenths = math.trunc(round(distance * 10, 6)) % 10
    return f'{whole}.{tenths} mi'


def render_point(enriched: EnrichedPoint) -> str:
    """Render one point as a five-line block"""
    point = enriched.point
    return '\n'.join([
        f'Name: {enriched.display_name}',
        f'Type: {point.category or NOT_AVAILABLE}',
        f'Distance: {format_distance(point.distance)}',
        f'Hours: {enriched.display_hours or NOT_AVAILABLE}',
        f'Directions: {enriched.short_url}',
    ])


def render_page(page: List[EnrichedPoint]) -> str:
    """
    Render a page of results in store order, followed by the NEXT hint

    Args:
        page: Enriched points, nearest first

    Returns:
        Blocks separated by a blank line
    """
    blocks = [render_point(p) for p in page]
    blocks.append(NEXT_HINT_TEXT)
    return '\n\n'.join(blocks)
