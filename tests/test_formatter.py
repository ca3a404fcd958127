import pytest

from core import format_distance, render_page, render_point
from models import EnrichedPoint, PlaceDetails, PointOfInterest


@pytest.mark.parametrize("distance, expected", [
    (0.0, "<0.1 mi"),
    (0.05, "<0.1 mi"),
    (0.1, "0.1 mi"),
    (1.27, "1.2 mi"),
    (1.29, "1.2 mi"),
    (2.3, "2.3 mi"),
    (12.99, "12.9 mi"),
])
def test_format_distance_truncates(distance, expected):
    assert format_distance(distance) == expected


def _enriched(name="Bryant Park", category="Park", hours="Sunday, 7:00 AM – 10:00 PM",
              live_name="Bryant Park Restroom"):
    point = PointOfInterest(id="1", name=name, category=category, distance=0.27,
                            place_id="abc")
    details = PlaceDetails(name=live_name, url="https://maps.google.com/?cid=1")
    return EnrichedPoint(point=point, details=details, display_hours=hours,
                         short_url="bit.ly/xyz")


def test_render_point_layout():
    assert render_point(_enriched()) == (
        "Name: Bryant Park\n"
        "Type: Park\n"
        "Distance: 0.2 mi\n"
        "Hours: Sunday, 7:00 AM – 10:00 PM\n"
        "Directions: bit.ly/xyz"
    )


def test_render_point_falls_back_to_live_name_and_na():
    block = render_point(_enriched(name=None, category=None, hours=None))
    assert "Name: Bryant Park Restroom" in block
    assert "Type: na" in block
    assert "Hours: na" in block


def test_render_page_joins_blocks_and_appends_hint():
    text = render_page([_enriched(), _enriched(name="Library")])
    blocks = text.split("\n\n")
    assert len(blocks) == 3
    assert blocks[0].startswith("Name: Bryant Park")
    assert blocks[1].startswith("Name: Library")
    assert blocks[2] == "Text NEXT for more results"


def test_render_empty_page_is_only_the_hint():
    assert render_page([]) == "Text NEXT for more results"
