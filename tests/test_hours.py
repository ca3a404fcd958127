from datetime import datetime

import pytest

from config import EASTERN_TZ
from utils import join_weekly_hours, provider_day_index, sunday_first_index, today_hours_line

WEEK = [
    "Monday: 9:00 AM – 5:00 PM",
    "Tuesday: 9:00 AM – 5:00 PM",
    "Wednesday: 9:00 AM – 5:00 PM",
    "Thursday: 9:00 AM – 5:00 PM",
    "Friday: 9:00 AM – 9:00 PM",
    "Saturday: 10:00 AM – 9:00 PM",
    "Sunday: Closed",
]


@pytest.mark.parametrize("sunday_first, monday_first", [
    (0, 6),  # Sunday
    (1, 0),  # Monday
    (2, 1),
    (3, 2),
    (4, 3),
    (5, 4),
    (6, 5),  # Saturday
])
def test_provider_day_index(sunday_first, monday_first):
    assert provider_day_index(sunday_first) == monday_first


@pytest.mark.parametrize("bad", [-1, 7])
def test_provider_day_index_rejects_out_of_range(bad):
    with pytest.raises(ValueError):
        provider_day_index(bad)


def test_sunday_first_index():
    sunday = EASTERN_TZ.localize(datetime(2026, 10, 18, 12, 0))
    monday = EASTERN_TZ.localize(datetime(2026, 10, 19, 12, 0))
    assert sunday_first_index(sunday) == 0
    assert sunday_first_index(monday) == 1


def test_today_hours_line_picks_sunday_last():
    sunday = EASTERN_TZ.localize(datetime(2026, 10, 18, 12, 0))
    assert today_hours_line(WEEK, sunday) == "Sunday, Closed"


def test_today_hours_line_only_rewrites_first_colon():
    friday = EASTERN_TZ.localize(datetime(2026, 10, 23, 8, 30))
    assert today_hours_line(WEEK, friday) == "Friday, 9:00 AM – 9:00 PM"


def test_join_weekly_hours():
    assert join_weekly_hours(WEEK[:2]) == "Monday: 9:00 AM – 5:00 PM\nTuesday: 9:00 AM – 5:00 PM"
