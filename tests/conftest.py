from __future__ import annotations

import pytest

from route_engine.itinerary import DistanceModel, LocationResolver
from route_engine.models import Activity, Day

# Hotel / Museum / Restaurant use curated distances; the Greek-letter stops sit
# one degree apart along the equator (about 111 km per step).
PLACES = {
    "hotel": (14.60, 121.00),
    "museum": (14.80, 121.10),
    "restaurant": (14.79, 121.11),
    "cafe": (14.62, 121.01),
    "alpha": (0.0, 0.0),
    "bravo": (0.0, 1.0),
    "charlie": (0.0, 2.0),
    "delta": (0.0, 3.0),
}

ROUTES = {
    ("hotel", "museum"): 25.0,
    ("museum", "restaurant"): 2.0,
    ("restaurant", "hotel"): 24.0,
    ("hotel", "cafe"): 5.0,
    ("cafe", "museum"): 21.0,
}


@pytest.fixture
def model() -> DistanceModel:
    return DistanceModel(LocationResolver(PLACES), ROUTES)


@pytest.fixture
def scenario_day() -> Day:
    return Day(
        id="day-1",
        day=1,
        title="City tour",
        activities=[
            Activity(id="a", title="Check in", time="09:00", location="Hotel"),
            Activity(id="b", title="Museum visit", time="09:15", location="Museum"),
            Activity(id="c", title="Lunch", time="10:00", location="Restaurant"),
        ],
    )


@pytest.fixture
def zigzag_day() -> Day:
    return Day(
        id="day-2",
        day=2,
        title="Equator run",
        activities=[
            Activity(id="w", title="Alpha", location="Alpha"),
            Activity(id="x", title="Delta", location="Delta"),
            Activity(id="note", title="Free time"),
            Activity(id="y", title="Bravo", location="Bravo"),
            Activity(id="z", title="Charlie", location="Charlie"),
        ],
    )


@pytest.fixture
def single_stop_day() -> Day:
    return Day(
        id="day-3",
        day=3,
        title="Rest day",
        activities=[
            Activity(id="r1", title="Spa", time="10:00", location="Hotel"),
            Activity(id="r2", title="Reading"),
        ],
    )
