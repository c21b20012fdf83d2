from __future__ import annotations

from dataclasses import replace

import pytest

from route_engine.itinerary import parse_clock_minutes, validate
from route_engine.models import Activity, Day


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("09:30", 570),
        ("9:05", 545),
        ("00:00", 0),
        ("23:59", 1439),
        ("24:00", None),
        ("12:60", None),
        ("9am", None),
        ("9:00 AM", None),
        ("", None),
        (None, None),
        (900, None),
        (9.5, None),
    ],
)
def test_parse_clock_minutes(value, expected):
    assert parse_clock_minutes(value) == expected


def test_worked_example_flags_hotel_to_museum(model, scenario_day):
    warnings = validate(scenario_day.activities, model)

    assert len(warnings) == 1
    assert '"Check in"' in warnings[0]
    assert '"Museum visit"' in warnings[0]
    assert "15 min scheduled" in warnings[0]
    assert "38 min needed" in warnings[0]
    assert "23 min short" in warnings[0]


def test_widening_the_gap_clears_the_warning(model, scenario_day):
    activities = list(scenario_day.activities)
    activities[1] = replace(activities[1], time="09:45")
    activities[2] = replace(activities[2], time="10:30")

    assert validate(activities, model) == []


def test_closer_substitute_clears_the_warning(model, scenario_day):
    activities = list(scenario_day.activities)
    activities[1] = replace(activities[1], title="Coffee", location="Cafe")
    activities[2] = replace(activities[2], time="10:00")

    warnings = validate(activities, model)

    assert not any('"Check in"' in warning for warning in warnings)


def test_malformed_time_skips_the_pair(model, scenario_day):
    activities = list(scenario_day.activities)
    activities[1] = replace(activities[1], time="soon")

    assert validate(activities, model) == []


def test_missing_location_or_time_skips_the_pair(model):
    activities = [
        Activity(id="1", title="Hotel", time="09:00", location="Hotel"),
        Activity(id="2", title="Call home", time="09:01"),
        Activity(id="3", title="Museum", time="09:02", location="Museum"),
        Activity(id="4", title="Lunch", location="Restaurant"),
    ]

    assert validate(activities, model) == []


def test_time_running_backwards_is_flagged(model):
    activities = [
        Activity(id="1", title="Museum", time="11:00", location="Museum"),
        Activity(id="2", title="Lunch", time="10:00", location="Restaurant"),
    ]

    warnings = validate(activities, model)

    assert len(warnings) == 1
    assert "-60 min scheduled" in warnings[0]


def test_numeric_times_from_json_are_treated_as_absent(model):
    day = Day.from_dict(
        {
            "id": "day-9",
            "day": 1,
            "activities": [
                {"id": "a", "title": "Check in", "time": 900, "location": "Hotel"},
                {"id": "b", "title": "Museum visit", "time": "09:15", "location": "Museum"},
            ],
        }
    )

    assert day.activities[0].time == "900"
    assert validate(day.activities, model) == []
