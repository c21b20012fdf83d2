from __future__ import annotations

from dataclasses import replace

import pytest

from route_engine.config import SessionConfig
from route_engine.itinerary import OptimizationSession, SessionRegistry, analyze_day, day_fingerprint, itinerary_fingerprint
from route_engine.models import Activity, Day


@pytest.fixture
def accepted():
    return []


@pytest.fixture
def session(model, accepted):
    return OptimizationSession(model, on_accept=lambda day_id, activities: accepted.append((day_id, activities)))


def _ids(activities):
    return [activity.id for activity in activities]


def test_fingerprint_ignores_titles_and_descriptions(scenario_day):
    retitled = replace(
        scenario_day,
        title="Renamed",
        activities=[replace(activity, title="x", description="y") for activity in scenario_day.activities],
    )

    assert day_fingerprint(retitled) == day_fingerprint(scenario_day)


def test_fingerprint_tracks_location_time_and_order(scenario_day):
    first, second, third = scenario_day.activities
    moved = [first, replace(second, time="09:30"), third]
    relocated = [first, replace(second, location="Cafe"), third]
    reordered = [third, second, first]

    assert day_fingerprint(replace(scenario_day, activities=moved)) != day_fingerprint(scenario_day)
    assert day_fingerprint(replace(scenario_day, activities=relocated)) != day_fingerprint(scenario_day)
    assert day_fingerprint(replace(scenario_day, activities=reordered)) != day_fingerprint(scenario_day)


def test_itinerary_fingerprint_depends_on_day_order(scenario_day, zigzag_day):
    assert itinerary_fingerprint([scenario_day, zigzag_day]) != itinerary_fingerprint([zigzag_day, scenario_day])


def test_analyze_day_matches_worked_example(model, scenario_day):
    state = analyze_day(scenario_day, model)

    assert _ids(state.optimized_activities) == ["a", "c", "b"]
    assert state.route_analysis.original_distance_km == pytest.approx(27.0)
    assert state.route_analysis.optimized_distance_km == pytest.approx(26.0)
    assert state.route_analysis.estimated_time_saved_minutes == 2
    assert len(state.route_analysis.warnings) == 1
    assert state.show_optimized is False


def test_analyze_day_skips_days_with_fewer_than_two_stops(model, single_stop_day):
    assert analyze_day(single_stop_day, model) is None


def test_two_stop_day_is_analyzed_but_not_reordered(model):
    day = Day(
        id="pair",
        day=1,
        activities=[Activity(id="p", location="Delta"), Activity(id="q", location="Alpha")],
    )

    state = analyze_day(day, model)

    assert _ids(state.optimized_activities) == ["p", "q"]
    assert state.route_analysis.estimated_time_saved_minutes == 0


def test_zigzag_day_savings(model, zigzag_day):
    state = analyze_day(zigzag_day, model)

    assert _ids(state.optimized_activities) == ["w", "y", "note", "z", "x"]
    assert _ids(state.optimized_stops) == ["w", "y", "z", "x"]
    assert state.route_analysis.original_distance_km == pytest.approx(667.17, abs=0.01)
    assert state.route_analysis.optimized_distance_km == pytest.approx(333.585, abs=0.01)
    assert state.route_analysis.estimated_time_saved_minutes == 501


def test_analyze_only_includes_days_with_enough_stops(session, scenario_day, zigzag_day, single_stop_day):
    states = session.analyze([scenario_day, zigzag_day, single_stop_day])

    assert set(states) == {"day-1", "day-2"}
    assert session.get("day-3") is None


def test_unchanged_itinerary_is_not_recomputed(session, scenario_day, zigzag_day):
    first = session.analyze([scenario_day, zigzag_day])
    second = session.analyze([scenario_day, zigzag_day])

    assert session.last_recomputed == []
    assert second["day-1"] is first["day-1"]
    assert second["day-2"] is first["day-2"]


def test_only_the_edited_day_is_recomputed(session, scenario_day, zigzag_day):
    first = session.analyze([scenario_day, zigzag_day])
    edited = replace(
        scenario_day,
        activities=[*scenario_day.activities[:2], replace(scenario_day.activities[2], time="11:00")],
    )

    second = session.analyze([edited, zigzag_day])

    assert session.last_recomputed == ["day-1"]
    assert second["day-1"] is not first["day-1"]
    assert second["day-2"] is first["day-2"]


def test_location_edit_recomputes_only_that_day(session, scenario_day, zigzag_day):
    first = session.analyze([scenario_day, zigzag_day])
    edited = replace(
        scenario_day,
        activities=[scenario_day.activities[0], replace(scenario_day.activities[1], location="Cafe"), scenario_day.activities[2]],
    )

    second = session.analyze([edited, zigzag_day])

    assert session.last_recomputed == ["day-1"]
    assert second["day-1"] is not first["day-1"]
    assert second["day-1"].route_analysis.original_distance_km != first["day-1"].route_analysis.original_distance_km
    assert second["day-2"] is first["day-2"]


def test_title_edits_keep_the_cached_state_and_choice(session, zigzag_day):
    session.analyze([zigzag_day])
    session.show_optimized("day-2")

    renamed = replace(
        zigzag_day,
        activities=[replace(activity, title=activity.title.upper()) for activity in zigzag_day.activities],
    )
    states = session.analyze([renamed])

    assert session.last_recomputed == []
    assert states["day-2"].show_optimized is True


def test_recomputation_resets_show_choice(session, zigzag_day):
    session.analyze([zigzag_day])
    session.show_optimized("day-2")

    edited = replace(zigzag_day, activities=zigzag_day.activities[:-1] + [replace(zigzag_day.activities[-1], time="15:00")])
    states = session.analyze([edited])

    assert states["day-2"].show_optimized is False


def test_removed_day_is_dropped(session, scenario_day, zigzag_day):
    session.analyze([scenario_day, zigzag_day])

    states = session.analyze([zigzag_day])

    assert set(states) == {"day-2"}
    assert [day.id for day in session.days] == ["day-2"]


def test_show_optimized_above_threshold(session, zigzag_day):
    session.analyze([zigzag_day])

    state = session.show_optimized("day-2")

    assert state.show_optimized is True
    assert session.has_meaningful_savings("day-2")


def test_show_optimized_below_threshold_is_a_no_op(session, scenario_day):
    session.analyze([scenario_day])

    state = session.show_optimized("day-1")

    assert state.show_optimized is False
    assert not session.has_meaningful_savings("day-1")


def test_threshold_is_strictly_greater_than(model, scenario_day):
    session = OptimizationSession(model, config=SessionConfig(savings_threshold_minutes=2))
    session.analyze([scenario_day])

    assert not session.has_meaningful_savings("day-1")

    lenient = OptimizationSession(model, config=SessionConfig(savings_threshold_minutes=1))
    lenient.analyze([scenario_day])
    assert lenient.show_optimized("day-1").show_optimized is True


def test_keep_current_hides_the_optimized_route(session, zigzag_day):
    session.analyze([zigzag_day])
    session.show_optimized("day-2")

    state = session.keep_current("day-2")

    assert state.show_optimized is False
    assert _ids(session.days[0].activities) == ["w", "x", "note", "y", "z"]


def test_unknown_day_returns_none(session, scenario_day):
    session.analyze([scenario_day])

    assert session.show_optimized("nope") is None
    assert session.keep_current("nope") is None
    assert session.accept_optimization("nope") is None
    assert session.has_meaningful_savings("nope") is False


def test_accept_replaces_the_live_order_and_notifies(session, accepted, scenario_day, zigzag_day):
    session.analyze([scenario_day, zigzag_day])
    session.show_optimized("day-2")

    day = session.accept_optimization("day-2")

    assert _ids(day.activities) == ["w", "y", "note", "z", "x"]
    assert [d.id for d in session.days] == ["day-1", "day-2"]
    assert _ids(session.days[1].activities) == ["w", "y", "note", "z", "x"]
    assert len(accepted) == 1
    assert accepted[0][0] == "day-2"
    assert _ids(accepted[0][1]) == ["w", "y", "note", "z", "x"]

    state = session.get("day-2")
    assert state.show_optimized is False
    assert state.route_analysis.estimated_time_saved_minutes == 0
    assert not session.has_meaningful_savings("day-2")


def test_accepted_order_is_not_recomputed_when_echoed_back(session, zigzag_day):
    session.analyze([zigzag_day])
    accepted_day = session.accept_optimization("day-2")
    cached = session.get("day-2")

    session.analyze([accepted_day])

    assert session.last_recomputed == []
    assert session.get("day-2") is cached


def test_accept_uses_latest_titles(session, zigzag_day):
    session.analyze([zigzag_day])
    renamed = replace(
        zigzag_day,
        activities=[replace(activity, title=f"{activity.title}!") for activity in zigzag_day.activities],
    )
    session.analyze([renamed])

    day = session.accept_optimization("day-2")

    assert [activity.title for activity in day.activities] == ["Alpha!", "Bravo!", "Free time!", "Charlie!", "Delta!"]


def test_reanalyze_forces_recomputation(session, scenario_day, zigzag_day):
    session.analyze([scenario_day, zigzag_day])
    session.show_optimized("day-2")

    session.reanalyze("day-2")
    assert session.last_recomputed == ["day-2"]
    assert session.get("day-2").show_optimized is False

    session.reanalyze()
    assert session.last_recomputed == ["day-1", "day-2"]


def test_registry_keeps_editors_apart(model, scenario_day, zigzag_day):
    registry = SessionRegistry(model)

    registry.get("alice").analyze([scenario_day])
    registry.get("bob").analyze([zigzag_day])

    assert registry.get("alice") is registry.get("alice")
    assert set(registry.get("alice").states) == {"day-1"}
    assert set(registry.get("bob").states) == {"day-2"}
    assert registry.get("bob").accept_optimization("day-1") is None


def test_registry_evicts_least_recently_used(model):
    registry = SessionRegistry(model, max_sessions=2)
    first = registry.get("a")
    registry.get("b")
    registry.get("a")

    registry.get("c")

    assert len(registry) == 2
    assert registry.get("a") is first
    assert len(registry) == 2
