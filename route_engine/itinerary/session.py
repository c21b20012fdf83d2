"""Per-day optimization cache for an itinerary being edited.

The session keeps the latest itinerary snapshot and one
``DayOptimizationState`` per day with at least two stops. ``analyze`` only
recomputes days whose ``(id, location, time)`` content changed, so callers can
invoke it on every edit without losing the user's show/keep choice.

Lifecycle per day::

    session.analyze(days)            # Idle -> Analyzed(show_optimized=False)
    session.show_optimized(day_id)   # -> Analyzed(show_optimized=True), only above the savings threshold
    session.keep_current(day_id)     # -> Analyzed(show_optimized=False)
    session.accept_optimization(day_id)  # live order replaced, state rebuilt against it
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional

from ..config import SessionConfig
from ..models import Activity, Day, DayOptimizationState, RouteAnalysis
from .distance import DistanceModel
from .feasibility import validate
from .route_optimizer import optimize_activities, route_distance

logger = logging.getLogger(__name__)

AcceptCallback = Callable[[str, List[Activity]], None]


def day_fingerprint(day: Day) -> str:
    payload = [[activity.id, activity.location, activity.time] for activity in day.activities]
    return hashlib.sha1(json.dumps(payload, ensure_ascii=False).encode("utf-8")).hexdigest()


def itinerary_fingerprint(days: Iterable[Day]) -> str:
    payload = [[day.id, day_fingerprint(day)] for day in days]
    return hashlib.sha1(json.dumps(payload).encode("utf-8")).hexdigest()


def analyze_day(
    day: Day,
    model: DistanceModel,
    config: Optional[SessionConfig] = None,
) -> Optional[DayOptimizationState]:
    """Build a fresh optimization state for ``day``, or ``None`` when it has too few stops."""
    cfg = config or SessionConfig()
    stops = day.stops
    if len(stops) < cfg.min_stops_for_analysis:
        return None

    optimized = optimize_activities(day.activities, model, min_stops=cfg.min_stops_for_reorder)
    optimized_stops = [activity for activity in optimized if activity.has_location]

    original_km = route_distance(stops, model)
    optimized_km = route_distance(optimized_stops, model)
    time_saved = model.duration_minutes(original_km) - model.duration_minutes(optimized_km)

    analysis = RouteAnalysis(
        original_distance_km=original_km,
        optimized_distance_km=optimized_km,
        estimated_time_saved_minutes=time_saved,
        warnings=validate(day.activities, model),
    )
    return DayOptimizationState(
        day=day,
        optimized_activities=optimized,
        route_analysis=analysis,
        show_optimized=False,
        fingerprint=day_fingerprint(day),
    )


class OptimizationSession:
    """Change-gated cache of ``DayOptimizationState`` keyed by day id."""

    def __init__(
        self,
        model: Optional[DistanceModel] = None,
        *,
        config: Optional[SessionConfig] = None,
        on_accept: Optional[AcceptCallback] = None,
    ) -> None:
        self.model = model or DistanceModel()
        self.config = config or SessionConfig()
        self.on_accept = on_accept
        self.states: Dict[str, DayOptimizationState] = {}
        self.last_recomputed: List[str] = []
        self._days: Dict[str, Day] = {}
        self._fingerprint: Optional[str] = None
        self._day_fingerprints: Dict[str, str] = {}
        self._lock = threading.RLock()

    @property
    def days(self) -> List[Day]:
        """The latest itinerary snapshot, including accepted reorders."""
        with self._lock:
            return list(self._days.values())

    def get(self, day_id: str) -> Optional[DayOptimizationState]:
        with self._lock:
            return self.states.get(day_id)

    def analyze(self, days: Iterable[Day]) -> Dict[str, DayOptimizationState]:
        with self._lock:
            snapshot = list(days)
            fingerprint = itinerary_fingerprint(snapshot)
            self._days = {day.id: day for day in snapshot}

            if fingerprint == self._fingerprint:
                self.last_recomputed = []
                return dict(self.states)

            states: Dict[str, DayOptimizationState] = {}
            day_fingerprints: Dict[str, str] = {}
            recomputed: List[str] = []

            for day in snapshot:
                day_fp = day_fingerprint(day)
                day_fingerprints[day.id] = day_fp
                if self._day_fingerprints.get(day.id) == day_fp:
                    existing = self.states.get(day.id)
                    if existing is not None:
                        states[day.id] = existing
                    continue

                state = analyze_day(day, self.model, self.config)
                recomputed.append(day.id)
                if state is not None:
                    states[day.id] = state

            if recomputed:
                logger.debug("Recomputed route analysis for days: %s", ", ".join(recomputed))

            self.states = states
            self._day_fingerprints = day_fingerprints
            self._fingerprint = fingerprint
            self.last_recomputed = recomputed
            return dict(self.states)

    def reanalyze(self, day_id: Optional[str] = None) -> Dict[str, DayOptimizationState]:
        """Force recomputation of one day (or all days) of the current snapshot."""
        with self._lock:
            if day_id is None:
                self._day_fingerprints = {}
            else:
                self._day_fingerprints.pop(day_id, None)
            self._fingerprint = None
            return self.analyze(list(self._days.values()))

    def has_meaningful_savings(self, day_id: str) -> bool:
        state = self.get(day_id)
        if state is None:
            return False
        return state.route_analysis.estimated_time_saved_minutes > self.config.savings_threshold_minutes

    def show_optimized(self, day_id: str) -> Optional[DayOptimizationState]:
        with self._lock:
            state = self.states.get(day_id)
            if state is None:
                logger.warning("No route analysis for day %s", day_id)
                return None
            if not self.has_meaningful_savings(day_id):
                logger.debug("Savings for day %s are below the threshold; keeping current route", day_id)
                return state
            state.show_optimized = True
            return state

    def keep_current(self, day_id: str) -> Optional[DayOptimizationState]:
        with self._lock:
            state = self.states.get(day_id)
            if state is None:
                logger.warning("No route analysis for day %s", day_id)
                return None
            state.show_optimized = False
            return state

    def accept_optimization(self, day_id: str) -> Optional[Day]:
        """Commit the optimized order as the day's live order.

        Returns the updated day, or ``None`` when the day has no analysis.
        """
        with self._lock:
            state = self.states.get(day_id)
            if state is None:
                logger.warning("No route analysis for day %s", day_id)
                return None

            live_day = self._days.get(day_id, state.day)
            # pick up edits to fields the fingerprint ignores (titles, descriptions)
            latest = {activity.id: activity for activity in live_day.activities}
            new_order = [latest.get(activity.id, activity) for activity in state.optimized_activities]
            accepted = replace(live_day, activities=new_order)

            state.show_optimized = False
            self._days[day_id] = accepted
            refreshed = analyze_day(accepted, self.model, self.config)
            if refreshed is None:
                self.states.pop(day_id, None)
            else:
                self.states[day_id] = refreshed
            self._day_fingerprints[day_id] = day_fingerprint(accepted)
            self._fingerprint = itinerary_fingerprint(self._days.values())

            logger.info(
                "Accepted optimized route for day %s (~%d min saved)",
                day_id,
                state.route_analysis.estimated_time_saved_minutes,
            )
            if self.on_accept is not None:
                self.on_accept(day_id, list(new_order))
            return accepted


class SessionRegistry:
    """One ``OptimizationSession`` per editor, created on first use."""

    def __init__(
        self,
        model: Optional[DistanceModel] = None,
        *,
        config: Optional[SessionConfig] = None,
        max_sessions: int = 256,
    ) -> None:
        self.model = model or DistanceModel()
        self.config = config or SessionConfig()
        self.max_sessions = max_sessions
        self._sessions: Dict[str, OptimizationSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def get(self, editor_id: str) -> OptimizationSession:
        with self._lock:
            session = self._sessions.pop(editor_id, None)
            if session is None:
                session = OptimizationSession(self.model, config=self.config)
                if len(self._sessions) >= self.max_sessions:
                    # dicts keep insertion order; the first key is the least recently used
                    evicted = next(iter(self._sessions))
                    del self._sessions[evicted]
                    logger.info("Dropped route session for editor %s", evicted)
            self._sessions[editor_id] = session
            return session
