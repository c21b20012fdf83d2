"""Shared data structures for route analysis.

Activities and days mirror the JSON the itinerary editor sends; the analysis
types are derived values and are never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

Coordinate = Tuple[float, float]


def _optional_text(value: Any) -> Optional[str]:
    # JSON editors sometimes send numbers (e.g. 900 for 09:00); keep them as text
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    text = str(value).strip()
    return text or None


class Confidence(str, Enum):
    """Which lookup tier produced a coordinate or distance."""

    CURATED = "curated"
    RESOLVED = "resolved"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ResolvedLocation:
    coordinate: Coordinate
    confidence: Confidence
    matched_key: Optional[str] = None


@dataclass(frozen=True)
class DistanceEstimate:
    distance_km: float
    confidence: Confidence


@dataclass(frozen=True)
class Activity:
    """A single entry in a day's schedule."""

    id: str
    title: str = ""
    time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None

    @property
    def has_location(self) -> bool:
        return isinstance(self.location, str) and bool(self.location.strip())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Activity":
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            time=_optional_text(data.get("time")),
            location=_optional_text(data.get("location")),
            description=_optional_text(data.get("description")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "time": self.time,
            "title": self.title,
            "location": self.location,
            "description": self.description,
        }


@dataclass
class Day:
    id: str
    day: int
    title: str = ""
    activities: List[Activity] = field(default_factory=list)

    @property
    def stops(self) -> List[Activity]:
        """Activities that carry a location, in schedule order."""
        return [activity for activity in self.activities if activity.has_location]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Day":
        return cls(
            id=str(data["id"]),
            day=int(data.get("day", 1)),
            title=str(data.get("title") or ""),
            activities=[Activity.from_dict(item) for item in data.get("activities", [])],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "day": self.day,
            "title": self.title,
            "activities": [activity.to_dict() for activity in self.activities],
        }


@dataclass
class RouteAnalysis:
    original_distance_km: float
    optimized_distance_km: float
    estimated_time_saved_minutes: int
    warnings: List[str] = field(default_factory=list)


@dataclass
class DayOptimizationState:
    """Cached optimization result for one day.

    ``optimized_activities`` is the whole day in optimized order; activities
    without a location stay in the slots they had in ``day``.
    """

    day: Day
    optimized_activities: List[Activity]
    route_analysis: RouteAnalysis
    show_optimized: bool = False
    fingerprint: str = ""

    @property
    def original_stops(self) -> List[Activity]:
        return self.day.stops

    @property
    def optimized_stops(self) -> List[Activity]:
        return [activity for activity in self.optimized_activities if activity.has_location]
