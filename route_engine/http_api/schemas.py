from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models import Activity, Day


class ActivityInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None

    def to_activity(self) -> Activity:
        return Activity(
            id=self.id,
            title=self.title,
            time=self.time or None,
            location=self.location or None,
            description=self.description,
        )


class DayInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    day: int = Field(1, ge=1)
    title: str = ""
    activities: List[ActivityInput] = Field(default_factory=list)

    def to_day(self) -> Day:
        return Day(
            id=self.id,
            day=self.day,
            title=self.title,
            activities=[activity.to_activity() for activity in self.activities],
        )


class ItineraryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    days: List[DayInput]

    def to_days(self) -> List[Day]:
        return [day.to_day() for day in self.days]


class DayComparison(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day_id: str = Field(..., alias="dayId")
    day: int
    original_stops: List[Dict[str, Any]] = Field(..., alias="originalStops")
    optimized_stops: List[Dict[str, Any]] = Field(..., alias="optimizedStops")
    original_legs: List[Dict[str, Any]] = Field(..., alias="originalLegs")
    optimized_legs: List[Dict[str, Any]] = Field(..., alias="optimizedLegs")
    total_original_km: float = Field(..., alias="totalOriginalKm")
    total_optimized_km: float = Field(..., alias="totalOptimizedKm")
    minutes_saved: int = Field(..., alias="minutesSaved")
    warnings: List[str]
    is_already_optimal: bool = Field(..., alias="isAlreadyOptimal")
    show_optimized: bool = Field(..., alias="showOptimized")
    map: Optional[Dict[str, Any]] = None


class AnalysisResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    days: List[DayComparison]


class AcceptResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day_id: str = Field(..., alias="dayId")
    activities: List[Dict[str, Any]]
    comparison: Optional[DayComparison] = None


class CoordinateInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class OptimizeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    origin: CoordinateInput
    destination: Optional[CoordinateInput] = None
    waypoints: List[CoordinateInput] = Field(default_factory=list)


class OptimizeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order: List[str]
    waypoints: List[CoordinateInput]
    total_distance_km: float = Field(..., alias="totalDistanceKm")
    total_time_minutes: float = Field(..., alias="totalTimeMinutes")
    visualization: Dict[str, Any]


class CalculateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    locations: List[str] = Field(..., min_length=2)


class CalculateLeg(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    origin: str = Field(..., alias="from")
    destination: str = Field(..., alias="to")
    distance_km: float = Field(..., alias="distanceKm")
    minutes: int
    confidence: str


class CalculateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    legs: List[CalculateLeg]
    total_distance_km: float = Field(..., alias="totalDistanceKm")
    total_minutes: int = Field(..., alias="totalMinutes")
