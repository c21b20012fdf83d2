from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence

from ..models import Activity, DayOptimizationState
from .distance import DistanceModel
from .route_optimizer import Leg, route_legs


@dataclass
class ComparisonView:
    day_id: str
    day_number: int
    original_stops: List[Activity]
    optimized_stops: List[Activity]
    original_legs: List[Leg]
    optimized_legs: List[Leg]
    total_original_km: float
    total_optimized_km: float
    minutes_saved: int
    warnings: List[str]
    is_already_optimal: bool
    show_optimized: bool

    def to_dict(self) -> Dict[str, object]:
        return {
            "dayId": self.day_id,
            "day": self.day_number,
            "originalStops": [activity.to_dict() for activity in self.original_stops],
            "optimizedStops": [activity.to_dict() for activity in self.optimized_stops],
            "originalLegs": [asdict(leg) for leg in self.original_legs],
            "optimizedLegs": [asdict(leg) for leg in self.optimized_legs],
            "totalOriginalKm": round(self.total_original_km, 1),
            "totalOptimizedKm": round(self.total_optimized_km, 1),
            "minutesSaved": self.minutes_saved,
            "warnings": list(self.warnings),
            "isAlreadyOptimal": self.is_already_optimal,
            "showOptimized": self.show_optimized,
        }


def build_comparison(
    state: DayOptimizationState,
    model: DistanceModel,
    *,
    savings_threshold: int = 5,
) -> ComparisonView:
    analysis = state.route_analysis
    return ComparisonView(
        day_id=state.day.id,
        day_number=state.day.day,
        original_stops=state.original_stops,
        optimized_stops=state.optimized_stops,
        original_legs=route_legs(state.original_stops, model),
        optimized_legs=route_legs(state.optimized_stops, model),
        total_original_km=analysis.original_distance_km,
        total_optimized_km=analysis.optimized_distance_km,
        minutes_saved=analysis.estimated_time_saved_minutes,
        warnings=list(analysis.warnings),
        is_already_optimal=analysis.estimated_time_saved_minutes <= savings_threshold,
        show_optimized=state.show_optimized,
    )


def build_map_layers(
    state: DayOptimizationState,
    model: DistanceModel,
    *,
    show_original: bool = True,
    show_optimized: bool = True,
) -> Dict[str, object]:
    """Markers, polylines and bounds for drawing both routes on a map.

    The optimized layer is only drawn when it actually saves time.
    """
    layers: Dict[str, object] = {"original": None, "optimized": None, "bounds": None}
    drawn: List[tuple] = []

    if show_original:
        layers["original"] = _route_layer(state.original_stops, model)
        drawn.extend(layers["original"]["polyline"])

    if show_optimized and state.route_analysis.estimated_time_saved_minutes > 0:
        layers["optimized"] = _route_layer(state.optimized_stops, model)
        if not show_original:
            drawn.extend(layers["optimized"]["polyline"])

    layers["bounds"] = _bounds(drawn)
    return layers


def _route_layer(stops: Sequence[Activity], model: DistanceModel) -> Dict[str, object]:
    markers: List[Dict[str, object]] = []
    polyline: List[tuple] = []
    for index, activity in enumerate(stops, start=1):
        resolved = model.resolver.resolve_tagged(activity.location)
        markers.append(
            {
                "index": index,
                "activityId": activity.id,
                "title": activity.title,
                "location": activity.location,
                "time": activity.time,
                "coords": resolved.coordinate,
                "confidence": resolved.confidence.value,
            }
        )
        polyline.append(resolved.coordinate)
    return {"markers": markers, "polyline": polyline}


def _bounds(coords: Sequence[tuple]) -> Optional[Dict[str, float]]:
    if not coords:
        return None
    lats = [coord[0] for coord in coords]
    lngs = [coord[1] for coord in coords]
    return {"north": max(lats), "south": min(lats), "east": max(lngs), "west": min(lngs)}
