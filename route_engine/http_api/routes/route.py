from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_config, get_distance_model
from ..schemas import (
    AnalysisResponse,
    CalculateLeg,
    CalculateRequest,
    CalculateResponse,
    CoordinateInput,
    DayComparison,
    ItineraryRequest,
    OptimizeRequest,
    OptimizeResponse,
)
from ...config import AppConfig
from ...itinerary.comparison import build_comparison, build_map_layers
from ...itinerary.distance import DistanceModel
from ...itinerary.route_optimizer import optimize_coordinates, visualize_route
from ...itinerary.session import analyze_day

router = APIRouter(prefix="/routes", tags=["Routes"])


@router.post("/analyze", response_model=AnalysisResponse)
def analyze_itinerary(
    payload: ItineraryRequest,
    model: DistanceModel = Depends(get_distance_model),
    config: AppConfig = Depends(get_config),
) -> AnalysisResponse:
    threshold = config.session.savings_threshold_minutes
    comparisons: List[DayComparison] = []
    for day in payload.to_days():
        state = analyze_day(day, model, config.session)
        if state is None:
            continue
        view = build_comparison(state, model, savings_threshold=threshold)
        comparisons.append(DayComparison.model_validate({**view.to_dict(), "map": build_map_layers(state, model)}))
    return AnalysisResponse(total=len(comparisons), days=comparisons)


@router.post("/calculate", response_model=CalculateResponse)
def calculate_route(
    payload: CalculateRequest,
    model: DistanceModel = Depends(get_distance_model),
) -> CalculateResponse:
    legs: List[CalculateLeg] = []
    for origin, destination in zip(payload.locations[:-1], payload.locations[1:]):
        estimate = model.estimate(origin, destination)
        legs.append(
            CalculateLeg(
                origin=origin,
                destination=destination,
                distance_km=estimate.distance_km,
                minutes=model.duration_minutes(estimate.distance_km),
                confidence=estimate.confidence.value,
            )
        )
    total_distance = float(sum(leg.distance_km for leg in legs))
    return CalculateResponse(
        legs=legs,
        total_distance_km=total_distance,
        total_minutes=model.duration_minutes(total_distance),
    )


@router.post("/optimize", response_model=OptimizeResponse)
def optimize_waypoints(
    payload: OptimizeRequest,
    config: AppConfig = Depends(get_config),
) -> OptimizeResponse:
    origin = (payload.origin.lat, payload.origin.lng)
    destination = (payload.destination.lat, payload.destination.lng) if payload.destination else None
    waypoints = [(point.lat, point.lng) for point in payload.waypoints]

    try:
        graph, solution = optimize_coordinates(
            origin,
            destination,
            waypoints,
            average_speed_kmh=config.model.average_speed_kmh,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    ordered = [
        CoordinateInput(lat=graph.nodes[node]["coords"][0], lng=graph.nodes[node]["coords"][1])
        for node in solution.route
        if str(node).startswith("waypoint-")
    ]
    return OptimizeResponse(
        order=[str(node) for node in solution.route],
        waypoints=ordered,
        total_distance_km=solution.total_distance,
        total_time_minutes=solution.total_time,
        visualization=visualize_route(graph, solution),
    )
