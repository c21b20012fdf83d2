from __future__ import annotations

from .comparison import ComparisonView, build_comparison, build_map_layers
from .distance import DistanceModel, haversine_distance, travel_minutes
from .feasibility import parse_clock_minutes, validate
from .locations import LocationResolver, normalize_location
from .route_optimizer import (
    Leg,
    RouteSolution,
    build_coordinate_graph,
    build_graph,
    nearest_neighbor_route,
    optimize_activities,
    optimize_coordinates,
    route_distance,
    route_legs,
    visualize_route,
)
from .session import OptimizationSession, SessionRegistry, analyze_day, day_fingerprint, itinerary_fingerprint
from .tables import DEFAULT_PLACES, DEFAULT_ROUTES, load_place_table, load_route_table, load_tables

__all__ = [
    "ComparisonView",
    "DEFAULT_PLACES",
    "DEFAULT_ROUTES",
    "DistanceModel",
    "Leg",
    "LocationResolver",
    "OptimizationSession",
    "RouteSolution",
    "SessionRegistry",
    "analyze_day",
    "build_comparison",
    "build_coordinate_graph",
    "build_graph",
    "build_map_layers",
    "day_fingerprint",
    "haversine_distance",
    "itinerary_fingerprint",
    "load_place_table",
    "load_route_table",
    "load_tables",
    "nearest_neighbor_route",
    "normalize_location",
    "optimize_activities",
    "optimize_coordinates",
    "parse_clock_minutes",
    "route_distance",
    "route_legs",
    "travel_minutes",
    "validate",
    "visualize_route",
]
