from __future__ import annotations

from .config import AppConfig, ModelConfig, SessionConfig, load_config_from_env
from .itinerary import (
    ComparisonView,
    DistanceModel,
    LocationResolver,
    OptimizationSession,
    build_comparison,
    build_map_layers,
    optimize_activities,
    validate,
)
from .models import (
    Activity,
    Confidence,
    Day,
    DayOptimizationState,
    DistanceEstimate,
    ResolvedLocation,
    RouteAnalysis,
)

__all__ = [
    "Activity",
    "AppConfig",
    "ComparisonView",
    "Confidence",
    "Day",
    "DayOptimizationState",
    "DistanceEstimate",
    "DistanceModel",
    "LocationResolver",
    "ModelConfig",
    "OptimizationSession",
    "ResolvedLocation",
    "RouteAnalysis",
    "SessionConfig",
    "build_comparison",
    "build_map_layers",
    "load_config_from_env",
    "optimize_activities",
    "validate",
]
