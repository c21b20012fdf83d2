from __future__ import annotations

from .server import create_fastapi_app
from .schemas import (
    AcceptResponse,
    ActivityInput,
    AnalysisResponse,
    CalculateRequest,
    CalculateResponse,
    CoordinateInput,
    DayComparison,
    DayInput,
    ItineraryRequest,
    OptimizeRequest,
    OptimizeResponse,
)

__all__ = [
    "create_fastapi_app",
    "AcceptResponse",
    "ActivityInput",
    "AnalysisResponse",
    "CalculateRequest",
    "CalculateResponse",
    "CoordinateInput",
    "DayComparison",
    "DayInput",
    "ItineraryRequest",
    "OptimizeRequest",
    "OptimizeResponse",
]
