from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_config, get_session
from ..schemas import AcceptResponse, AnalysisResponse, DayComparison, ItineraryRequest
from ...config import AppConfig
from ...itinerary.comparison import build_comparison, build_map_layers
from ...itinerary.session import OptimizationSession
from ...models import DayOptimizationState

router = APIRouter(prefix="/routes/session", tags=["Route session"])


def _to_comparison(state: DayOptimizationState, session: OptimizationSession, config: AppConfig) -> DayComparison:
    view = build_comparison(state, session.model, savings_threshold=config.session.savings_threshold_minutes)
    layers = build_map_layers(state, session.model, show_optimized=state.show_optimized)
    return DayComparison.model_validate({**view.to_dict(), "map": layers})


def _require_state(state: Optional[DayOptimizationState], day_id: str) -> DayOptimizationState:
    if state is None:
        raise HTTPException(status_code=404, detail=f"No route analysis for day '{day_id}'.")
    return state


@router.post("/analyze", response_model=AnalysisResponse)
def analyze_session(
    payload: ItineraryRequest,
    session: OptimizationSession = Depends(get_session),
    config: AppConfig = Depends(get_config),
) -> AnalysisResponse:
    states = session.analyze(payload.to_days())
    comparisons: List[DayComparison] = [_to_comparison(state, session, config) for state in states.values()]
    return AnalysisResponse(total=len(comparisons), days=comparisons)


@router.post("/{day_id}/show", response_model=DayComparison)
def show_optimized_route(
    day_id: str,
    session: OptimizationSession = Depends(get_session),
    config: AppConfig = Depends(get_config),
) -> DayComparison:
    state = _require_state(session.show_optimized(day_id), day_id)
    return _to_comparison(state, session, config)


@router.post("/{day_id}/keep", response_model=DayComparison)
def keep_current_route(
    day_id: str,
    session: OptimizationSession = Depends(get_session),
    config: AppConfig = Depends(get_config),
) -> DayComparison:
    state = _require_state(session.keep_current(day_id), day_id)
    return _to_comparison(state, session, config)


@router.post("/{day_id}/accept", response_model=AcceptResponse)
def accept_optimized_route(
    day_id: str,
    session: OptimizationSession = Depends(get_session),
    config: AppConfig = Depends(get_config),
) -> AcceptResponse:
    day = session.accept_optimization(day_id)
    if day is None:
        raise HTTPException(status_code=404, detail=f"No route analysis for day '{day_id}'.")

    state = session.get(day_id)
    comparison = _to_comparison(state, session, config) if state is not None else None
    return AcceptResponse(
        day_id=day_id,
        activities=[activity.to_dict() for activity in day.activities],
        comparison=comparison,
    )
