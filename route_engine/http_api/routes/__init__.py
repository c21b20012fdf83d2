from __future__ import annotations

from .route import router as route_router
from .session import router as session_router

__all__ = ["route_router", "session_router"]
