from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple


@dataclass
class ModelConfig:
    average_speed_kmh: float = 40.0
    earth_radius_km: float = 6371.0
    # Manila; unresolved locations are scattered around it
    fallback_center: Tuple[float, float] = (14.5995, 120.9842)
    fallback_jitter_deg: float = 0.25
    fallback_distance_range_km: Tuple[float, float] = (10.0, 60.0)


@dataclass
class SessionConfig:
    savings_threshold_minutes: int = 5
    min_stops_for_analysis: int = 2
    min_stops_for_reorder: int = 3


@dataclass
class AppConfig:
    model: ModelConfig = field(default_factory=ModelConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    data_dir: Optional[Path] = None


def load_config_from_env() -> AppConfig:
    """Build an ``AppConfig`` from ``ROUTE_ENGINE_*`` environment variables."""
    config = AppConfig()

    speed_value = os.getenv("ROUTE_ENGINE_AVG_SPEED_KMH", "40.0")
    try:
        speed = float(speed_value)
    except ValueError:
        speed = 40.0
    config.model.average_speed_kmh = speed if speed > 0 else 40.0

    threshold_value = os.getenv("ROUTE_ENGINE_SAVINGS_THRESHOLD_MINUTES", "5")
    try:
        config.session.savings_threshold_minutes = int(threshold_value)
    except ValueError:
        config.session.savings_threshold_minutes = 5

    data_dir = os.getenv("ROUTE_ENGINE_DATA_DIR", "")
    config.data_dir = Path(data_dir) if data_dir else None
    return config
