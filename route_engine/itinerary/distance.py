from __future__ import annotations

import logging
import math
from typing import Mapping, Optional, Tuple

import numpy as np

from ..config import ModelConfig
from ..models import Confidence, Coordinate, DistanceEstimate
from .locations import LocationResolver, normalize_location, stable_unit_pair
from .tables import DEFAULT_ROUTES

logger = logging.getLogger(__name__)


def haversine_distance(coord_a: Coordinate, coord_b: Coordinate, *, radius: float = 6371.0) -> float:
    lat_a, lon_a = np.radians(coord_a)
    lat_b, lon_b = np.radians(coord_b)

    delta_lat = lat_b - lat_a
    delta_lon = lon_b - lon_a

    a = np.sin(delta_lat / 2.0) ** 2 + np.cos(lat_a) * np.cos(lat_b) * np.sin(delta_lon / 2.0) ** 2
    c = 2.0 * np.arcsin(np.sqrt(a))
    return float(radius * c)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def travel_minutes(distance_km: float, average_speed_kmh: float = 40.0) -> int:
    """Minutes needed to cover ``distance_km`` at a flat average speed."""
    return round_half_up(distance_km / max(average_speed_kmh, 1e-3) * 60.0)


class DistanceModel:
    """Estimate travel distance and duration between two location strings.

    Curated routes win over geometry; haversine over resolved coordinates is
    the general case; a bounded pseudo-distance covers the rest.
    """

    def __init__(
        self,
        resolver: Optional[LocationResolver] = None,
        routes: Optional[Mapping[Tuple[str, str], float]] = None,
        *,
        config: Optional[ModelConfig] = None,
    ) -> None:
        self.config = config or (resolver.config if resolver is not None else ModelConfig())
        self.resolver = resolver or LocationResolver(config=self.config)
        source = DEFAULT_ROUTES if routes is None else routes
        self.routes = {
            (normalize_location(origin), normalize_location(destination)): float(distance)
            for (origin, destination), distance in source.items()
        }

    def distance_km(self, location_a: Optional[str], location_b: Optional[str]) -> float:
        return self.estimate(location_a, location_b).distance_km

    def estimate(self, location_a: Optional[str], location_b: Optional[str]) -> DistanceEstimate:
        name_a = normalize_location(location_a)
        name_b = normalize_location(location_b)

        curated = self.routes.get((name_a, name_b))
        if curated is None:
            curated = self.routes.get((name_b, name_a))
        if curated is not None:
            return DistanceEstimate(distance_km=curated, confidence=Confidence.CURATED)

        if not name_a or not name_b:
            return self._fallback_distance(name_a, name_b)

        resolved_a = self.resolver.resolve_tagged(location_a)
        resolved_b = self.resolver.resolve_tagged(location_b)
        coords = (*resolved_a.coordinate, *resolved_b.coordinate)
        if not all(math.isfinite(value) for value in coords):
            return self._fallback_distance(name_a, name_b)

        distance = haversine_distance(
            resolved_a.coordinate,
            resolved_b.coordinate,
            radius=self.config.earth_radius_km,
        )
        if Confidence.FALLBACK in (resolved_a.confidence, resolved_b.confidence):
            confidence = Confidence.FALLBACK
        else:
            confidence = Confidence.RESOLVED
        return DistanceEstimate(distance_km=distance, confidence=confidence)

    def duration_minutes(self, distance_km: float) -> int:
        return travel_minutes(distance_km, self.config.average_speed_kmh)

    def travel_minutes_between(self, location_a: Optional[str], location_b: Optional[str]) -> int:
        return self.duration_minutes(self.distance_km(location_a, location_b))

    def _fallback_distance(self, name_a: str, name_b: str) -> DistanceEstimate:
        low, high = self.config.fallback_distance_range_km
        key = "|".join(sorted((name_a, name_b)))
        unit, _ = stable_unit_pair(key)
        distance = low + unit * (high - low)
        logger.debug("No coordinates for %r -> %r; using fallback distance %.1f km", name_a, name_b, distance)
        return DistanceEstimate(distance_km=distance, confidence=Confidence.FALLBACK)
