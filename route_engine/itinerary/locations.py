from __future__ import annotations

import hashlib
import logging
from typing import Mapping, Optional

from ..config import ModelConfig
from ..models import Confidence, Coordinate, ResolvedLocation
from .tables import DEFAULT_PLACES

logger = logging.getLogger(__name__)


def normalize_location(text: Optional[str]) -> str:
    """Lowercase, trim and drop everything after the first comma."""
    if not text:
        return ""
    return str(text).lower().strip().split(",")[0].strip()


def stable_unit_pair(text: str) -> tuple[float, float]:
    """Map a string to two reproducible values in ``[0, 1)``."""
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    first = int.from_bytes(digest[:8], "big") / 2**64
    second = int.from_bytes(digest[8:16], "big") / 2**64
    return first, second


class LocationResolver:
    """Resolve free-text locations against a known-place table.

    Lookup order is exact match, then the first table key (in iteration
    order) contained in the input or containing it, then a fallback point
    near ``config.fallback_center`` whose offset is derived from a hash of the
    normalized text. Resolution never fails.
    """

    def __init__(
        self,
        places: Optional[Mapping[str, Coordinate]] = None,
        *,
        config: Optional[ModelConfig] = None,
    ) -> None:
        self.config = config or ModelConfig()
        source = DEFAULT_PLACES if places is None else places
        self.places = {normalize_location(name): (float(coord[0]), float(coord[1])) for name, coord in source.items()}

    def resolve(self, location_text: Optional[str]) -> Coordinate:
        return self.resolve_tagged(location_text).coordinate

    def resolve_tagged(self, location_text: Optional[str]) -> ResolvedLocation:
        normalized = normalize_location(location_text)

        exact = self.places.get(normalized)
        if exact is not None and normalized:
            return ResolvedLocation(coordinate=exact, confidence=Confidence.RESOLVED, matched_key=normalized)

        if normalized:
            for key, coords in self.places.items():
                if key and (key in normalized or normalized in key):
                    return ResolvedLocation(coordinate=coords, confidence=Confidence.RESOLVED, matched_key=key)

        coordinate = self._fallback_coordinate(normalized)
        logger.debug("No known place for %r; using fallback %s", location_text, coordinate)
        return ResolvedLocation(coordinate=coordinate, confidence=Confidence.FALLBACK)

    def _fallback_coordinate(self, normalized: str) -> Coordinate:
        center_lat, center_lon = self.config.fallback_center
        jitter = self.config.fallback_jitter_deg
        unit_lat, unit_lon = stable_unit_pair(normalized)
        return (
            center_lat + (unit_lat - 0.5) * 2.0 * jitter,
            center_lon + (unit_lon - 0.5) * 2.0 * jitter,
        )
