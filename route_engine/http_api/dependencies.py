from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, Header

from ..config import AppConfig, load_config_from_env
from ..itinerary.distance import DistanceModel
from ..itinerary.locations import LocationResolver
from ..itinerary.session import OptimizationSession, SessionRegistry
from ..itinerary.tables import load_tables

logger = logging.getLogger(__name__)

DEFAULT_EDITOR_ID = "default"


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return load_config_from_env()


@lru_cache(maxsize=1)
def get_distance_model() -> DistanceModel:
    config = get_config()
    if config.data_dir is None:
        resolver = LocationResolver(config=config.model)
        return DistanceModel(resolver, config=config.model)

    places, routes = load_tables(config.data_dir)
    logger.info("Loaded %d places and %d routes from %s", len(places), len(routes), config.data_dir)
    resolver = LocationResolver(places, config=config.model)
    return DistanceModel(resolver, routes, config=config.model)


@lru_cache(maxsize=1)
def get_session_registry() -> SessionRegistry:
    return SessionRegistry(get_distance_model(), config=get_config().session)


def get_session(
    editor_id: str = Header(DEFAULT_EDITOR_ID, alias="X-Editor-Id"),
    registry: SessionRegistry = Depends(get_session_registry),
) -> OptimizationSession:
    """Session of the calling editor; clients without ``X-Editor-Id`` share one."""
    return registry.get(editor_id or DEFAULT_EDITOR_ID)
