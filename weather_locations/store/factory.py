"""Build the configured location store."""
from __future__ import annotations

from weather_locations.config import AppConfig
from weather_locations.store.base import LocationStore
from weather_locations.store.http import HttpLocationStore
from weather_locations.store.memory import InMemoryLocationStore


def build_store(cfg: AppConfig, offline: bool = False) -> LocationStore:
    if offline or cfg.store.provider == "memory":
        return InMemoryLocationStore()
    return HttpLocationStore(cfg)
