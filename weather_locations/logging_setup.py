"""Logging bootstrap for entrypoints."""
from __future__ import annotations

import logging

from weather_locations.config import AppConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(cfg: AppConfig) -> None:
    level = getattr(logging, cfg.logging.level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("weather_locations").setLevel(level)
