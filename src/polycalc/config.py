from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

CAPACITY_ENV = "POLYCALC_CAPACITY"
LOG_LEVEL_ENV = "POLYCALC_LOG_LEVEL"
RENDER_QUALITY_ENV = "POLYCALC_RENDER_QUALITY"

DEFAULT_CAPACITY = 100
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_RENDER_QUALITY = "-pql"


@dataclass(frozen=True)
class Settings:
    capacity: int = DEFAULT_CAPACITY
    log_level: str = DEFAULT_LOG_LEVEL
    render_quality: str = DEFAULT_RENDER_QUALITY

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Settings:
        env = os.environ if env is None else env

        capacity = DEFAULT_CAPACITY
        raw = env.get(CAPACITY_ENV)
        if raw:
            try:
                capacity = int(raw)
            except ValueError:
                capacity = 0
            if capacity < 1:
                logger.warning("Ignoring %s=%r, using %d", CAPACITY_ENV, raw, DEFAULT_CAPACITY)
                capacity = DEFAULT_CAPACITY

        log_level = env.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            logger.warning("Ignoring %s=%r, using %s", LOG_LEVEL_ENV, log_level, DEFAULT_LOG_LEVEL)
            log_level = DEFAULT_LOG_LEVEL

        quality = env.get(RENDER_QUALITY_ENV, DEFAULT_RENDER_QUALITY)
        return cls(capacity=capacity, log_level=log_level, render_quality=quality)
