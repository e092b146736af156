"""Dataclasses for fuel readings and dashboard run-time settings."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from fleetfuel.config.constants import (
    FLEET_MANAGER_PASSWORD,
    FLEET_MANAGER_USERNAME,
    FLEET_SIZE,
    TICK_INTERVAL_SEC,
)


@dataclass(frozen=True)
class FuelDataPoint:
    """One hourly reading in a truck's fuel history."""

    time: str                 # hour label, e.g. "14:00"
    level: int                # percent, 0..100
    consumption_rate: float   # gal/hr, rounded to one decimal

    def with_level(self, level: int) -> FuelDataPoint:
        return replace(self, level=level)


@dataclass(frozen=True)
class DashboardConfig:
    """Run-time settings for one dashboard process."""

    fleet_size: int = FLEET_SIZE
    tick_interval_sec: float = TICK_INTERVAL_SEC
    seed: Optional[int] = None        # None -> OS entropy
    username: str = FLEET_MANAGER_USERNAME
    password: str = FLEET_MANAGER_PASSWORD

    def __post_init__(self):
        if self.fleet_size < 1:
            raise ValueError(f"fleet_size must be >= 1, got {self.fleet_size}")
        if self.tick_interval_sec <= 0:
            raise ValueError(f"tick_interval_sec must be > 0, got {self.tick_interval_sec}")
