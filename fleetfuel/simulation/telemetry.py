"""Live fuel drain simulation applied to the whole fleet once per tick."""

import logging
from typing import Dict, Iterable, List, Optional

import numpy as np

from fleetfuel.config.constants import (
    DRAIN_JITTER_MAX,
    DRAIN_RATES,
    REFUEL_LEVEL,
    STATUS_MOVING,
    STATUS_STOPPED,
)
from fleetfuel.fleet.metrics import round_half_up, round_tenths
from fleetfuel.fleet.truck import Truck

logger = logging.getLogger(__name__)


class TelemetrySimulator:
    """Drains fuel from moving and idling trucks.

    The trucks passed in are never mutated: drained trucks come back as new
    objects and stopped trucks as-is, so a caller can swap a whole tick in at once.
    """

    def __init__(
        self,
        rng: np.random.Generator,
        drain_rates: Optional[Dict[str, float]] = None,
        jitter_max: float = DRAIN_JITTER_MAX,
    ):
        self.rng = rng
        self.drain_rates = dict(drain_rates or DRAIN_RATES)
        self.jitter_max = jitter_max

        assert all(rate >= 0 for rate in self.drain_rates.values()), (
            f"Drain rates must be non-negative, got {self.drain_rates}"
        )
        assert jitter_max >= 0, f"jitter_max must be non-negative, got {jitter_max}"

    def drain_rate(self, status: str) -> float:
        # Anything that is not idling burns fuel at the moving rate
        return self.drain_rates.get(status, self.drain_rates[STATUS_MOVING])

    def advance(self, truck: Truck) -> Truck:
        """Apply one tick of drain to a single truck."""
        if truck.status == STATUS_STOPPED:
            return truck

        jitter = float(self.rng.uniform(0.0, self.jitter_max))
        new_level = truck.fuel_level - (self.drain_rate(truck.status) + jitter)
        # A level that would be stored as 0.0 counts as empty too
        if round_tenths(new_level) <= 0:
            logger.debug(f"{truck.truck_id} ran dry, refuelled to {REFUEL_LEVEL:.0f}%")
            new_level = REFUEL_LEVEL

        updated = truck.copy()
        # fuel_level keeps one decimal while the chart point is a whole percent
        updated.fuel_level = round_tenths(new_level)
        updated.history.replace_last(round_half_up(new_level))
        return updated

    def tick(self, trucks: Iterable[Truck]) -> List[Truck]:
        """Advance every truck by one tick, preserving order."""
        return [self.advance(truck) for truck in trucks]
