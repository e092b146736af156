"""Fleet factory: creates the initial fleet with 12 hours of fuel history per truck."""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

import numpy as np

from fleetfuel.config.constants import (
    CONSUMPTION_LEVEL_FACTOR,
    CONSUMPTION_RANGE,
    DRIVERS,
    FLEET_SIZE,
    HISTORY_LENGTH,
    HISTORY_STEP_HOURS,
    LAST_UPDATED_LABEL,
    LOCATIONS,
    MPG_BASE,
    MPG_SPREAD,
    REFUEL_LEVEL,
    START_LEVEL_MAX,
    START_LEVEL_SPREAD,
    STATUS_PATTERN,
    TANK_CAPACITY_GAL,
    TRUCK_ID_OFFSET,
    TRUCK_ID_PREFIX,
    TRUCK_NAME_PREFIX,
)
from fleetfuel.config.schema import FuelDataPoint
from fleetfuel.fleet.history import HistoryBuffer
from fleetfuel.fleet.metrics import round_half_up, round_tenths
from fleetfuel.fleet.truck import FleetCollection, Truck

logger = logging.getLogger(__name__)


def truck_id_for(number: int) -> str:
    return f"{TRUCK_ID_PREFIX}{TRUCK_ID_OFFSET + number}"


def build_history(
    rng: np.random.Generator,
    now: datetime,
    length: int = HISTORY_LENGTH,
) -> HistoryBuffer:
    """Build an hourly fuel history ending at ``now``.

    The running level starts in [65, 85) and drops by half the drawn consumption
    each hour. A level that would go negative resets to full, modelling a refuel
    inside the window, so the series is not guaranteed to be monotonic.

    Args:
        rng: Random number generator.
        now: Timestamp of the newest point.
        length: Number of points.

    Returns:
        HistoryBuffer ordered oldest -> newest.
    """
    level = START_LEVEL_MAX - rng.uniform(0.0, START_LEVEL_SPREAD)
    points: List[FuelDataPoint] = []

    for hours_back in range(length - 1, -1, -1):
        stamp = now - timedelta(hours=hours_back * HISTORY_STEP_HOURS)
        consumption = rng.uniform(*CONSUMPTION_RANGE)
        level -= consumption * CONSUMPTION_LEVEL_FACTOR
        if level < 0:
            level = REFUEL_LEVEL

        points.append(FuelDataPoint(
            time=f"{stamp.hour}:00",
            level=round_half_up(level),
            consumption_rate=round_tenths(float(consumption)),
        ))

    return HistoryBuffer(points)


def create_fleet(
    rng: np.random.Generator,
    count: int = FLEET_SIZE,
    now: Optional[datetime] = None,
) -> FleetCollection:
    """Create ``count`` trucks keyed by id, in creation order.

    Status, driver and location are taken round-robin from fixed tables, so
    fleets larger than the tables repeat them.
    """
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")
    now = now or datetime.now()

    fleet: FleetCollection = {}
    for number in range(1, count + 1):
        slot = number - 1
        history = build_history(rng, now)
        truck = Truck(
            truck_id=truck_id_for(number),
            name=f"{TRUCK_NAME_PREFIX} {number}",
            driver=DRIVERS[slot % len(DRIVERS)],
            location=LOCATIONS[slot % len(LOCATIONS)],
            status=STATUS_PATTERN[slot % len(STATUS_PATTERN)],
            fuel_level=float(history.last.level),
            capacity=TANK_CAPACITY_GAL,
            current_mpg=MPG_BASE + float(rng.uniform(0.0, MPG_SPREAD)),
            history=history,
            last_updated=LAST_UPDATED_LABEL,
        )
        fleet[truck.truck_id] = truck

    logger.info(f"Generated fleet of {len(fleet)} trucks ({', '.join(fleet)})")
    return fleet
