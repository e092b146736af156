"""Derived fuel metrics, computed from a truck's current fields on every read."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from fleetfuel.config.constants import LOW_FUEL_THRESHOLD
from fleetfuel.fleet.truck import Truck

TENTH = Decimal("0.1")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from -inf (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def round_tenths(value: float) -> float:
    """Round to one decimal, exact halves up (49.25 -> 49.3)."""
    return float(Decimal(value).quantize(TENTH, rounding=ROUND_HALF_UP))


def remaining_gallons(truck: Truck) -> float:
    return truck.capacity * (truck.fuel_level / 100)


def estimated_range_miles(truck: Truck) -> int:
    """Miles left in the tank at the truck's current mpg."""
    return round_half_up(remaining_gallons(truck) * truck.current_mpg)


def is_low_fuel(truck: Truck, threshold: float = LOW_FUEL_THRESHOLD) -> bool:
    return truck.fuel_level < threshold


def fleet_average_mpg(trucks: Iterable[Truck]) -> float:
    mpgs = [t.current_mpg for t in trucks]
    if not mpgs:
        return 0.0
    return sum(mpgs) / len(mpgs)
