"""Truck dataclass representing a single truck in the fleet."""

from dataclasses import dataclass, replace
from typing import Dict

from fleetfuel.fleet.history import HistoryBuffer


@dataclass
class Truck:
    truck_id: str             # "TRK-101", "TRK-102", ...
    name: str
    driver: str
    location: str
    status: str               # "Moving", "Idling" or "Stopped"
    fuel_level: float         # percent, (0, 100]
    capacity: float           # gallons
    current_mpg: float
    history: HistoryBuffer
    last_updated: str

    def copy(self) -> "Truck":
        """Independent snapshot; mutating it never touches this truck."""
        return replace(self, history=self.history.copy())


# Trucks keyed by id, in creation order
FleetCollection = Dict[str, Truck]
