"""Fleet data sources: where the initial fleet and its live updates come from."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

import numpy as np

from fleetfuel.config.constants import FLEET_SIZE, TICK_INTERVAL_SEC
from fleetfuel.config.schema import DashboardConfig
from fleetfuel.fleet.fleet_factory import create_fleet
from fleetfuel.fleet.truck import FleetCollection, Truck
from fleetfuel.simulation.telemetry import TelemetrySimulator
from fleetfuel.simulation.ticker import PeriodicTicker

logger = logging.getLogger(__name__)

TickListener = Callable[[List[Truck]], None]
Unsubscribe = Callable[[], None]


class FleetDataSource(ABC):
    """Supplies the initial fleet and pushes updated trucks on every tick.

    The in-process simulator is one implementation; a hardware telemetry feed
    would be another.
    """

    @abstractmethod
    def fetch_initial(self) -> FleetCollection:
        """Return the starting fleet, keyed by truck id in creation order."""

    @abstractmethod
    def subscribe(self, on_tick: TickListener) -> Unsubscribe:
        """Start pushing updates to ``on_tick``. Returns a callable that stops them."""


class SimulatedFleetSource(FleetDataSource):
    """Randomised in-process source built on the fleet factory and the drain simulator.

    Fleet generation and fuel drain draw from independent streams spawned from
    one seed, so a seeded source replays exactly.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        fleet_size: int = FLEET_SIZE,
        tick_interval_sec: float = TICK_INTERVAL_SEC,
    ):
        fleet_seq, drain_seq = np.random.SeedSequence(seed).spawn(2)
        self.fleet_rng = np.random.default_rng(fleet_seq)
        self.simulator = TelemetrySimulator(np.random.default_rng(drain_seq))
        self.fleet_size = fleet_size
        self.tick_interval_sec = tick_interval_sec
        self._trucks: List[Truck] = []
        self._ticker: Optional[PeriodicTicker] = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: DashboardConfig) -> "SimulatedFleetSource":
        return cls(
            seed=config.seed,
            fleet_size=config.fleet_size,
            tick_interval_sec=config.tick_interval_sec,
        )

    @property
    def subscribed(self) -> bool:
        return self._ticker is not None

    def fetch_initial(self) -> FleetCollection:
        fleet = create_fleet(self.fleet_rng, count=self.fleet_size)
        with self._lock:
            self._trucks = list(fleet.values())
        return fleet

    def step(self) -> List[Truck]:
        """Run one tick and return the updated trucks."""
        with self._lock:
            self._trucks = self.simulator.tick(self._trucks)
            return list(self._trucks)

    def subscribe(self, on_tick: TickListener) -> Unsubscribe:
        if self._ticker is not None:
            raise RuntimeError("SimulatedFleetSource supports one subscriber at a time")

        def emit() -> None:
            on_tick(self.step())

        ticker = PeriodicTicker(self.tick_interval_sec, emit, name="telemetry-ticker")
        self._ticker = ticker.start()

        def unsubscribe() -> None:
            ticker.stop()
            if self._ticker is ticker:
                self._ticker = None

        return unsubscribe
