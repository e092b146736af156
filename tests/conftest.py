"""Shared test fixtures."""

from datetime import datetime

import numpy as np
import pytest

from fleetfuel.config.schema import FuelDataPoint
from fleetfuel.fleet.fleet_factory import create_fleet
from fleetfuel.fleet.history import HistoryBuffer
from fleetfuel.fleet.truck import Truck
from fleetfuel.simulation.data_source import SimulatedFleetSource
from fleetfuel.simulation.telemetry import TelemetrySimulator
from fleetfuel.store.fleet_store import FleetStore


def make_truck(
    truck_id="TRK-101",
    status="Moving",
    fuel_level=50.0,
    capacity=300,
    current_mpg=7.0,
    n_points=13,
):
    history = HistoryBuffer(
        FuelDataPoint(time=f"{h}:00", level=int(fuel_level), consumption_rate=2.0)
        for h in range(n_points)
    )
    return Truck(
        truck_id=truck_id,
        name="Orca Hauler 1",
        driver="John D.",
        location="I-40 Westbound",
        status=status,
        fuel_level=fuel_level,
        capacity=capacity,
        current_mpg=current_mpg,
        history=history,
        last_updated="Just now",
    )


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def now():
    return datetime(2024, 3, 15, 14, 30)


@pytest.fixture
def fleet(rng, now):
    return create_fleet(rng, now=now)


@pytest.fixture
def simulator():
    return TelemetrySimulator(np.random.default_rng(7))


@pytest.fixture
def store():
    return FleetStore()


@pytest.fixture
def slow_source():
    """Seeded source whose ticker never fires during a test."""
    return SimulatedFleetSource(seed=7, tick_interval_sec=60.0)
