"""Invariant checks over a fleet snapshot (fuel range, history shape, ids)."""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List

import numpy as np

from fleetfuel.config.constants import (
    FUEL_LEVEL_MAX,
    FUEL_LEVEL_MIN,
    HISTORY_LENGTH,
    TRUCK_ID_PREFIX,
    TRUCK_STATUSES,
)
from fleetfuel.fleet.truck import Truck

logger = logging.getLogger(__name__)

TRUCK_ID_PATTERN = re.compile(rf"^{re.escape(TRUCK_ID_PREFIX)}\d+$")


@dataclass
class CheckResult:
    truck_id: str
    check: str
    passed: bool
    message: str = ""


@dataclass
class ValidationReport:
    results: List[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def n_passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def n_failed(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    @property
    def failures(self) -> List[CheckResult]:
        return [r for r in self.results if not r.passed]

    def summary(self) -> str:
        lines = [f"Fleet checks: {self.n_passed} passed, {self.n_failed} failed"]
        for r in self.results:
            status = "PASS" if r.passed else "FAIL"
            lines.append(f"  [{status}] {r.truck_id}/{r.check} {r.message}".rstrip())
        return "\n".join(lines)


def check_truck(truck: Truck, history_length: int = HISTORY_LENGTH) -> List[CheckResult]:
    tid = truck.truck_id
    levels = truck.history.levels()
    rates = truck.history.consumption_rates()

    return [
        CheckResult(
            tid, "id_format", bool(TRUCK_ID_PATTERN.match(tid)),
            "" if TRUCK_ID_PATTERN.match(tid) else f"id={tid!r}",
        ),
        CheckResult(
            tid, "status", truck.status in TRUCK_STATUSES,
            "" if truck.status in TRUCK_STATUSES else f"status={truck.status!r}",
        ),
        CheckResult(
            tid, "fuel_level", FUEL_LEVEL_MIN < truck.fuel_level <= FUEL_LEVEL_MAX,
            f"fuel_level={truck.fuel_level}",
        ),
        CheckResult(
            tid, "history_length", len(truck.history) == history_length,
            f"len={len(truck.history)}",
        ),
        CheckResult(
            tid, "history_levels", bool(np.all((levels >= 0) & (levels <= 100))),
            f"range=({levels.min()}, {levels.max()})",
        ),
        CheckResult(
            tid, "consumption_rate", bool(np.all(rates >= 0)),
            f"min={rates.min():.1f}",
        ),
        CheckResult(
            tid, "capacity", truck.capacity > 0 and truck.current_mpg > 0,
            f"capacity={truck.capacity}, mpg={truck.current_mpg:.2f}",
        ),
    ]


def validate_fleet(trucks: Iterable[Truck], history_length: int = HISTORY_LENGTH) -> ValidationReport:
    """Run every per-truck check plus id uniqueness across the fleet."""
    report = ValidationReport()
    seen = set()

    for truck in trucks:
        report.results.extend(check_truck(truck, history_length))
        duplicate = truck.truck_id in seen
        report.results.append(CheckResult(
            truck.truck_id, "unique_id", not duplicate,
            "duplicate id" if duplicate else "",
        ))
        seen.add(truck.truck_id)

    if not report.passed:
        logger.warning(f"{report.n_failed} fleet checks failed")
    return report
