"""Fixed-length fuel history series owned by a truck."""

from typing import Iterable, Iterator, List

import numpy as np

from fleetfuel.config.schema import FuelDataPoint


class HistoryBuffer:
    """Ordered oldest -> newest series whose length never changes.

    Only the newest point can be rewritten; nothing is ever appended or removed.
    """

    def __init__(self, points: Iterable[FuelDataPoint]):
        self._points: List[FuelDataPoint] = list(points)
        if not self._points:
            raise ValueError("HistoryBuffer needs at least one point")

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[FuelDataPoint]:
        return iter(self._points)

    def __getitem__(self, index: int) -> FuelDataPoint:
        return self._points[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, HistoryBuffer):
            return NotImplemented
        return self._points == other._points

    def __repr__(self) -> str:
        return f"HistoryBuffer({self._points!r})"

    @property
    def last(self) -> FuelDataPoint:
        return self._points[-1]

    def replace_last(self, level: int) -> None:
        """Rewrite the newest point's level, keeping its time and consumption."""
        self._points[-1] = self._points[-1].with_level(level)

    def levels(self) -> np.ndarray:
        return np.array([p.level for p in self._points], dtype=np.int64)

    def consumption_rates(self) -> np.ndarray:
        return np.array([p.consumption_rate for p in self._points], dtype=np.float64)

    def copy(self) -> "HistoryBuffer":
        # FuelDataPoint is frozen, so a shallow list copy is independent
        return HistoryBuffer(self._points)
