"""Authoritative fleet collection plus the dashboard's current truck selection."""

import logging
import threading
from typing import Callable, Iterable, List, Optional, Tuple

from fleetfuel.fleet.truck import FleetCollection, Truck

logger = logging.getLogger(__name__)

StoreListener = Callable[["FleetStore"], None]


class FleetStore:
    """Single-writer store for the fleet.

    All writes (fleet creation, tick updates, selection) and all reads go
    through one lock. Reads hand out copies, so a reader never sees a tick
    half-applied and can never mutate the stored trucks.
    """

    def __init__(self):
        self._fleet: Optional[FleetCollection] = None
        self._selected_id = ""
        self._listeners: List[StoreListener] = []
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Fleet lifecycle
    # ------------------------------------------------------------------

    @property
    def loaded(self) -> bool:
        with self._lock:
            return bool(self._fleet)

    @property
    def fleet_token(self) -> Optional[int]:
        """Identity of the stored collection, None before it exists.

        The token never changes once the fleet is created, so it tells whether
        a later login reused the same fleet.
        """
        with self._lock:
            return None if self._fleet is None else id(self._fleet)

    def ensure_fleet(self, factory: Callable[[], FleetCollection]) -> int:
        """Create the fleet on first call; later calls keep the same collection.

        The selection is pointed at the first truck when the fleet is created.

        Returns:
            The collection's fleet token.
        """
        with self._lock:
            if self._fleet is None:
                self._fleet = dict(factory())
                self._selected_id = next(iter(self._fleet), "")
                logger.info(f"Fleet loaded: {len(self._fleet)} trucks, selected {self._selected_id!r}")
            token = id(self._fleet)
        self._notify()
        return token

    def apply_tick(self, trucks: Iterable[Truck]) -> None:
        """Swap a whole tick's worth of updated trucks in at once."""
        # Drain the iterable before locking so no caller code runs mid-swap
        updates = list(trucks)
        with self._lock:
            if self._fleet is None:
                return
            for truck in updates:
                if truck.truck_id in self._fleet:
                    self._fleet[truck.truck_id] = truck
        self._notify()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def selected_id(self) -> str:
        return self._selected_id

    def select(self, truck_id: str) -> None:
        """Point the selection at ``truck_id``. Unknown ids are accepted as-is."""
        with self._lock:
            self._selected_id = truck_id
        self._notify()

    def current(self) -> Optional[Truck]:
        """Snapshot of the selected truck.

        Falls back to the first truck when the selection is stale or unset.
        Returns None only while no fleet has been loaded yet.
        """
        with self._lock:
            if not self._fleet:
                return None
            truck = self._fleet.get(self._selected_id)
            if truck is None:
                logger.debug(f"Selection {self._selected_id!r} not in fleet, using first truck")
                truck = next(iter(self._fleet.values()))
            return truck.copy()

    def trucks(self) -> List[Truck]:
        """Snapshot of every truck in creation order."""
        with self._lock:
            if not self._fleet:
                return []
            return [truck.copy() for truck in self._fleet.values()]

    def snapshot(self) -> Tuple[List[Truck], Optional[Truck], str]:
        """(trucks, current truck, selected id) taken under one lock acquisition."""
        with self._lock:
            return self.trucks(), self.current(), self._selected_id

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Call ``listener(store)`` after every change. Returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(self)
