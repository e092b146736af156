"""Background thread that fires a callback at a fixed interval until stopped."""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTicker:
    """Owned, cancellable periodic task.

    The first call happens one interval after ``start()``. Calls never overlap:
    the next wait only begins once the previous callback has returned.
    Use as a context manager so the thread is stopped on every exit path.
    """

    def __init__(self, interval_sec: float, callback: Callable[[], None], name: str = "ticker"):
        if interval_sec <= 0:
            raise ValueError(f"interval_sec must be > 0, got {interval_sec}")
        self.interval_sec = interval_sec
        self.callback = callback
        self.name = name
        self.ticks = 0
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "PeriodicTicker":
        if self._thread is not None:
            raise RuntimeError(f"{self.name} already started")
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.info(f"{self.name} started (every {self.interval_sec:g}s)")
        return self

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop scheduling further calls. Safe to call more than once."""
        if self._stop.is_set():
            return
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.info(f"{self.name} stopped after {self.ticks} ticks")

    def _run(self) -> None:
        while not self._stop.wait(self.interval_sec):
            try:
                self.callback()
            except Exception:
                logger.exception(f"{self.name} callback failed, stopping")
                self._stop.set()
                return
            self.ticks += 1

    def __enter__(self) -> "PeriodicTicker":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
