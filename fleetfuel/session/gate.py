"""Landing -> Login -> Dashboard session state machine.

The gate decides which view the user may see, generates the fleet on the
first successful login and owns the live-update subscription for as long as
the dashboard is open.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from fleetfuel.config.constants import (
    EVENT_CANCEL,
    EVENT_LOGOUT,
    EVENT_OPEN_LOGIN,
    EVENT_SUBMIT,
    LOGIN_ERROR_MESSAGE,
    STATE_DASHBOARD,
    STATE_LANDING,
    STATE_LOGIN,
)
from fleetfuel.config.schema import DashboardConfig
from fleetfuel.exceptions import AuthenticationError, InvalidTransitionError
from fleetfuel.simulation.data_source import FleetDataSource
from fleetfuel.store.fleet_store import FleetStore

logger = logging.getLogger(__name__)

# (state, event) -> (next state, side-effect method name)
TRANSITIONS: Dict[Tuple[str, str], Tuple[str, str]] = {
    (STATE_LANDING, EVENT_OPEN_LOGIN): (STATE_LOGIN, "_clear_error"),
    (STATE_LOGIN, EVENT_SUBMIT): (STATE_DASHBOARD, "_enter_dashboard"),
    (STATE_LOGIN, EVENT_CANCEL): (STATE_LANDING, "_clear_error"),
    (STATE_DASHBOARD, EVENT_LOGOUT): (STATE_LANDING, "_leave_dashboard"),
}


class SessionGate:
    """Finite state machine over the three dashboard views.

    Side effects run before the state changes, so a failing side effect leaves
    the gate where it was. The only recoverable failure is a rejected login,
    which keeps the gate at ``login`` and sets :attr:`error`.
    """

    def __init__(
        self,
        store: FleetStore,
        source: FleetDataSource,
        config: Optional[DashboardConfig] = None,
    ):
        self.store = store
        self.source = source
        self.config = config or DashboardConfig()
        self.state = STATE_LANDING
        self.error = ""
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def simulating(self) -> bool:
        return self._unsubscribe is not None

    def dispatch(self, event: str, **payload) -> bool:
        """Apply ``event`` to the current state.

        Returns:
            True if the state changed, False if a login was rejected.

        Raises:
            InvalidTransitionError: no transition exists for (state, event).
        """
        key = (self.state, event)
        if key not in TRANSITIONS:
            raise InvalidTransitionError(self.state, event)
        next_state, action = TRANSITIONS[key]

        try:
            getattr(self, action)(**payload)
        except AuthenticationError as exc:
            self.error = str(exc)
            logger.warning(f"Login rejected for user {exc.username!r}")
            return False

        logger.info(f"Session {self.state} -> {next_state} ({event})")
        self.state = next_state
        return True

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def open_login(self) -> bool:
        return self.dispatch(EVENT_OPEN_LOGIN)

    def login(self, username: str, password: str) -> bool:
        return self.dispatch(EVENT_SUBMIT, username=username, password=password)

    def cancel(self) -> bool:
        return self.dispatch(EVENT_CANCEL)

    def logout(self) -> bool:
        return self.dispatch(EVENT_LOGOUT)

    def close(self) -> None:
        """Release the live-update subscription whatever state the gate is in."""
        self._release_ticker()

    def __enter__(self) -> SessionGate:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Side effects
    # ------------------------------------------------------------------

    def _authenticate(self, username: str, password: str) -> None:
        if username != self.config.username or password != self.config.password:
            raise AuthenticationError(LOGIN_ERROR_MESSAGE, username=username)

    def _clear_error(self) -> None:
        self.error = ""

    def _enter_dashboard(self, username: str, password: str) -> None:
        self._authenticate(username, password)
        self.store.ensure_fleet(self.source.fetch_initial)
        self._release_ticker()
        self._unsubscribe = self.source.subscribe(self.store.apply_tick)
        self.error = ""

    def _leave_dashboard(self) -> None:
        self._release_ticker()

    def _release_ticker(self) -> None:
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()
