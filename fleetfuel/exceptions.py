"""Exception hierarchy for fleetfuel."""

from __future__ import annotations


class FleetFuelError(Exception):
    """Base exception for all fleetfuel errors."""


class AuthenticationError(FleetFuelError):
    """Credential pair rejected at the login screen."""

    def __init__(self, message: str, *, username: str = "") -> None:
        self.username = username
        super().__init__(message)


class InvalidTransitionError(FleetFuelError):
    """Event has no transition defined from the current session state."""

    def __init__(self, state: str, event: str) -> None:
        self.state = state
        self.event = event
        super().__init__(f"No transition for event {event!r} from state {state!r}")
