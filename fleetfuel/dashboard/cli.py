"""Command-line terminal dashboard: log in, watch live fuel levels, log out."""

import logging
import queue
import sys

import click

from fleetfuel.config.constants import FLEET_SIZE, TICK_INTERVAL_SEC
from fleetfuel.config.schema import DashboardConfig
from fleetfuel.dashboard.views import render_dashboard
from fleetfuel.session.gate import SessionGate
from fleetfuel.simulation.data_source import SimulatedFleetSource
from fleetfuel.store.fleet_store import FleetStore
from fleetfuel.validation.fleet_checks import validate_fleet

# Grace period on top of the tick interval before the feed counts as stalled
UPDATE_GRACE_SEC = 5.0


@click.command()
@click.option("--trucks", default=FLEET_SIZE, type=click.IntRange(min=1),
              help="Number of trucks in the fleet.")
@click.option("--seed", default=None, type=int, help="RNG seed (random if omitted).")
@click.option("--interval", default=TICK_INTERVAL_SEC, type=click.FloatRange(min=0, min_open=True),
              help="Seconds between live updates.")
@click.option("--ticks", default=5, type=click.IntRange(min=0),
              help="Number of live updates to show before logging out.")
@click.option("--select", "select_id", default=None, help="Truck id to show, e.g. TRK-103.")
@click.option("--username", default=None, help="Login username (prompted if omitted).")
@click.option("--password", default=None, help="Login password (prompted if omitted).")
@click.option("--check", is_flag=True, help="Validate fleet invariants after every update.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
def main(trucks, seed, interval, ticks, select_id, username, password, check, verbose):
    """Orca fleet fuel monitor."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger(__name__)

    config = DashboardConfig(fleet_size=trucks, tick_interval_sec=interval, seed=seed)
    store = FleetStore()
    source = SimulatedFleetSource.from_config(config)

    with SessionGate(store, source, config) as gate:
        gate.open_login()

        if username is None:
            username = click.prompt("Username")
        if password is None:
            password = click.prompt("Password", hide_input=True)

        if not gate.login(username, password):
            click.echo(f"Error: {gate.error}", err=True)
            sys.exit(1)

        if select_id:
            store.select(select_id)

        updates: "queue.Queue[int]" = queue.Queue()
        unsubscribe = store.subscribe(lambda s: updates.put(1))
        try:
            click.echo(render_dashboard(*store.snapshot()))
            for tick in range(1, ticks + 1):
                try:
                    updates.get(timeout=interval + UPDATE_GRACE_SEC)
                except queue.Empty:
                    raise click.ClickException(
                        f"No live update within {interval + UPDATE_GRACE_SEC:g}s; telemetry feed stopped."
                    )
                snapshot, current, selected_id = store.snapshot()
                click.echo(f"\n--- update {tick}/{ticks} ---")
                click.echo(render_dashboard(snapshot, current, selected_id))
                if check:
                    report = validate_fleet(snapshot)
                    logger.info(report.summary() if not report.passed else
                                f"Fleet checks: {report.n_passed} passed")
        finally:
            unsubscribe()
            gate.logout()

    logger.info("Logged out.")


if __name__ == "__main__":
    main()
