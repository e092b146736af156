"""Tests for dashboard view data and the command-line dashboard."""

import queue

import pytest
from click.testing import CliRunner

from fleetfuel.dashboard import cli
from fleetfuel.dashboard.cli import main
from fleetfuel.simulation.data_source import SimulatedFleetSource
from fleetfuel.dashboard.views import (
    LOADING_MESSAGE,
    fleet_table,
    history_frame,
    render_dashboard,
    truck_card,
)

from conftest import make_truck


class TestViews:
    def test_truck_card(self):
        card = truck_card(make_truck(capacity=300, fuel_level=50, current_mpg=7.0), fleet_mpg=6.6)
        assert card["fuel_label"] == "150.0 / 300 gal"
        assert card["range_miles"] == 1050
        assert card["mpg_vs_fleet"] == 0.4
        assert not card["low_fuel"]
        assert card["chart_color"] == "#3b82f6"

    def test_low_fuel_card(self):
        card = truck_card(make_truck(fuel_level=12.5))
        assert card["low_fuel"]
        assert card["chart_color"] == "#ef4444"
        assert card["mpg_vs_fleet"] == 0.0

    def test_history_frame(self, fleet):
        truck = fleet["TRK-102"]
        frame = history_frame(truck)
        assert list(frame.columns) == ["time", "level", "consumption_rate"]
        assert len(frame) == 13
        assert frame["time"].iloc[-1] == truck.history.last.time
        assert frame["level"].iloc[-1] == truck.history.last.level

    def test_fleet_table_marks_selection(self, fleet):
        table = fleet_table(list(fleet.values()), "TRK-103")
        assert list(table["truck_id"]) == list(fleet)
        assert list(table["selected"]) == ["", "", "*", "", ""]

    def test_render_loading(self):
        assert render_dashboard([], None) == LOADING_MESSAGE

    def test_render_selected_truck(self, fleet):
        text = render_dashboard(list(fleet.values()), fleet["TRK-104"])
        assert text.startswith("Orca Hauler 4 (TRK-104) | Stopped")
        assert "Range" in text


class TestCli:
    def test_login_and_watch(self):
        result = CliRunner().invoke(main, [
            "--seed", "1", "--ticks", "2", "--interval", "0.01",
            "--username", "fleetmanager", "--password", "orca123",
        ])
        assert result.exit_code == 0, result.output
        assert "Orca Hauler 1 (TRK-101)" in result.output
        assert "update 2/2" in result.output

    def test_selects_truck(self):
        result = CliRunner().invoke(main, [
            "--seed", "1", "--ticks", "1", "--interval", "0.01", "--select", "TRK-103",
            "--username", "fleetmanager", "--password", "orca123", "--check",
        ])
        assert result.exit_code == 0, result.output
        assert "Orca Hauler 3 (TRK-103)" in result.output

    def test_prompts_for_credentials(self):
        result = CliRunner().invoke(
            main, ["--seed", "1", "--ticks", "0"], input="fleetmanager\norca123\n",
        )
        assert result.exit_code == 0, result.output
        assert "TRK-101" in result.output

    @pytest.mark.parametrize("args", [
        ["--trucks", "0"],
        ["--interval", "0"],
        ["--ticks", "-1"],
    ])
    def test_rejects_out_of_range_options(self, args):
        result = CliRunner().invoke(main, args + ["--username", "fleetmanager", "--password", "orca123"])
        assert result.exit_code == 2
        assert args[0] in result.output
        assert not isinstance(result.exception, ValueError)

    def test_stalled_feed_exits_cleanly(self, monkeypatch):
        def broken_step(self):
            raise RuntimeError("feed lost")

        monkeypatch.setattr(cli, "UPDATE_GRACE_SEC", 0.2)
        monkeypatch.setattr(SimulatedFleetSource, "step", broken_step)

        result = CliRunner().invoke(main, [
            "--seed", "1", "--ticks", "1", "--interval", "0.01",
            "--username", "fleetmanager", "--password", "orca123",
        ])
        assert result.exit_code == 1
        assert "telemetry feed stopped" in result.output
        assert not isinstance(result.exception, queue.Empty)

    def test_rejected_login_exits_nonzero(self):
        result = CliRunner().invoke(main, [
            "--ticks", "1", "--username", "fleetmanager", "--password", "nope",
        ])
        assert result.exit_code == 1
        assert "Invalid username or password." in result.output
