"""Tests for the fleet store and truck selection."""

import threading

from fleetfuel.simulation.telemetry import TelemetrySimulator


class TestFleetStore:
    def test_empty_store_is_loading(self, store):
        assert not store.loaded
        assert store.fleet_token is None
        assert store.current() is None
        assert store.trucks() == []

    def test_ensure_fleet_creates_once(self, store, fleet):
        calls = []

        def factory():
            calls.append(1)
            return fleet

        first = store.ensure_fleet(factory)
        second = store.ensure_fleet(factory)
        assert first == second == store.fleet_token
        assert len(calls) == 1

    def test_selection_defaults_to_first_truck(self, store, fleet):
        store.ensure_fleet(lambda: fleet)
        assert store.selected_id == "TRK-101"
        assert store.current().truck_id == "TRK-101"

    def test_select_known_truck(self, store, fleet):
        store.ensure_fleet(lambda: fleet)
        store.select("TRK-103")
        assert store.current().truck_id == "TRK-103"

    def test_stale_selection_falls_back_to_first(self, store, fleet):
        store.ensure_fleet(lambda: fleet)
        store.select("does-not-exist")
        assert store.selected_id == "does-not-exist"
        assert store.current().truck_id == "TRK-101"

    def test_fleet_creation_resets_selection(self, store, fleet):
        store.select("TRK-999")
        assert store.current() is None
        store.ensure_fleet(lambda: fleet)
        assert store.selected_id == "TRK-101"

    def test_reads_are_snapshots(self, store, fleet):
        store.ensure_fleet(lambda: fleet)
        current = store.current()
        current.fuel_level = 1.0
        current.history.replace_last(1)
        for truck in store.trucks():
            truck.fuel_level = 2.0

        stored = store.current()
        assert stored.fuel_level == fleet["TRK-101"].fuel_level
        assert stored.history.last.level == fleet["TRK-101"].history.last.level
        assert all(t.fuel_level != 2.0 for t in store.trucks())

    def test_factory_dict_is_not_shared(self, store, fleet):
        store.ensure_fleet(lambda: fleet)
        del fleet["TRK-101"]
        assert [t.truck_id for t in store.trucks()][0] == "TRK-101"

    def test_apply_tick_keeps_fleet_token(self, store, fleet, simulator):
        token = store.ensure_fleet(lambda: fleet)
        before = {tid: t.fuel_level for tid, t in fleet.items()}

        store.apply_tick(simulator.tick(store.trucks()))

        after = {t.truck_id: t.fuel_level for t in store.trucks()}
        assert store.fleet_token == token
        assert list(after) == list(before)
        assert after["TRK-101"] < before["TRK-101"]
        assert after["TRK-104"] == before["TRK-104"]

    def test_apply_tick_before_load_is_ignored(self, store, fleet, simulator):
        store.apply_tick(simulator.tick(fleet.values()))
        assert not store.loaded

    def test_readers_never_see_partial_tick(self, store, fleet, simulator):
        store.ensure_fleet(lambda: fleet)
        old = store.trucks()
        new = simulator.tick(old)
        moving = [t.truck_id for t in old if t.status != "Stopped"]
        reads = []

        def reader():
            trucks, _, _ = store.snapshot()
            reads.append(store.trucks())
            reads.append(trucks)

        def updates():
            # Read from another thread after the first truck has been handed over
            for i, truck in enumerate(new):
                yield truck
                if i == 0:
                    thread = threading.Thread(target=reader)
                    thread.start()
                    thread.join(timeout=5.0)

        store.apply_tick(updates())
        reads.append(store.trucks())

        assert len(reads) == 3
        for trucks in reads:
            changed = [
                t.truck_id for t, o in zip(trucks, old) if t.fuel_level != o.fuel_level
            ]
            assert changed in ([], moving)
        assert reads[-1] == new

    def test_snapshot(self, store, fleet):
        assert store.snapshot() == ([], None, "")
        store.ensure_fleet(lambda: fleet)
        store.select("TRK-102")
        trucks, current, selected_id = store.snapshot()
        assert [t.truck_id for t in trucks] == list(fleet)
        assert current.truck_id == selected_id == "TRK-102"

    def test_selection_does_not_change_fleet(self, store, fleet):
        store.ensure_fleet(lambda: fleet)
        before = store.trucks()
        store.select("TRK-105")
        store.select("TRK-102")
        assert store.trucks() == before


class TestStoreListeners:
    def test_notified_on_tick_and_selection(self, store, fleet, rng):
        seen = []
        store.subscribe(lambda s: seen.append(s.selected_id))

        store.ensure_fleet(lambda: fleet)
        store.apply_tick(TelemetrySimulator(rng).tick(fleet.values()))
        store.select("TRK-102")

        assert seen == ["TRK-101", "TRK-101", "TRK-102"]

    def test_unsubscribe(self, store, fleet):
        seen = []
        unsubscribe = store.subscribe(lambda s: seen.append(1))
        unsubscribe()
        unsubscribe()
        store.ensure_fleet(lambda: fleet)
        assert seen == []
