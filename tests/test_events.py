"""Tests for change notifications."""

import logging

from studyflow.events import ChangeEvent, EventBus


class TestEventBus:
    def test_delivers_in_subscription_order(self):
        bus = EventBus()
        seen = []
        bus.subscribe(lambda e: seen.append(("first", e)))
        bus.subscribe(lambda e: seen.append(("second", e)))
        event = ChangeEvent("tasks", "added", "t_1")
        bus.emit(event)
        assert seen == [("first", event), ("second", event)]

    def test_unsubscribe(self):
        bus = EventBus()
        seen = []
        unsubscribe = bus.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        bus.emit(ChangeEvent("tasks", "added"))
        assert seen == []
        assert len(bus) == 0

    def test_failing_subscriber_does_not_block_others(self, caplog):
        bus = EventBus()
        seen = []

        def broken(_event):
            raise RuntimeError("render failed")

        bus.subscribe(broken)
        bus.subscribe(seen.append)
        with caplog.at_level(logging.ERROR):
            bus.emit(ChangeEvent("stats", "updated"))
        assert len(seen) == 1
        assert "render failed" in caplog.text

    def test_planner_shares_one_bus(self, planner):
        seen = []
        planner.events.subscribe(seen.append)
        planner.tasks.add("Read")
        planner.schedule.add("Maths", "Mon", "09:00", "10:00")
        planner.assignments.add("Essay", "History", "2025-01-20")
        planner.stats.record_session(25)
        assert [e.collection for e in seen] == ["tasks", "schedule", "assignments", "stats"]
