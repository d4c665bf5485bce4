"""Tests for the publish/subscribe event bus."""

from __future__ import annotations

import logging

from packages.core.events import EventBus


class TestEventBus:
    def test_delivery_in_subscription_order(self):
        bus = EventBus()
        calls = []
        bus.on("wall:added", lambda data: calls.append(("first", data)))
        bus.on("wall:added", lambda data: calls.append(("second", data)))
        bus.emit("wall:added", "w1")
        assert calls == [("first", "w1"), ("second", "w1")]

    def test_emit_without_listeners(self):
        EventBus().emit("nothing", 1)

    def test_unsubscribe_handle(self):
        bus = EventBus()
        calls = []
        unsubscribe = bus.on("plan:changed", calls.append)
        unsubscribe()
        bus.emit("plan:changed", 1)
        assert calls == []

    def test_off(self):
        bus = EventBus()
        calls = []
        bus.on("e", calls.append)
        bus.off("e", calls.append)
        bus.off("unknown", calls.append)
        bus.emit("e", 1)
        assert calls == []

    def test_once(self):
        bus = EventBus()
        calls = []
        bus.once("e", calls.append)
        bus.emit("e", 1)
        bus.emit("e", 2)
        assert calls == [1]
        assert bus.listener_count("e") == 0

    def test_failing_listener_is_isolated(self, caplog):
        bus = EventBus()
        calls = []

        def broken(data):
            raise RuntimeError("boom")

        bus.on("e", broken)
        bus.on("e", calls.append)
        with caplog.at_level(logging.ERROR):
            bus.emit("e", 7)
        assert calls == [7]
        assert "EventBus listener failed [e]" in caplog.text

    def test_listener_may_unsubscribe_during_emit(self):
        bus = EventBus()
        calls = []
        handle = {}

        def first(data):
            calls.append("first")
            handle["off"]()

        handle["off"] = bus.on("e", first)
        bus.on("e", lambda data: calls.append("second"))
        bus.emit("e")
        bus.emit("e")
        assert calls == ["first", "second", "second"]

    def test_clear(self):
        bus = EventBus()
        bus.on("a", print)
        bus.on("b", print)
        bus.clear("a")
        assert bus.listener_count("a") == 0
        assert bus.listener_count("b") == 1
        bus.clear()
        assert bus.listener_count("b") == 0
