"""Unit tests for EventBus -- pub/sub for engine events.

Tests subscribe/unsubscribe, publish/receive, event-type filtering, queue
overflow (drop oldest), and draining.
"""
from __future__ import annotations

import queue
import threading

import pytest

from skyguard.comms.event_bus import EventBus, drain


@pytest.mark.unit
class TestEventBusBasics:
    """Core subscribe/publish/unsubscribe functionality."""

    def test_subscribe_returns_queue(self):
        bus = EventBus()
        q = bus.subscribe()
        assert isinstance(q, queue.Queue)

    def test_publish_delivers_to_subscriber(self):
        bus = EventBus()
        q = bus.subscribe()
        bus.publish("explosion", {"source": "H-1"})
        msg = q.get_nowait()
        assert msg["type"] == "explosion"
        assert msg["data"]["source"] == "H-1"

    def test_publish_without_data(self):
        bus = EventBus()
        q = bus.subscribe()
        bus.publish("ping")
        msg = q.get_nowait()
        assert msg["type"] == "ping"
        assert "data" not in msg

    def test_multiple_subscribers(self):
        bus = EventBus()
        q1 = bus.subscribe()
        q2 = bus.subscribe()
        bus.publish("target_eliminated", {"target_id": "H-2"})
        assert q1.get_nowait()["type"] == "target_eliminated"
        assert q2.get_nowait()["type"] == "target_eliminated"

    def test_unsubscribe_stops_delivery(self):
        bus = EventBus()
        q = bus.subscribe()
        bus.unsubscribe(q)
        bus.publish("after_unsub")
        assert q.empty()

    def test_unsubscribe_nonexistent_is_safe(self):
        bus = EventBus()
        bus.unsubscribe(queue.Queue())


@pytest.mark.unit
class TestEventBusFiltering:
    def test_filter_limits_event_types(self):
        bus = EventBus()
        q = bus.subscribe({"stats_snapshot"})
        bus.publish("explosion", {"x": 1})
        bus.publish("stats_snapshot", {"engaged_count": 3})
        msgs = drain(q)
        assert [m["type"] for m in msgs] == ["stats_snapshot"]

    def test_unfiltered_subscriber_sees_everything(self):
        bus = EventBus()
        filtered = bus.subscribe(["jam_spark"])
        everything = bus.subscribe()
        bus.publish("jam_spark", {})
        bus.publish("projectile_hit", {})
        assert len(drain(filtered)) == 1
        assert len(drain(everything)) == 2


@pytest.mark.unit
class TestEventBusOverflow:
    """Queue overflow behavior -- drop oldest message when full."""

    def test_default_maxsize(self):
        bus = EventBus()
        assert bus.subscribe().maxsize == 1000

    def test_overflow_drops_oldest(self):
        bus = EventBus(maxsize=10)
        q = bus.subscribe()
        for i in range(10):
            bus.publish("fill", {"seq": i})
        assert q.full()

        bus.publish("overflow", {"seq": 10})

        first = q.get_nowait()
        assert first["data"]["seq"] == 1

    def test_overflow_keeps_newest_event(self):
        bus = EventBus(maxsize=5)
        q = bus.subscribe()
        for i in range(20):
            bus.publish("fill", {"seq": i})
        bus.publish("target_eliminated", {"target_id": "H-9"})
        msgs = drain(q)
        assert len(msgs) == 5
        assert msgs[-1]["type"] == "target_eliminated"


@pytest.mark.unit
class TestEventBusThreadSafety:
    def test_concurrent_publish(self):
        bus = EventBus(maxsize=10_000)
        q = bus.subscribe()

        def worker(n: int) -> None:
            for i in range(100):
                bus.publish("tick", {"worker": n, "seq": i})

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(drain(q)) == 500


@pytest.mark.unit
class TestDrain:
    def test_drain_empty_queue(self):
        assert drain(queue.Queue()) == []

    def test_drain_preserves_order(self):
        bus = EventBus()
        q = bus.subscribe()
        for i in range(3):
            bus.publish("seq", {"i": i})
        assert [m["data"]["i"] for m in drain(q)] == [0, 1, 2]
        assert q.empty()
