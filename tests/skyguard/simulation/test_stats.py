"""Unit tests for StatsPublisher and the aggregate helpers."""

from __future__ import annotations

import pytest

from skyguard.comms.event_bus import drain
from skyguard.simulation.entities import Drone, GroundAsset
from skyguard.simulation.stats import (
    StatsPublisher,
    StatsSnapshot,
    base_integrity,
    count_threats,
    engagement_matrix,
)
from skyguard.units import Allegiance

pytestmark = pytest.mark.unit


def _drone(did, x, y, allegiance=Allegiance.FRIENDLY) -> Drone:
    return Drone(drone_id=did, position=(x, y), allegiance=allegiance)


def _asset(aid, x, y, health=1000.0, max_health=1000.0) -> GroundAsset:
    return GroundAsset(asset_id=aid, label=aid, position=(x, y), size=20,
                       category="test", health=health, max_health=max_health)


class TestHelpers:
    def test_count_threats(self):
        assets = [_asset("a1", 0, 0), _asset("a2", 500, 0)]
        hostiles = [
            _drone("H-1", 150, 0, Allegiance.HOSTILE),
            _drone("H-2", 151, 0, Allegiance.HOSTILE),
            _drone("H-3", 450, 0, Allegiance.HOSTILE),
        ]
        assert count_threats(hostiles, assets) == 2

    def test_integrity_full(self):
        assert base_integrity([_asset("a1", 0, 0)], []) == 100

    def test_integrity_counts_destroyed(self):
        alive = _asset("a1", 0, 0, health=500)
        gone = _asset("a2", 0, 0, health=0.0)
        assert base_integrity([alive], [gone]) == 25

    def test_integrity_rounds(self):
        a = _asset("a1", 0, 0, health=2, max_health=3)
        assert base_integrity([a], []) == 67

    def test_integrity_no_assets(self):
        assert base_integrity([], []) == 0

    def test_engagement_matrix(self):
        f = _drone("F-1", 0, 0).to_telemetry()
        h1 = _drone("H-1", 3, 4, Allegiance.HOSTILE).to_telemetry()
        h2 = _drone("H-2", 10.4, 0, Allegiance.HOSTILE).to_telemetry()
        assert engagement_matrix([f], [h1, h2]) == {"F-1": {"H-1": 5, "H-2": 10}}


class TestPublisher:
    def _update(self, pub, friendlies=(), hostiles=(), assets=(), eliminated=0):
        return pub.update(list(friendlies), list(hostiles), list(assets), [], 0, eliminated)

    def test_first_update_publishes(self, bus, clock):
        q = bus.subscribe({"stats_snapshot"})
        pub = StatsPublisher(bus, clock=clock)
        f = _drone("F-1", 0, 0)
        f.is_engaging = True
        snap = self._update(pub, friendlies=[f], assets=[_asset("a1", 0, 0)])
        assert snap.engaged_count == 1
        assert snap.integrity_percent == 100
        assert snap.friendlies[0].drone_id == "F-1"
        events = drain(q)
        assert len(events) == 1
        assert events[0]["data"]["flush"] is False

    def test_rate_limited(self, bus, clock):
        pub = StatsPublisher(bus, clock=clock)
        self._update(pub)
        clock.advance(0.05)
        f = _drone("F-1", 0, 0)
        f.is_engaging = True
        snap = self._update(pub, friendlies=[f])
        assert snap.engaged_count == 0
        assert pub.publish_count == 1
        clock.advance(0.1)
        snap = self._update(pub, friendlies=[f])
        assert snap.engaged_count == 1
        assert pub.publish_count == 2

    def test_elimination_flushes_immediately(self, bus, clock):
        q = bus.subscribe({"stats_snapshot"})
        pub = StatsPublisher(bus, clock=clock)
        self._update(pub)
        drain(q)
        clock.advance(0.01)
        snap = self._update(pub, eliminated=2)
        assert snap.eliminated_total == 2
        assert pub.eliminated_total == 2
        events = drain(q)
        assert len(events) == 1
        assert events[0]["data"]["flush"] is True
        assert events[0]["data"]["eliminated_total"] == 2

    def test_eliminations_accumulate(self, clock):
        pub = StatsPublisher(clock=clock)
        self._update(pub, eliminated=1)
        clock.advance(0.01)
        self._update(pub, eliminated=1)
        clock.advance(0.5)
        snap = self._update(pub)
        assert snap.eliminated_total == 2

    def test_reset(self, clock):
        pub = StatsPublisher(clock=clock)
        self._update(pub, eliminated=3)
        pub.reset()
        assert pub.eliminated_total == 0
        assert pub.snapshot == StatsSnapshot()
        assert pub.publish_count == 0

    def test_snapshot_to_dict(self):
        snap = StatsSnapshot(engaged_count=2, eliminated_total=1)
        data = snap.to_dict()
        assert data["engaged_count"] == 2
        assert data["integrity_percent"] == 100
        assert data["friendlies"] == []
