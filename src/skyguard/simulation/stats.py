"""StatsPublisher -- rate-limited aggregate statistics for display consumers.

Full snapshots (counts, integrity, per-drone telemetry) are rebuilt at most
once per ``interval`` seconds of clock time.  Eliminations are the exception:
a tick that removes hostiles always bumps ``eliminated_total`` on the
current snapshot and republishes it, so the kill counter never lags behind
a scheduled refresh.

Events:
  - ``stats_snapshot``: full snapshot (``flush`` false) or elimination
    flush (``flush`` true)
"""

from __future__ import annotations

import dataclasses
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

from .constants import THREATENING_RANGE
from .geometry import distance

if TYPE_CHECKING:
    from skyguard.comms.event_bus import EventBus
    from .entities import Drone, DroneTelemetry, GroundAsset

DEFAULT_INTERVAL = 0.1


@dataclass(frozen=True)
class StatsSnapshot:
    """Aggregate engagement statistics plus abbreviated telemetry."""

    engaged_count: int = 0
    threats_in_range: int = 0
    eliminated_total: int = 0
    integrity_percent: int = 100
    friendly_losses: int = 0
    friendlies: tuple[DroneTelemetry, ...] = field(default_factory=tuple)
    hostiles: tuple[DroneTelemetry, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "engaged_count": self.engaged_count,
            "threats_in_range": self.threats_in_range,
            "eliminated_total": self.eliminated_total,
            "integrity_percent": self.integrity_percent,
            "friendly_losses": self.friendly_losses,
            "friendlies": [t.to_dict() for t in self.friendlies],
            "hostiles": [t.to_dict() for t in self.hostiles],
        }


def count_threats(hostiles: Sequence[Drone], assets: Sequence[GroundAsset]) -> int:
    """Hostiles inside the threatening range of at least one live asset."""
    return sum(
        1 for h in hostiles
        if any(distance(h.position, a.position) <= THREATENING_RANGE for a in assets)
    )


def base_integrity(assets: Sequence[GroundAsset], destroyed: Sequence[GroundAsset]) -> int:
    """Remaining asset health as a rounded percentage of total max health.

    Destroyed assets count with zero health.  No assets at all reads 0.
    """
    total_health = sum(max(a.health, 0.0) for a in assets)
    total_max = sum(a.max_health for a in assets) + sum(a.max_health for a in destroyed)
    if total_max <= 0:
        return 0
    return round(total_health / total_max * 100)


def engagement_matrix(friendlies: Sequence[DroneTelemetry],
                      hostiles: Sequence[DroneTelemetry]) -> dict[str, dict[str, int]]:
    """Rounded friendly x hostile distance table keyed by drone id."""
    return {
        f.drone_id: {h.drone_id: round(distance(f.position, h.position)) for h in hostiles}
        for f in friendlies
    }


class StatsPublisher:
    """Builds snapshots on a fixed cadence and flushes eliminations immediately."""

    def __init__(self, event_bus: EventBus | None = None,
                 clock: Callable[[], float] = time.time,
                 interval: float = DEFAULT_INTERVAL) -> None:
        self._event_bus = event_bus
        self._clock = clock
        self._interval = interval
        self._last_publish = -float("inf")
        self._snapshot = StatsSnapshot()
        self._eliminated_total = 0
        self.publish_count = 0

    @property
    def snapshot(self) -> StatsSnapshot:
        return self._snapshot

    @property
    def eliminated_total(self) -> int:
        return self._eliminated_total

    def reset(self) -> None:
        self._last_publish = -float("inf")
        self._snapshot = StatsSnapshot()
        self._eliminated_total = 0
        self.publish_count = 0

    def update(
        self,
        friendlies: Sequence[Drone],
        hostiles: Sequence[Drone],
        assets: Sequence[GroundAsset],
        destroyed: Sequence[GroundAsset],
        friendly_losses: int,
        eliminated_this_tick: int,
    ) -> StatsSnapshot:
        """Fold one tick into the published statistics.  Returns the current snapshot."""
        self._eliminated_total += eliminated_this_tick
        now = self._clock()

        if now - self._last_publish > self._interval:
            self._snapshot = StatsSnapshot(
                engaged_count=sum(1 for f in friendlies if f.is_engaging),
                threats_in_range=count_threats(hostiles, assets),
                eliminated_total=self._eliminated_total,
                integrity_percent=base_integrity(assets, destroyed),
                friendly_losses=friendly_losses,
                friendlies=tuple(f.to_telemetry() for f in friendlies),
                hostiles=tuple(h.to_telemetry() for h in hostiles),
            )
            self._last_publish = now
            self._publish(flush=False)
        elif eliminated_this_tick > 0:
            self._snapshot = dataclasses.replace(
                self._snapshot, eliminated_total=self._eliminated_total,
            )
            self._publish(flush=True)
        return self._snapshot

    def _publish(self, flush: bool) -> None:
        self.publish_count += 1
        logger.debug(f"stats publish #{self.publish_count} "
                     f"(flush={flush}, eliminated={self._eliminated_total})")
        if self._event_bus is not None:
            data = self._snapshot.to_dict()
            data["flush"] = flush
            self._event_bus.publish("stats_snapshot", data)
