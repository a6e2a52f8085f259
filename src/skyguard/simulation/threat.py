"""ThreatAssessor -- per-drone target scoring and engagement policy.

Each friendly drone scores every live hostile independently; there is no
central allocator.  Coordination emerges from two terms that read the rest
of the roster:

  - a saturation penalty (communication only) that pushes drones away from
    hostiles already targeted by squadmates, and
  - the engagement ratio cap, which lets a drone decline a non-critical
    target when 30% of the swarm is already on it.

Score components for hostile ``h`` seen from drone ``d``:

  +1000 + 10 * priority   h within THREATENING_RANGE of its nearest asset
  +2000 / -500            d is an interceptor and friendly bombers are up:
                          favour hostile interceptors, leave bombers alone
  +500                    otherwise, for hostile bombers
  +100                    every hostile (ground-attack capability)
  +50 / (dist + 1)        proximity to d
  -30 * n                 n other friendlies targeting h (communication on)

The highest score wins.  Ties keep the first hostile in roster order.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from skyguard.units import DroneCategory

from .constants import ENGAGE_DISTANCE, ENGAGE_RATIO_CAP, THREATENING_RANGE
from .geometry import nearest

if TYPE_CHECKING:
    from .entities import Drone, GroundAsset

_CRITICAL_BONUS = 1000.0
_PRIORITY_WEIGHT = 10.0
_DEFAULT_PRIORITY = 5.0
_ESCORTED_INTERCEPTOR_BONUS = 2000.0
_ESCORTED_BOMBER_PENALTY = -500.0
_BOMBER_BONUS = 500.0
_GROUND_ATTACK_BONUS = 100.0
_PROXIMITY_WEIGHT = 50.0
_SATURATION_PENALTY = 30.0


@dataclass
class EngagementDecision:
    """Outcome of one drone's assessment for one tick."""

    target: Drone | None
    score: float = -math.inf
    critical: bool = False
    engage: bool = False


def nearest_asset(hostile: Drone, assets: Sequence[GroundAsset]) -> tuple[GroundAsset | None, float]:
    return nearest(hostile.position, assets)


def is_critical_threat(hostile: Drone, assets: Sequence[GroundAsset]) -> bool:
    """True when *hostile* is inside the threatening range of any asset."""
    _, dist = nearest_asset(hostile, assets)
    return dist <= THREATENING_RANGE


def friendly_bombers_up(friendlies: Sequence[Drone]) -> bool:
    return any(f.is_bomber and f.is_alive for f in friendlies)


def count_targeting(drone: Drone, hostile_id: str, friendlies: Sequence[Drone],
                    engaging_only: bool = False) -> int:
    """Other friendlies whose target is *hostile_id* (optionally only engaging ones)."""
    count = 0
    for f in friendlies:
        if f is drone or f.target_id != hostile_id:
            continue
        if engaging_only and not f.is_engaging:
            continue
        count += 1
    return count


class ThreatAssessor:
    """Scores hostiles and decides whether a drone commits to its pick."""

    def threat_score(self, drone: Drone, hostile: Drone, assets: Sequence[GroundAsset],
                     friendlies: Sequence[Drone], communication: bool,
                     bombers_up: bool | None = None) -> float:
        score = 0.0

        asset, dist = nearest_asset(hostile, assets)
        if asset is not None and dist <= THREATENING_RANGE:
            priority = asset.priority or _DEFAULT_PRIORITY
            score += _CRITICAL_BONUS + priority * _PRIORITY_WEIGHT

        if bombers_up is None:
            bombers_up = friendly_bombers_up(friendlies)
        if drone.category is DroneCategory.INTERCEPTOR and bombers_up:
            if hostile.category is DroneCategory.INTERCEPTOR:
                score += _ESCORTED_INTERCEPTOR_BONUS
            else:
                score += _ESCORTED_BOMBER_PENALTY
        elif hostile.category is DroneCategory.BOMBER:
            score += _BOMBER_BONUS

        score += _GROUND_ATTACK_BONUS
        score += _PROXIMITY_WEIGHT / (drone.distance_to(hostile.position) + 1.0)

        if communication:
            score -= count_targeting(drone, hostile.drone_id, friendlies) * _SATURATION_PENALTY

        return score

    def select_target(self, drone: Drone, hostiles: Sequence[Drone],
                      assets: Sequence[GroundAsset], friendlies: Sequence[Drone],
                      communication: bool) -> tuple[Drone | None, float]:
        """Highest-scoring live hostile, first one on ties."""
        bombers_up = friendly_bombers_up(friendlies)
        best: Drone | None = None
        best_score = -math.inf
        for hostile in hostiles:
            if not hostile.is_alive:
                continue
            score = self.threat_score(drone, hostile, assets, friendlies,
                                      communication, bombers_up=bombers_up)
            if score > best_score:
                best = hostile
                best_score = score
        return best, best_score

    def should_engage(self, drone: Drone, target: Drone, friendlies: Sequence[Drone]) -> bool:
        """Non-critical policy: close enough, or the target is under-subscribed."""
        if drone.distance_to(target.position) < ENGAGE_DISTANCE:
            return True
        if not friendlies:
            return True
        engagers = count_targeting(drone, target.drone_id, friendlies, engaging_only=True)
        return engagers / len(friendlies) < ENGAGE_RATIO_CAP

    def assess(self, drone: Drone, hostiles: Sequence[Drone], assets: Sequence[GroundAsset],
               friendlies: Sequence[Drone], communication: bool) -> EngagementDecision:
        target, score = self.select_target(drone, hostiles, assets, friendlies, communication)
        if target is None:
            return EngagementDecision(target=None)
        critical = is_critical_threat(target, assets)
        engage = critical or self.should_engage(drone, target, friendlies)
        return EngagementDecision(target=target, score=score, critical=critical, engage=engage)
