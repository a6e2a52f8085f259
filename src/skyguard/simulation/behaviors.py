"""UnitBehaviors -- per-tick decision making for friendly and hostile drones.

Architecture
------------
UnitBehaviors is called once per live drone per tick by the engine.  Each
call reads the current rosters (already mutated by drones updated earlier in
the same tick) and writes only to the drone being updated, except for the
effects other rules define: damage, jam flags, and clearing a squadmate's
lost mark on reconnection.

Friendly drones pick one mode per tick, highest priority first:

  1. Autonomous (communication down): 70% seek the nearest asset, else the
     nearest hostile, else hover with random jitter.
  2. Rescue (communication up): clear the lost mark of any squadmate within
     RECONNECT_RADIUS, otherwise fly toward the first lost squadmate's last
     known position.  A rescue move ends the drone's tick.
  3. Engagement: ThreatAssessor picks a target; pursue and fire, or hold a
     defensive perimeter if the policy declines.
  4. Formation patrol when there is nothing to shoot at, followed by a
     separation pass.

Jamming, when enabled, applies only to drones that reach mode 3 or 4.
Autonomous and rescuing drones leave their electronics quiet that tick.

Hostile drones, when not jammed, fire at the nearest friendly inside firing
range (self-defense), else at the nearest asset inside firing range, else
close on a friendly inside 1.5x firing range.  They then keep moving toward
the nearest asset until inside 0.8x firing range.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TYPE_CHECKING

from loguru import logger

from .constants import (
    ASSET_STANDOFF_FACTOR,
    AUTONOMOUS_ASSET_CHANCE,
    DEFENSIVE_RADIUS,
    DEFENSIVE_SPEED_FACTOR,
    IDLE_JITTER,
    JAM_SPEED_FACTOR,
    LOST_DISTANCE,
    PURSUE_FRIENDLY_FACTOR,
    RECONNECT_RADIUS,
    RESCUE_SPEED_FACTOR,
)
from .formation import (
    ORBIT_SPEED_FACTOR,
    SLOT_SPEED_FACTOR,
    SLOT_TOLERANCE,
    Formation,
    orbit_target,
    separation_correction,
    slot_offset,
)
from .geometry import centroid, distance, nearest
from .threat import EngagementDecision, ThreatAssessor

if TYPE_CHECKING:
    from .combat import CombatSystem
    from .entities import Drone, GroundAsset
    from .jamming import JammingSystem


def _roster_index(drone: Drone, friendlies: Sequence[Drone]) -> int:
    for i, f in enumerate(friendlies):
        if f is drone:
            return i
    return -1


class UnitBehaviors:
    """Per-allegiance drone AI.  Called each tick to decide actions."""

    def __init__(self, combat: CombatSystem, jamming: JammingSystem,
                 assessor: ThreatAssessor | None = None,
                 rng: random.Random | None = None) -> None:
        self._combat = combat
        self._jamming = jamming
        self._assessor = assessor or ThreatAssessor()
        self._rng = rng or random.Random()

    @property
    def assessor(self) -> ThreatAssessor:
        return self._assessor

    # ------------------------------------------------------------------
    # Friendly
    # ------------------------------------------------------------------

    def friendly_tick(
        self,
        drone: Drone,
        friendlies: Sequence[Drone],
        hostiles: Sequence[Drone],
        assets: Sequence[GroundAsset],
        communication: bool,
        jamming: bool,
        formation: Formation,
    ) -> EngagementDecision | None:
        """Run one friendly drone's tick.  Returns the engagement decision, if one was made."""
        live_ids = {h.drone_id for h in hostiles if h.is_alive}
        if drone.target_id is not None and drone.target_id not in live_ids:
            drone.clear_engagement()

        drone.jamming_targets = []

        if not communication:
            self._autonomous(drone, hostiles, assets)
            return None

        if self._rescue(drone, friendlies):
            return None

        if jamming:
            self._jamming.apply(drone, hostiles)

        decision = self._assessor.assess(drone, hostiles, assets, friendlies, communication)
        if decision.target is None:
            drone.clear_engagement()
            self._patrol(drone, friendlies, assets, formation)
            return decision

        target = decision.target
        drone.target_id = target.drone_id
        drone.is_engaging = decision.engage
        if decision.engage:
            if drone.distance_to(target.position) <= self._combat.range_for(drone):
                self._combat.fire(drone, target)
            else:
                drone.move_toward(target.position, drone.nominal_speed)
        else:
            self._defensive_hold(drone, assets)
        return decision

    def _autonomous(self, drone: Drone, hostiles: Sequence[Drone],
                    assets: Sequence[GroundAsset]) -> None:
        """Comms down: no coordination, no engagement bookkeeping."""
        drone.clear_engagement()
        seek_asset = self._rng.random() < AUTONOMOUS_ASSET_CHANCE
        if seek_asset and assets:
            asset, _ = nearest(drone.position, assets)
            drone.move_toward(asset.position, drone.nominal_speed)
            return
        hostile, _ = nearest(drone.position, [h for h in hostiles if h.is_alive])
        if hostile is not None:
            drone.move_toward(hostile.position, drone.nominal_speed)
            return
        drone.nudge((self._rng.random() - 0.5) * IDLE_JITTER * 2,
                    (self._rng.random() - 0.5) * IDLE_JITTER * 2)

    def _rescue(self, drone: Drone, friendlies: Sequence[Drone]) -> bool:
        """Lost/reconnect protocol.  Returns True if a rescue move was made."""
        rescuing = False
        for friend in friendlies:
            if friend is drone or friend.lost_mark is None:
                continue
            if drone.distance_to(friend.position) < RECONNECT_RADIUS:
                friend.lost_mark = None
                logger.debug(f"{drone.drone_id} reconnected {friend.drone_id}")
            elif not rescuing:
                drone.move_toward(friend.lost_mark, drone.nominal_speed * RESCUE_SPEED_FACTOR)
                rescuing = True

        if len(friendlies) > 1 and drone.lost_mark is None:
            center = centroid(friendlies)
            if center is not None and drone.distance_to(center) > LOST_DISTANCE:
                drone.lost_mark = drone.position
                logger.debug(f"{drone.drone_id} lost contact at "
                             f"({drone.position[0]:.0f}, {drone.position[1]:.0f})")
        return rescuing

    def _defensive_hold(self, drone: Drone, assets: Sequence[GroundAsset]) -> None:
        center = centroid(assets)
        if center is None:
            return
        if distance(drone.position, center) > DEFENSIVE_RADIUS:
            drone.move_toward(center, drone.nominal_speed * DEFENSIVE_SPEED_FACTOR)

    def _patrol(self, drone: Drone, friendlies: Sequence[Drone],
                assets: Sequence[GroundAsset], formation: Formation) -> None:
        center = centroid(assets)
        if center is None:
            return
        index = _roster_index(drone, friendlies)
        if index == -1:
            return

        if formation is Formation.CIRCLE:
            drone.move_toward(orbit_target(drone.position, center),
                              drone.nominal_speed * ORBIT_SPEED_FACTOR)
        else:
            dx, dy = slot_offset(formation, index, len(friendlies))
            slot = (center[0] + dx, center[1] + dy)
            if distance(drone.position, slot) > SLOT_TOLERANCE:
                drone.move_toward(slot, drone.nominal_speed * SLOT_SPEED_FACTOR)

        sep_x, sep_y = separation_correction(drone, friendlies)
        if sep_x or sep_y:
            drone.nudge(sep_x, sep_y)

    # ------------------------------------------------------------------
    # Hostile
    # ------------------------------------------------------------------

    def hostile_tick(self, drone: Drone, friendlies: Sequence[Drone],
                     assets: Sequence[GroundAsset]) -> None:
        speed = self._jamming.effective_speed(drone, JAM_SPEED_FACTOR)
        weapon_range = self._combat.range_for(drone)

        asset, asset_dist = nearest(drone.position, [a for a in assets if a.is_alive])
        friendly, friendly_dist = nearest(drone.position, [f for f in friendlies if f.is_alive])

        if not drone.is_jammed:
            if friendly is not None and friendly_dist <= weapon_range:
                self._combat.fire(drone, friendly)
            elif asset is not None and asset_dist <= weapon_range:
                self._combat.fire(drone, asset)
            elif friendly is not None and friendly_dist <= weapon_range * PURSUE_FRIENDLY_FACTOR:
                drone.move_toward(friendly.position, speed)

        if asset is not None:
            if asset_dist > weapon_range * ASSET_STANDOFF_FACTOR:
                drone.move_toward(asset.position, speed)
        elif friendly is not None:
            drone.move_toward(friendly.position, speed)
