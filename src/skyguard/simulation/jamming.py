"""JammingSystem -- per-tick electronic suppression by friendly drones.

Jamming is not sticky.  The engine clears every hostile's ``is_jammed``
flag at the start of a tick; each friendly then re-marks the hostiles inside
its JAMMING_RANGE.  A marked hostile:

  - takes JAM_DAMAGE_PER_TICK from every jammer covering it,
  - cannot fire this tick,
  - flies at JAM_SPEED_FACTOR of its nominal speed this tick.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .constants import JAM_DAMAGE_PER_TICK, JAM_SPARK_CHANCE, JAMMING_RANGE

if TYPE_CHECKING:
    from .effects import EffectsSystem
    from .entities import Drone


class JammingSystem:
    """Applies one friendly drone's jamming field to the hostile roster."""

    def __init__(self, effects: EffectsSystem, rng: random.Random | None = None) -> None:
        self._effects = effects
        self._rng = rng or random.Random()

    def apply(self, jammer: Drone, hostiles: Sequence[Drone]) -> list[str]:
        """Jam every live hostile within range of *jammer*.

        Records and returns the jammed ids on ``jammer.jamming_targets``.
        """
        jammed: list[str] = []
        for hostile in hostiles:
            if not hostile.is_alive:
                continue
            if jammer.distance_to(hostile.position) > JAMMING_RANGE:
                continue
            hostile.is_jammed = True
            hostile.apply_damage(JAM_DAMAGE_PER_TICK)
            jammed.append(hostile.drone_id)
            if self._rng.random() < JAM_SPARK_CHANCE:
                self._effects.jam_spark(hostile.position, jammer.drone_id, hostile.drone_id)
        jammer.jamming_targets = jammed
        return jammed

    @staticmethod
    def effective_speed(drone: Drone, factor: float) -> float:
        """Nominal speed scaled by *factor* when the drone is jammed."""
        speed = drone.nominal_speed
        if drone.is_jammed:
            speed *= factor
        return speed
