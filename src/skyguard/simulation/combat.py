"""CombatSystem -- fire-rate limiting and immediate damage resolution.

Shots are hitscan: a successful ``fire()`` applies damage on the spot and
emits a hit effect.  There are no projectiles in flight.

Range and cooldown come from the firing airframe's ``CombatStats``.  A
cooldown passed to the constructor overrides every airframe's value.

Rate limiting is measured against the injected clock, not against ticks, so
the effective fire rate depends on how often the host ticks.  Tests pass a
manual clock to step time explicitly.

Damage by pairing (see ``skyguard.units`` for the numbers):

  friendly airframe  -> hostile drone    intercept_damage
  hostile airframe   -> friendly drone   defense_damage
  hostile airframe   -> ground asset     strike_damage
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from .effects import COLOR_FRIENDLY_FIRE, COLOR_HOSTILE_FIRE, COLOR_STRIKE
from .entities import Drone, GroundAsset

if TYPE_CHECKING:
    from .effects import EffectsSystem


class CombatSystem:
    """Resolves shots between drones and against ground assets."""

    def __init__(self, effects: EffectsSystem,
                 clock: Callable[[], float] = time.time,
                 cooldown: float | None = None) -> None:
        self._effects = effects
        self._clock = clock
        self._cooldown = cooldown
        self.shots_fired = 0
        self.damage_dealt = 0.0

    @property
    def cooldown(self) -> float | None:
        """Cooldown override, or None when each airframe uses its own."""
        return self._cooldown

    def cooldown_for(self, source: Drone) -> float:
        if self._cooldown is not None:
            return self._cooldown
        return source.unit_type.combat.weapon_cooldown

    @staticmethod
    def range_for(source: Drone) -> float:
        return source.unit_type.combat.weapon_range

    def can_fire(self, source: Drone) -> bool:
        if source.is_jammed or not source.is_alive:
            return False
        return self._clock() - source.last_fired_at >= self.cooldown_for(source)

    @staticmethod
    def damage_for(source: Drone, victim: Drone | GroundAsset) -> float:
        stats = source.unit_type.combat
        if isinstance(victim, GroundAsset):
            return stats.strike_damage
        if source.is_friendly:
            return stats.intercept_damage
        return stats.defense_damage

    def fire(self, source: Drone, victim: Drone | GroundAsset) -> bool:
        """Fire from *source* at *victim*.

        Returns True if the shot was taken (and landed).  Returns False when
        the source is jammed, cooling down, or out of range, or the victim is
        already dead.
        """
        if not victim.is_alive or not self.can_fire(source):
            return False
        if source.distance_to(victim.position) > self.range_for(source):
            return False

        source.last_fired_at = self._clock()
        damage = self.damage_for(source, victim)
        victim.apply_damage(damage)
        self.shots_fired += 1
        self.damage_dealt += damage

        if isinstance(victim, GroundAsset):
            color = COLOR_STRIKE
            victim_id = victim.asset_id
        else:
            color = COLOR_FRIENDLY_FIRE if source.is_friendly else COLOR_HOSTILE_FIRE
            victim_id = victim.drone_id

        self._effects.hit(victim.position, color, {
            "source_id": source.drone_id,
            "target_id": victim_id,
            "damage": damage,
            "remaining_health": victim.health,
            "position": {"x": victim.position[0], "y": victim.position[1]},
        })
        return True

    def reset(self) -> None:
        self.shots_fired = 0
        self.damage_dealt = 0.0
