"""Base classes for the unit type system.

Allegiance     -- which swarm a drone belongs to
DroneCategory  -- interceptor or bomber airframe
CombatStats    -- frozen dataclass for health and weapon stats
UnitType       -- abstract base every concrete airframe subclasses
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class Allegiance(str, Enum):
    """Which side of the engagement a drone flies for."""
    FRIENDLY = "friendly"
    HOSTILE = "hostile"


class DroneCategory(str, Enum):
    """Airframe class.  Determines health, speed and damage profile."""
    INTERCEPTOR = "interceptor"
    BOMBER = "bomber"


@dataclass(frozen=True)
class CombatStats:
    """Immutable combat profile for an airframe.

    Damage depends on who fires at what:
      intercept_damage -- friendly airframe firing at a hostile drone
      defense_damage   -- hostile airframe firing back at a friendly drone
      strike_damage    -- hostile airframe firing at a ground asset

    weapon_range is the hitscan reach and weapon_cooldown the minimum
    seconds between shots.
    """
    health: float
    max_health: float
    weapon_range: float
    weapon_cooldown: float
    intercept_damage: float
    defense_damage: float
    strike_damage: float


class UnitType:
    """Abstract base for every airframe definition.

    Subclasses MUST set all ClassVar fields.
    """

    # -- identity --
    category: ClassVar[DroneCategory]
    friendly_prefix: ClassVar[str]
    hostile_prefix: ClassVar[str]

    # -- movement (units per tick) --
    friendly_speed: ClassVar[float]
    hostile_speed: ClassVar[float]

    # -- combat --
    combat: ClassVar[CombatStats]

    # -- helpers --

    @classmethod
    def speed_for(cls, allegiance: Allegiance) -> float:
        if allegiance is Allegiance.FRIENDLY:
            return cls.friendly_speed
        return cls.hostile_speed

    @classmethod
    def id_prefix(cls, allegiance: Allegiance) -> str:
        if allegiance is Allegiance.FRIENDLY:
            return cls.friendly_prefix
        return cls.hostile_prefix

    def __repr__(self) -> str:
        return f"<UnitType {self.category.value}>"
