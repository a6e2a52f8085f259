"""SimulationConfig and spawn rules -- what ``initialize()`` builds from.

Spawn rules:
  - friendly interceptors start near their first formation slot around the
    asset centroid (see ``formation.spawn_offset``)
  - friendly bombers start anywhere in the left 30% of the field
  - hostile interceptors start on a random field edge
  - hostile bombers start within 100 units of the right edge
"""

from __future__ import annotations

import random

from pydantic import BaseModel, Field, field_validator

from skyguard.units import Allegiance, DroneCategory, get_type

from .entities import Drone
from .formation import Formation, spawn_offset
from .maps import UnknownMapPresetError, get_map_preset

MAX_COUNT = 200
FRIENDLY_BOMBER_ZONE = 0.3
HOSTILE_BOMBER_BAND = 100.0


class SimulationConfig(BaseModel):
    """Initialization payload.  Takes effect only at (re)initialization."""

    map_preset: str = "base"
    friendly_count: int = Field(default=8, ge=0, le=MAX_COUNT)
    hostile_count: int = Field(default=5, ge=0, le=MAX_COUNT)
    friendly_bomber_count: int = Field(default=0, ge=0, le=MAX_COUNT)
    hostile_bomber_count: int = Field(default=0, ge=0, le=MAX_COUNT)
    formation: Formation = Formation.CIRCLE

    @field_validator("map_preset")
    @classmethod
    def _known_preset(cls, value: str) -> str:
        try:
            get_map_preset(value)
        except UnknownMapPresetError:
            raise ValueError(f"unknown map preset {value!r}") from None
        return value


def drone_id(category: DroneCategory, allegiance: Allegiance, serial: int) -> str:
    return f"{get_type(category).id_prefix(allegiance)}-{serial}"


def spawn_friendly_interceptor(serial: int, index: int, roster_size: int,
                               center: tuple[float, float] | None,
                               formation: Formation) -> Drone:
    cx, cy = center if center is not None else (0.0, 0.0)
    dx, dy = spawn_offset(formation, index, roster_size)
    return Drone(
        drone_id=drone_id(DroneCategory.INTERCEPTOR, Allegiance.FRIENDLY, serial),
        position=(cx + dx, cy + dy),
        allegiance=Allegiance.FRIENDLY,
        category=DroneCategory.INTERCEPTOR,
    )


def spawn_friendly_bomber(serial: int, width: float, height: float,
                          rng: random.Random) -> Drone:
    return Drone(
        drone_id=drone_id(DroneCategory.BOMBER, Allegiance.FRIENDLY, serial),
        position=(rng.random() * width * FRIENDLY_BOMBER_ZONE, rng.random() * height),
        allegiance=Allegiance.FRIENDLY,
        category=DroneCategory.BOMBER,
    )


def edge_position(width: float, height: float, rng: random.Random) -> tuple[float, float]:
    """Uniform point on one of the four field edges (top, right, bottom, left)."""
    edge = rng.randrange(4)
    if edge == 0:
        return (rng.random() * width, 0.0)
    if edge == 1:
        return (width, rng.random() * height)
    if edge == 2:
        return (rng.random() * width, height)
    return (0.0, rng.random() * height)


def spawn_hostile_interceptor(serial: int, width: float, height: float,
                              rng: random.Random) -> Drone:
    return Drone(
        drone_id=drone_id(DroneCategory.INTERCEPTOR, Allegiance.HOSTILE, serial),
        position=edge_position(width, height, rng),
        allegiance=Allegiance.HOSTILE,
        category=DroneCategory.INTERCEPTOR,
    )


def spawn_hostile_bomber(serial: int, width: float, height: float,
                         rng: random.Random) -> Drone:
    return Drone(
        drone_id=drone_id(DroneCategory.BOMBER, Allegiance.HOSTILE, serial),
        position=(width - rng.random() * HOSTILE_BOMBER_BAND, rng.random() * height),
        allegiance=Allegiance.HOSTILE,
        category=DroneCategory.BOMBER,
    )
