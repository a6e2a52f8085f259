"""Entity model -- drones, ground assets, and their telemetry records.

A Drone references its target by id only.  The engine re-resolves that id
against the live hostile roster every tick, so a drone never holds on to a
removed entity.

Mutation rules:
  - A drone's position, velocity, trail and decision fields are written
    only by its own behavior update.
  - Health is written only through ``apply_damage`` (combat and jamming),
    and never goes up.
  - ``is_jammed`` is written by friendly jammers and cleared by the engine
    at the start of every tick.
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field

from skyguard.units import Allegiance, DroneCategory, UnitType, get_type

from .constants import ARRIVAL_EPSILON, TRAIL_LENGTH


@dataclass(frozen=True)
class DroneTelemetry:
    """Abbreviated per-drone record for display consumers."""

    drone_id: str
    position: tuple[float, float]
    target_id: str | None
    health: float
    is_engaging: bool
    is_jammed: bool
    category: str
    is_lost: bool

    def to_dict(self) -> dict:
        return {
            "id": self.drone_id,
            "x": self.position[0],
            "y": self.position[1],
            "target_id": self.target_id,
            "health": self.health,
            "is_engaging": self.is_engaging,
            "is_jammed": self.is_jammed,
            "category": self.category,
            "is_lost": self.is_lost,
        }


@dataclass(eq=False)
class Drone:
    """A single friendly or hostile drone."""

    drone_id: str
    position: tuple[float, float]
    allegiance: Allegiance
    category: DroneCategory = DroneCategory.INTERCEPTOR
    health: float | None = None
    max_health: float | None = None
    velocity: tuple[float, float] = (0.0, 0.0)
    target_id: str | None = None
    is_engaging: bool = False
    is_jammed: bool = False
    jamming_targets: list[str] = field(default_factory=list)
    trail: deque = field(default_factory=lambda: deque(maxlen=TRAIL_LENGTH))
    last_fired_at: float = -math.inf
    lost_mark: tuple[float, float] | None = None

    def __post_init__(self) -> None:
        self.allegiance = Allegiance(self.allegiance)
        self.category = DroneCategory(self.category)
        stats = self.unit_type.combat
        if self.max_health is None:
            self.max_health = stats.max_health
        if self.health is None:
            self.health = stats.health

    # -- derived ----------------------------------------------------------

    @property
    def unit_type(self) -> type[UnitType]:
        return get_type(self.category)

    @property
    def nominal_speed(self) -> float:
        return self.unit_type.speed_for(self.allegiance)

    @property
    def is_friendly(self) -> bool:
        return self.allegiance is Allegiance.FRIENDLY

    @property
    def is_bomber(self) -> bool:
        return self.category is DroneCategory.BOMBER

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def is_lost(self) -> bool:
        return self.lost_mark is not None

    def distance_to(self, point: tuple[float, float]) -> float:
        return math.hypot(self.position[0] - point[0], self.position[1] - point[1])

    # -- mutation ---------------------------------------------------------

    def move_toward(self, goal: tuple[float, float], speed: float) -> None:
        """Advance one tick toward *goal* at *speed* units per tick.

        The trail records the resulting position on every request, including
        when the drone is already within ARRIVAL_EPSILON and stays put.
        """
        dx = goal[0] - self.position[0]
        dy = goal[1] - self.position[1]
        dist = math.hypot(dx, dy)
        if dist > ARRIVAL_EPSILON:
            self.velocity = (dx / dist * speed, dy / dist * speed)
            self.position = (
                self.position[0] + self.velocity[0],
                self.position[1] + self.velocity[1],
            )
        self.trail.appendleft(self.position)

    def nudge(self, dx: float, dy: float) -> None:
        """Displace position directly (separation, idle jitter)."""
        self.position = (self.position[0] + dx, self.position[1] + dy)

    def apply_damage(self, amount: float) -> bool:
        """Reduce health by *amount*.  Returns True if this eliminated the drone."""
        if amount <= 0 or not self.is_alive:
            return False
        self.health -= amount
        return self.health <= 0

    def clear_engagement(self) -> None:
        self.target_id = None
        self.is_engaging = False

    # -- serialization ----------------------------------------------------

    def to_telemetry(self) -> DroneTelemetry:
        return DroneTelemetry(
            drone_id=self.drone_id,
            position=self.position,
            target_id=self.target_id if self.is_friendly else None,
            health=self.health,
            is_engaging=self.is_engaging,
            is_jammed=self.is_jammed,
            category=self.category.value,
            is_lost=self.is_lost,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.drone_id,
            "allegiance": self.allegiance.value,
            "category": self.category.value,
            "position": {"x": self.position[0], "y": self.position[1]},
            "velocity": {"x": self.velocity[0], "y": self.velocity[1]},
            "health": self.health,
            "max_health": self.max_health,
            "target_id": self.target_id,
            "is_engaging": self.is_engaging,
            "is_jammed": self.is_jammed,
            "jamming_targets": list(self.jamming_targets),
            "trail": [{"x": x, "y": y} for x, y in self.trail],
            "lost_mark": (
                {"x": self.lost_mark[0], "y": self.lost_mark[1]}
                if self.lost_mark is not None else None
            ),
        }


@dataclass(eq=False)
class GroundAsset:
    """A defended structure or vehicle on the ground."""

    asset_id: str
    label: str
    position: tuple[float, float]
    size: float
    category: str
    priority: float = 5.0
    health: float = 1000.0
    max_health: float = 1000.0

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def apply_damage(self, amount: float) -> bool:
        """Reduce health by *amount*.  Returns True if this destroyed the asset."""
        if amount <= 0 or not self.is_alive:
            return False
        self.health -= amount
        return self.health <= 0

    def archive(self) -> None:
        """Freeze a destroyed asset for the record."""
        self.health = 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.asset_id,
            "label": self.label,
            "position": {"x": self.position[0], "y": self.position[1]},
            "size": self.size,
            "category": self.category,
            "priority": self.priority,
            "health": self.health,
            "max_health": self.max_health,
        }
