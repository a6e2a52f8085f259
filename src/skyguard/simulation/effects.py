"""EffectsSystem -- cosmetic particles and their events.

Particles carry no gameplay weight.  They exist so a renderer can draw
explosions, hit sparks and jamming crackle from the engine's snapshot, and
each burst is also published on the EventBus for consumers that prefer
events over polling.

Events:
  - ``explosion``:       entity removed (drone or asset), with scale
  - ``projectile_hit``:  a shot landed
  - ``jam_spark``:       a jammer crackled over a hostile
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from skyguard.comms.event_bus import EventBus

PARTICLE_DECAY = 0.95
EXPLOSION_PARTICLES = 20

COLOR_FRIENDLY_FIRE = "#fbbf24"
COLOR_HOSTILE_FIRE = "#ef4444"
COLOR_STRIKE = "#f97316"
COLOR_JAM = "#a855f7"
COLOR_FRIENDLY_LOSS = "#3b82f6"
COLOR_ASSET_LOSS = "#f59e0b"
COLOR_HOSTILE_LOSS = "#f97316"


@dataclass
class Particle:
    position: tuple[float, float]
    velocity: tuple[float, float]
    life: float
    max_life: float
    color: str
    size: float

    def to_dict(self) -> dict:
        return {
            "x": self.position[0],
            "y": self.position[1],
            "life": self.life,
            "max_life": self.max_life,
            "color": self.color,
            "size": self.size,
        }


class EffectsSystem:
    """Owns the particle list and publishes effect events."""

    def __init__(self, event_bus: EventBus | None = None,
                 rng: random.Random | None = None) -> None:
        self._event_bus = event_bus
        self._rng = rng or random.Random()
        self._particles: list[Particle] = []

    @property
    def particle_count(self) -> int:
        return len(self._particles)

    def tick(self) -> None:
        """Advance every particle one frame and drop the expired ones."""
        alive: list[Particle] = []
        for p in self._particles:
            p.position = (p.position[0] + p.velocity[0], p.position[1] + p.velocity[1])
            p.life -= 1
            p.size *= PARTICLE_DECAY
            if p.life > 0:
                alive.append(p)
        self._particles = alive

    def _spread(self, magnitude: float) -> float:
        return (self._rng.random() - 0.5) * magnitude

    def hit(self, position: tuple[float, float], color: str, payload: dict) -> None:
        """Two sparks at the impact point plus a ``projectile_hit`` event."""
        for _ in range(2):
            self._particles.append(Particle(
                position=(position[0] + self._spread(10), position[1] + self._spread(10)),
                velocity=(self._spread(4), self._spread(4)),
                life=10 + self._rng.random() * 10,
                max_life=20,
                color=color,
                size=1 + self._rng.random() * 2,
            ))
        self._publish("projectile_hit", payload)

    def jam_spark(self, position: tuple[float, float], jammer_id: str, target_id: str) -> None:
        self._particles.append(Particle(
            position=(position[0] + self._spread(10), position[1] + self._spread(10)),
            velocity=(self._spread(2), self._spread(2)),
            life=10,
            max_life=10,
            color=COLOR_JAM,
            size=1.5,
        ))
        self._publish("jam_spark", {
            "jammer_id": jammer_id,
            "target_id": target_id,
            "position": {"x": position[0], "y": position[1]},
        })

    def explosion(self, position: tuple[float, float], color: str,
                  scale: float = 1.0, source: str = "") -> None:
        count = int(EXPLOSION_PARTICLES * scale)
        for _ in range(count):
            self._particles.append(Particle(
                position=position,
                velocity=(self._spread(8 * scale), self._spread(8 * scale)),
                life=20 + self._rng.random() * 20,
                max_life=40,
                color=color,
                size=(2 + self._rng.random() * 4) * scale,
            ))
        self._publish("explosion", {
            "source": source,
            "position": {"x": position[0], "y": position[1]},
            "scale": scale,
            "color": color,
        })

    def get_particles(self) -> list[dict]:
        return [p.to_dict() for p in self._particles]

    def clear(self) -> None:
        self._particles.clear()

    def _publish(self, event_type: str, data: dict) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event_type, data)
