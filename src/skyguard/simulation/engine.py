"""SimulationEngine -- one-step-at-a-time tick orchestrator.

Architecture
------------
The engine is the sole owner of every Drone and GroundAsset.  It does not
run its own loop: the host calls ``tick()`` once per display frame and may
stop calling at any time.  A tick runs to completion with no suspension
points.

Tick order (strict):

  1. effects.tick()            -- age and cull particles
  2. clear hostile jam flags
  3. friendly updates          -- sequential, later drones see earlier
                                  drones' changes in the same tick
  4. hostile updates           -- live hostiles only
  5. casualty partition        -- rebuild live rosters, archive destroyed
                                  assets, emit explosions, bump counters
  6. stats publish             -- rate-limited, eliminations flushed now

Configuration:
  Communication and jamming are passed to every ``tick()`` call and take
  effect immediately.  Map, counts and formation only change through
  ``initialize()``.

Determinism:
  Spawn jitter, autonomous choices, idle wander and effect particles draw
  from ``rng``; cooldowns and stats cadence read ``clock``.  Pass a seeded
  ``random.Random`` and a manual clock to make runs repeatable.

Events (EventBus):
  - ``simulation_initialized``: map, counts, formation
  - ``friendly_lost``:          friendly drone removed
  - ``target_eliminated``:      hostile drone removed
  - ``asset_destroyed``:        ground asset archived
  plus the effect and stats events of EffectsSystem and StatsPublisher.
"""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from loguru import logger

from skyguard.config import Settings, settings as default_settings
from skyguard.units import Allegiance, DroneCategory

from .behaviors import UnitBehaviors
from .combat import CombatSystem
from .effects import COLOR_ASSET_LOSS, COLOR_FRIENDLY_LOSS, COLOR_HOSTILE_LOSS, EffectsSystem
from .entities import Drone, GroundAsset
from .formation import Formation
from .geometry import centroid
from .jamming import JammingSystem
from .maps import get_map_preset
from .scenario import (
    SimulationConfig,
    spawn_friendly_bomber,
    spawn_friendly_interceptor,
    spawn_hostile_bomber,
    spawn_hostile_interceptor,
)
from .stats import StatsPublisher, StatsSnapshot, engagement_matrix
from .threat import ThreatAssessor

if TYPE_CHECKING:
    from skyguard.comms.event_bus import EventBus

_ASSET_EXPLOSION_SCALE = 2.5


class SimulationEngine:
    """Owns all entities and advances them one tick at a time."""

    def __init__(self, event_bus: EventBus | None = None,
                 rng: random.Random | None = None,
                 clock: Callable[[], float] = time.time,
                 settings: Settings | None = None) -> None:
        self._event_bus = event_bus
        self._rng = rng or random.Random()
        self._clock = clock
        self._settings = settings or default_settings

        self.effects = EffectsSystem(event_bus, rng=self._rng)
        self.combat = CombatSystem(self.effects, clock=clock,
                                   cooldown=self._settings.fire_cooldown)
        self.jamming = JammingSystem(self.effects, rng=self._rng)
        self.behaviors = UnitBehaviors(self.combat, self.jamming,
                                       assessor=ThreatAssessor(), rng=self._rng)
        self.stats = StatsPublisher(event_bus, clock=clock,
                                    interval=self._settings.stats_interval)

        self._config = SimulationConfig(map_preset=self._settings.default_map)
        self._friendlies: list[Drone] = []
        self._hostiles: list[Drone] = []
        self._assets: list[GroundAsset] = []
        self._destroyed_assets: list[GroundAsset] = []
        self._friendly_losses = 0
        self._tick_count = 0
        self._serials: dict[tuple[Allegiance, DroneCategory], int] = {}

    # -- read access --------------------------------------------------------

    @property
    def event_bus(self) -> EventBus | None:
        return self._event_bus

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def friendlies(self) -> list[Drone]:
        return list(self._friendlies)

    @property
    def hostiles(self) -> list[Drone]:
        return list(self._hostiles)

    @property
    def assets(self) -> list[GroundAsset]:
        return list(self._assets)

    @property
    def destroyed_assets(self) -> list[GroundAsset]:
        return list(self._destroyed_assets)

    @property
    def friendly_losses(self) -> int:
        return self._friendly_losses

    @property
    def eliminated_total(self) -> int:
        return self.stats.eliminated_total

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def snapshot(self) -> StatsSnapshot:
        return self.stats.snapshot

    @property
    def field_size(self) -> tuple[float, float]:
        return (self._settings.field_width, self._settings.field_height)

    def get_drone(self, drone_id: str) -> Drone | None:
        for d in self._friendlies:
            if d.drone_id == drone_id:
                return d
        for d in self._hostiles:
            if d.drone_id == drone_id:
                return d
        return None

    # -- lifecycle ----------------------------------------------------------

    def _next_serial(self, allegiance: Allegiance, category: DroneCategory) -> int:
        key = (allegiance, category)
        self._serials[key] = self._serials.get(key, 0) + 1
        return self._serials[key]

    def initialize(self, config: SimulationConfig | None = None) -> None:
        """Build a fresh battlespace from *config* and reset all counters."""
        if config is not None:
            self._config = config
        config = self._config
        width, height = self.field_size

        preset = get_map_preset(config.map_preset)
        self._assets = preset.build_assets()
        self._destroyed_assets = []
        self._friendly_losses = 0
        self._tick_count = 0
        self._serials = {}
        self.effects.clear()
        self.combat.reset()
        self.stats.reset()

        center = centroid(self._assets)
        self._friendlies = []
        for i in range(config.friendly_count):
            serial = self._next_serial(Allegiance.FRIENDLY, DroneCategory.INTERCEPTOR)
            self._friendlies.append(spawn_friendly_interceptor(
                serial, i, config.friendly_count, center, config.formation,
            ))
        for _ in range(config.friendly_bomber_count):
            serial = self._next_serial(Allegiance.FRIENDLY, DroneCategory.BOMBER)
            self._friendlies.append(spawn_friendly_bomber(serial, width, height, self._rng))

        self._hostiles = []
        for _ in range(config.hostile_count):
            serial = self._next_serial(Allegiance.HOSTILE, DroneCategory.INTERCEPTOR)
            self._hostiles.append(spawn_hostile_interceptor(serial, width, height, self._rng))
        for _ in range(config.hostile_bomber_count):
            serial = self._next_serial(Allegiance.HOSTILE, DroneCategory.BOMBER)
            self._hostiles.append(spawn_hostile_bomber(serial, width, height, self._rng))

        logger.info(
            f"Simulation initialized: map={preset.preset_id} "
            f"friendly={config.friendly_count}+{config.friendly_bomber_count}B "
            f"hostile={config.hostile_count}+{config.hostile_bomber_count}B "
            f"formation={config.formation.value}"
        )
        self._publish("simulation_initialized", {
            "map_preset": preset.preset_id,
            "map_name": preset.name,
            "friendly_count": len(self._friendlies),
            "hostile_count": len(self._hostiles),
            "asset_count": len(self._assets),
            "formation": config.formation.value,
        })

    def add_bomber(self, allegiance: Allegiance | str) -> Drone:
        """Add one bomber to a running simulation without a reset."""
        allegiance = Allegiance(allegiance)
        width, height = self.field_size
        serial = self._next_serial(allegiance, DroneCategory.BOMBER)
        if allegiance is Allegiance.FRIENDLY:
            drone = spawn_friendly_bomber(serial, width, height, self._rng)
            self._friendlies.append(drone)
        else:
            drone = spawn_hostile_bomber(serial, width, height, self._rng)
            self._hostiles.append(drone)
        logger.info(f"Bomber added: {drone.drone_id} ({allegiance.value})")
        return drone

    # -- tick ---------------------------------------------------------------

    def tick(self, communication: bool = True, jamming: bool = False) -> StatsSnapshot:
        """Advance the battlespace by one step.  Returns the current stats snapshot."""
        self._tick_count += 1
        formation = Formation(self._config.formation)

        self.effects.tick()

        for h in self._hostiles:
            h.is_jammed = False

        for drone in list(self._friendlies):
            if not drone.is_alive:
                continue
            self.behaviors.friendly_tick(
                drone, self._friendlies, self._hostiles, self._assets,
                communication, jamming, formation,
            )

        for drone in list(self._hostiles):
            if not drone.is_alive:
                continue
            self.behaviors.hostile_tick(drone, self._friendlies, self._assets)

        eliminated = self._remove_casualties()

        return self.stats.update(
            self._friendlies, self._hostiles, self._assets, self._destroyed_assets,
            self._friendly_losses, eliminated,
        )

    def run(self, ticks: int, communication: bool = True, jamming: bool = False,
            frame_interval: float = 0.0) -> StatsSnapshot:
        """Convenience loop for headless hosts: *ticks* steps, optional sleep between."""
        snapshot = self.stats.snapshot
        for _ in range(ticks):
            snapshot = self.tick(communication, jamming)
            if frame_interval > 0:
                time.sleep(frame_interval)
        return snapshot

    def _remove_casualties(self) -> int:
        """Partition out everything at zero health.  Returns hostiles eliminated."""
        surviving_friendlies: list[Drone] = []
        for d in self._friendlies:
            if d.is_alive:
                surviving_friendlies.append(d)
                continue
            self._friendly_losses += 1
            self.effects.explosion(d.position, COLOR_FRIENDLY_LOSS, source=d.drone_id)
            logger.debug(f"Friendly lost: {d.drone_id}")
            self._publish("friendly_lost", {
                "drone_id": d.drone_id,
                "category": d.category.value,
                "position": {"x": d.position[0], "y": d.position[1]},
            })
        self._friendlies = surviving_friendlies

        surviving_assets: list[GroundAsset] = []
        for a in self._assets:
            if a.is_alive:
                surviving_assets.append(a)
                continue
            a.archive()
            self._destroyed_assets.append(a)
            self.effects.explosion(a.position, COLOR_ASSET_LOSS,
                                   scale=_ASSET_EXPLOSION_SCALE, source=a.asset_id)
            logger.info(f"Asset destroyed: {a.label} ({a.asset_id})")
            self._publish("asset_destroyed", {
                "asset_id": a.asset_id,
                "label": a.label,
                "position": {"x": a.position[0], "y": a.position[1]},
            })
        self._assets = surviving_assets

        surviving_hostiles: list[Drone] = []
        eliminated = 0
        for d in self._hostiles:
            if d.is_alive:
                surviving_hostiles.append(d)
                continue
            eliminated += 1
            self.effects.explosion(d.position, COLOR_HOSTILE_LOSS, source=d.drone_id)
            logger.debug(f"Hostile eliminated: {d.drone_id}")
            self._publish("target_eliminated", {
                "target_id": d.drone_id,
                "category": d.category.value,
                "position": {"x": d.position[0], "y": d.position[1]},
            })
        self._hostiles = surviving_hostiles

        if eliminated:
            live_ids = {h.drone_id for h in self._hostiles}
            for f in self._friendlies:
                if f.target_id is not None and f.target_id not in live_ids:
                    f.clear_engagement()
        return eliminated

    # -- snapshots ----------------------------------------------------------

    def engagement_matrix(self) -> dict[str, dict[str, int]]:
        snap = self.stats.snapshot
        return engagement_matrix(snap.friendlies, snap.hostiles)

    def get_state(self) -> dict:
        """Full serializable state for renderers (read-only copies)."""
        return {
            "tick": self._tick_count,
            "config": self._config.model_dump(mode="json"),
            "friendlies": [d.to_dict() for d in self._friendlies],
            "hostiles": [d.to_dict() for d in self._hostiles],
            "assets": [a.to_dict() for a in self._assets],
            "destroyed_assets": [a.to_dict() for a in self._destroyed_assets],
            "particles": self.effects.get_particles(),
            "stats": self.stats.snapshot.to_dict(),
        }

    def _publish(self, event_type: str, data: dict) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event_type, data)
