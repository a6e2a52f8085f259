"""Simulation subsystem -- entities, threat assessment, formations, combat, tick engine."""
from .behaviors import UnitBehaviors
from .combat import CombatSystem
from .effects import EffectsSystem, Particle
from .engine import SimulationEngine
from .entities import Drone, DroneTelemetry, GroundAsset
from .formation import Formation, orbit_target, separation_correction, slot_offset
from .jamming import JammingSystem
from .maps import (
    AssetSpec,
    MapPreset,
    UnknownMapPresetError,
    get_map_preset,
    list_map_presets,
    load_map_preset,
    register_map_preset,
)
from .scenario import SimulationConfig
from .stats import StatsPublisher, StatsSnapshot, base_integrity, count_threats, engagement_matrix
from .threat import EngagementDecision, ThreatAssessor, is_critical_threat

__all__ = [
    "AssetSpec",
    "CombatSystem",
    "Drone",
    "DroneTelemetry",
    "EffectsSystem",
    "EngagementDecision",
    "Formation",
    "GroundAsset",
    "JammingSystem",
    "MapPreset",
    "Particle",
    "SimulationConfig",
    "SimulationEngine",
    "StatsPublisher",
    "StatsSnapshot",
    "ThreatAssessor",
    "UnitBehaviors",
    "UnknownMapPresetError",
    "base_integrity",
    "count_threats",
    "engagement_matrix",
    "get_map_preset",
    "is_critical_threat",
    "list_map_presets",
    "load_map_preset",
    "orbit_target",
    "register_map_preset",
    "separation_correction",
    "slot_offset",
]
