"""Map presets -- named, ordered ground-asset rosters.

Presets are static input data.  The four built-in maps ship with the
package; additional maps can be loaded from JSON and registered:

    preset = load_map_preset("maps/harbor.json")
    register_map_preset(preset)
    engine.initialize(SimulationConfig(map_preset=preset.preset_id))

JSON format::

    {"preset_id": "harbor", "name": "Harbor",
     "assets": [{"label": "Crane", "x": 400, "y": 300, "size": 20,
                 "category": "crane", "priority": 6, "health": 900}]}
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from .entities import GroundAsset


class UnknownMapPresetError(KeyError):
    """Raised when a map preset name is not registered."""


class AssetSpec(BaseModel):
    """One ground asset in a preset."""

    label: str
    x: float
    y: float
    size: float = Field(gt=0)
    category: str
    priority: float = Field(default=5.0, ge=0)
    health: float = Field(gt=0)
    max_health: float | None = None

    @model_validator(mode="after")
    def _default_max_health(self) -> "AssetSpec":
        if self.max_health is None:
            self.max_health = self.health
        return self


class MapPreset(BaseModel):
    """A named, ordered list of ground assets."""

    preset_id: str
    name: str
    assets: list[AssetSpec]

    def build_assets(self) -> list[GroundAsset]:
        """Fresh GroundAsset instances, in preset order, at full health."""
        return [
            GroundAsset(
                asset_id=f"{self.preset_id}-{i + 1}",
                label=spec.label,
                position=(spec.x, spec.y),
                size=spec.size,
                category=spec.category,
                priority=spec.priority,
                health=spec.max_health,
                max_health=spec.max_health,
            )
            for i, spec in enumerate(self.assets)
        ]


def _asset(label: str, x: float, y: float, size: float, category: str,
           priority: float, health: float) -> AssetSpec:
    return AssetSpec(label=label, x=x, y=y, size=size, category=category,
                     priority=priority, health=health)


_PRESETS: dict[str, MapPreset] = {
    "base": MapPreset(preset_id="base", name="Military Base", assets=[
        _asset("Command Center", 400, 300, 30, "command", 10, 3000),
        _asset("AA Gun", 300, 280, 20, "aa", 7, 1000),
        _asset("AA Gun", 500, 320, 20, "aa", 7, 1000),
        _asset("Radar", 350, 350, 15, "radar", 8, 800),
        _asset("Supply Depot", 450, 250, 15, "supply", 5, 1200),
    ]),
    "city": MapPreset(preset_id="city", name="Urban Area", assets=[
        _asset("Hospital", 400, 300, 35, "hospital", 10, 2500),
        _asset("Office Tower", 300, 250, 25, "building", 6, 1500),
        _asset("Apartment", 500, 280, 25, "building", 8, 1500),
        _asset("Power Station", 350, 380, 20, "power", 9, 2000),
        _asset("School", 480, 360, 18, "building", 9, 1500),
    ]),
    "convoy": MapPreset(preset_id="convoy", name="Supply Convoy", assets=[
        _asset("Supply Truck", 350, 300, 18, "vehicle", 6, 500),
        _asset("Supply Truck", 400, 300, 18, "vehicle", 6, 500),
        _asset("Supply Truck", 450, 300, 18, "vehicle", 6, 500),
        _asset("APC", 320, 300, 20, "armor", 8, 800),
        _asset("Tank", 480, 300, 20, "armor", 7, 1200),
    ]),
    "airport": MapPreset(preset_id="airport", name="Military Airfield", assets=[
        _asset("Control Tower", 400, 280, 30, "tower", 9, 2000),
        _asset("Hangar 1", 300, 320, 22, "hangar", 7, 2500),
        _asset("Hangar 2", 500, 320, 22, "hangar", 7, 2500),
        _asset("Fuel Depot", 400, 360, 18, "fuel", 10, 1000),
        _asset("Radar", 350, 240, 16, "radar", 8, 800),
    ]),
}


def get_map_preset(preset_id: str) -> MapPreset:
    try:
        return _PRESETS[preset_id]
    except KeyError:
        raise UnknownMapPresetError(preset_id) from None


def list_map_presets() -> list[str]:
    return list(_PRESETS)


def register_map_preset(preset: MapPreset) -> None:
    """Add or replace a preset under its ``preset_id``."""
    _PRESETS[preset.preset_id] = preset


def load_map_preset(path: str | Path) -> MapPreset:
    """Load a MapPreset from a JSON file (see module docstring)."""
    with open(path) as f:
        data = json.load(f)
    return MapPreset.model_validate(data)
