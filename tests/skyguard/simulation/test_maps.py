"""Tests for map presets and SimulationConfig validation."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from skyguard.simulation.formation import Formation
from skyguard.simulation.maps import (
    MapPreset,
    UnknownMapPresetError,
    get_map_preset,
    list_map_presets,
    load_map_preset,
    register_map_preset,
)
from skyguard.simulation.scenario import SimulationConfig

pytestmark = pytest.mark.unit


class TestBuiltinPresets:
    def test_four_presets(self):
        assert set(list_map_presets()) >= {"base", "city", "convoy", "airport"}

    def test_base_roster_order(self):
        labels = [a.label for a in get_map_preset("base").assets]
        assert labels == ["Command Center", "AA Gun", "AA Gun", "Radar", "Supply Depot"]

    def test_build_assets_full_health(self):
        assets = get_map_preset("city").build_assets()
        assert len(assets) == 5
        hospital = assets[0]
        assert hospital.label == "Hospital"
        assert hospital.position == (400, 300)
        assert hospital.priority == 10
        assert hospital.health == hospital.max_health == 2500

    def test_build_assets_returns_fresh_copies(self):
        preset = get_map_preset("convoy")
        first = preset.build_assets()
        first[0].apply_damage(100)
        second = preset.build_assets()
        assert second[0].health == second[0].max_health

    def test_asset_ids_unique(self):
        ids = [a.asset_id for a in get_map_preset("airport").build_assets()]
        assert len(set(ids)) == len(ids)

    def test_unknown_preset(self):
        with pytest.raises(UnknownMapPresetError):
            get_map_preset("moon")

    def test_unknown_preset_is_key_error(self):
        with pytest.raises(KeyError):
            get_map_preset("moon")


class TestLoadPreset:
    def test_load_from_json(self, tmp_path):
        path = tmp_path / "harbor.json"
        path.write_text(json.dumps({
            "preset_id": "harbor",
            "name": "Harbor",
            "assets": [
                {"label": "Crane", "x": 400, "y": 300, "size": 20,
                 "category": "crane", "priority": 6, "health": 900},
            ],
        }))
        preset = load_map_preset(path)
        assert preset.preset_id == "harbor"
        assert preset.assets[0].max_health == 900

    def test_invalid_asset_rejected(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({
            "preset_id": "bad", "name": "Bad",
            "assets": [{"label": "X", "x": 0, "y": 0, "size": -1,
                        "category": "x", "health": 10}],
        }))
        with pytest.raises(ValidationError):
            load_map_preset(path)

    def test_register_makes_preset_available(self):
        preset = MapPreset.model_validate({
            "preset_id": "test-outpost", "name": "Outpost",
            "assets": [{"label": "Bunker", "x": 100, "y": 100, "size": 10,
                        "category": "bunker", "health": 400}],
        })
        register_map_preset(preset)
        assert get_map_preset("test-outpost").name == "Outpost"
        assert SimulationConfig(map_preset="test-outpost").map_preset == "test-outpost"


class TestSimulationConfig:
    def test_defaults(self):
        cfg = SimulationConfig()
        assert cfg.map_preset == "base"
        assert cfg.friendly_count == 8
        assert cfg.hostile_count == 5
        assert cfg.formation is Formation.CIRCLE

    def test_formation_from_string(self):
        cfg = SimulationConfig(formation="double-file")
        assert cfg.formation is Formation.DOUBLE_FILE

    def test_unknown_map_rejected(self):
        with pytest.raises(ValidationError):
            SimulationConfig(map_preset="moon")

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            SimulationConfig(hostile_count=-1)

    def test_unknown_formation_rejected(self):
        with pytest.raises(ValidationError):
            SimulationConfig(formation="blob")
