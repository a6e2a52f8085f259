"""Tests for the airframe registry and combat profiles."""

from __future__ import annotations

import pytest

from skyguard.units import (
    Allegiance,
    Bomber,
    DroneCategory,
    Interceptor,
    all_types,
    get_type,
)

pytestmark = pytest.mark.unit


class TestRegistry:
    def test_lookup_by_enum(self):
        assert get_type(DroneCategory.INTERCEPTOR) is Interceptor
        assert get_type(DroneCategory.BOMBER) is Bomber

    def test_lookup_by_string(self):
        assert get_type("bomber") is Bomber

    def test_unknown_category_raises(self):
        with pytest.raises(ValueError):
            get_type("zeppelin")

    def test_all_types(self):
        assert set(all_types()) == {Interceptor, Bomber}


class TestCombatProfiles:
    def test_health(self):
        assert Interceptor.combat.health == 100.0
        assert Bomber.combat.health == 150.0
        assert Bomber.combat.max_health == 150.0

    def test_bomber_hits_ten_times_harder(self):
        i, b = Interceptor.combat, Bomber.combat
        assert b.intercept_damage == pytest.approx(i.intercept_damage * 10)
        assert b.defense_damage == pytest.approx(i.defense_damage * 10)
        assert b.strike_damage == pytest.approx(i.strike_damage * 10)

    def test_damage_values(self):
        assert Interceptor.combat.intercept_damage == 2.0
        assert Interceptor.combat.defense_damage == 1.5
        assert Interceptor.combat.strike_damage == 5.0
        assert Bomber.combat.strike_damage == 50.0

    def test_combat_stats_frozen(self):
        with pytest.raises(Exception):
            Interceptor.combat.health = 1.0


class TestSpeedsAndIds:
    def test_speeds_by_allegiance(self):
        assert Interceptor.speed_for(Allegiance.FRIENDLY) == 2.0
        assert Interceptor.speed_for(Allegiance.HOSTILE) == 1.5
        assert Bomber.speed_for(Allegiance.FRIENDLY) == 2.0
        assert Bomber.speed_for(Allegiance.HOSTILE) == 1.2

    def test_id_prefixes(self):
        assert Interceptor.id_prefix(Allegiance.FRIENDLY) == "F"
        assert Interceptor.id_prefix(Allegiance.HOSTILE) == "H"
        assert Bomber.id_prefix(Allegiance.FRIENDLY) == "B"
        assert Bomber.id_prefix(Allegiance.HOSTILE) == "HB"
