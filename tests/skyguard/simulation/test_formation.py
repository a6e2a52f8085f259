"""Unit tests for formation slots, orbit and separation."""

from __future__ import annotations

import math

import pytest

from skyguard.simulation.entities import Drone
from skyguard.simulation.formation import (
    ORBIT_RADIUS,
    Formation,
    orbit_target,
    separation_correction,
    slot_offset,
    spawn_offset,
    triangular_row,
)
from skyguard.units import Allegiance

pytestmark = pytest.mark.unit


def _drone(did: str, x: float, y: float) -> Drone:
    return Drone(drone_id=did, position=(x, y), allegiance=Allegiance.FRIENDLY)


class TestSlots:
    @pytest.mark.parametrize("index,expected", [
        (0, (0.0, -75.0)),
        (1, (-50.0, -25.0)),
        (2, (50.0, -25.0)),
        (3, (-100.0, 25.0)),
    ])
    def test_arrowhead(self, index, expected):
        assert slot_offset(Formation.ARROWHEAD, index, 8) == pytest.approx(expected)

    @pytest.mark.parametrize("index,expected", [
        (0, (0.0, -75.0)),
        (1, (-25.0, -25.0)),
        (2, (25.0, -25.0)),
        (3, (-50.0, 25.0)),
    ])
    def test_spearhead(self, index, expected):
        assert slot_offset(Formation.SPEARHEAD, index, 8) == pytest.approx(expected)

    @pytest.mark.parametrize("index,expected", [
        (0, (-40.0, -50.0)),
        (1, (40.0, -50.0)),
        (2, (-40.0, 0.0)),
        (3, (40.0, 0.0)),
    ])
    def test_double_file(self, index, expected):
        assert slot_offset("double-file", index, 4) == pytest.approx(expected)

    def test_extended_line_centred(self):
        xs = [slot_offset(Formation.EXTENDED_LINE, i, 4)[0] for i in range(4)]
        assert xs == pytest.approx([-100.0, -50.0, 0.0, 50.0])

    def test_circle_has_no_slot(self):
        assert slot_offset(Formation.CIRCLE, 3, 8) == (0.0, 0.0)

    def test_unknown_formation(self):
        with pytest.raises(ValueError):
            slot_offset("blob", 0, 4)

    def test_triangular_row(self):
        assert [triangular_row(i) for i in range(6)] == [
            (0, 0), (1, 0), (1, 1), (2, 0), (2, 1), (2, 2),
        ]


class TestOrbit:
    def test_orbit_point_on_radius(self):
        target = orbit_target((500.0, 300.0), (400.0, 300.0))
        assert math.hypot(target[0] - 400, target[1] - 300) == pytest.approx(ORBIT_RADIUS)

    def test_orbit_advances_angle(self):
        target = orbit_target((520.0, 300.0), (400.0, 300.0))
        angle = math.atan2(target[1] - 300, target[0] - 400)
        assert angle == pytest.approx(0.02)


class TestSeparation:
    def test_single_neighbour(self):
        d = _drone("F-1", 0, 0)
        n = _drone("F-2", 20, 0)
        sx, sy = separation_correction(d, [d, n])
        assert sx == pytest.approx(-0.75)
        assert sy == pytest.approx(0.0)

    def test_outside_radius_ignored(self):
        d = _drone("F-1", 0, 0)
        n = _drone("F-2", 40, 0)
        assert separation_correction(d, [d, n]) == (0.0, 0.0)

    def test_coincident_skipped(self):
        d = _drone("F-1", 0, 0)
        n = _drone("F-2", 0, 0)
        assert separation_correction(d, [d, n]) == (0.0, 0.0)

    def test_dead_neighbour_ignored(self):
        d = _drone("F-1", 0, 0)
        n = _drone("F-2", 10, 0)
        n.health = 0
        assert separation_correction(d, [d, n]) == (0.0, 0.0)

    def test_symmetric_neighbours_cancel(self):
        d = _drone("F-1", 0, 0)
        left = _drone("F-2", -10, 0)
        right = _drone("F-3", 10, 0)
        sx, sy = separation_correction(d, [d, left, right])
        assert sx == pytest.approx(0.0)
        assert sy == pytest.approx(0.0)


class TestSpawnOffset:
    def test_circle_ring(self):
        dx, dy = spawn_offset(Formation.CIRCLE, 2, 8)
        assert math.hypot(dx, dy) == pytest.approx(150.0)

    def test_line_matches_slots(self):
        assert spawn_offset(Formation.EXTENDED_LINE, 1, 4) == slot_offset(
            Formation.EXTENDED_LINE, 1, 4)

    def test_wedge_zigzag(self):
        assert spawn_offset(Formation.ARROWHEAD, 2, 8) == (20.0, 20.0)
        assert spawn_offset(Formation.SPEARHEAD, 3, 8) == (-30.0, 30.0)
