"""Formation geometry -- patrol slots around the asset centroid.

Slots are offsets from the asset centroid, indexed by a drone's position in
the friendly roster.  Screen coordinates: +x right, +y down, so negative y
offsets sit "north" of the centroid.

  circle         orbit at ORBIT_RADIUS, advancing ORBIT_STEP rad per tick
  arrowhead      V with the apex (index 0) leading, rows alternate L/R
  spearhead      filled triangle, one more slot per row
  double-file    two parallel columns, side alternates by parity
  extended-line  single rank centred on the roster midpoint
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .entities import Drone

SLOT_SPACING = 50.0
ORBIT_RADIUS = 120.0
ORBIT_STEP = 0.02
SLOT_TOLERANCE = 5.0
SEPARATION_RADIUS = 40.0
SEPARATION_GAIN = 1.5
ORBIT_SPEED_FACTOR = 0.3
SLOT_SPEED_FACTOR = 0.5

_ARROW_APEX_Y = -SLOT_SPACING * 1.5
_DOUBLE_FILE_HALF_WIDTH = SLOT_SPACING * 0.8


class Formation(str, Enum):
    CIRCLE = "circle"
    ARROWHEAD = "arrowhead"
    SPEARHEAD = "spearhead"
    DOUBLE_FILE = "double-file"
    EXTENDED_LINE = "extended-line"


def triangular_row(index: int) -> tuple[int, int]:
    """Decompose *index* into (row, column) of a triangle with row r holding r+1 slots."""
    remaining = index
    row = 0
    while remaining >= row + 1:
        remaining -= row + 1
        row += 1
    return row, remaining


def slot_offset(formation: Formation | str, index: int, roster_size: int) -> tuple[float, float]:
    """Offset of slot *index* from the asset centroid.

    Circle has no fixed slots; callers use ``orbit_target`` instead, and this
    returns (0, 0) for it.
    """
    formation = Formation(formation)
    spacing = SLOT_SPACING

    if formation is Formation.ARROWHEAD:
        if index == 0:
            return (0.0, _ARROW_APEX_Y)
        row = (index + 1) // 2
        side = 1 if index % 2 == 0 else -1
        return (side * row * spacing, _ARROW_APEX_Y + row * spacing)

    if formation is Formation.SPEARHEAD:
        row, col = triangular_row(index)
        row_width = (row + 1) * spacing
        start_x = -row_width / 2 + spacing / 2
        return (start_x + col * spacing, (row - 1.5) * spacing)

    if formation is Formation.DOUBLE_FILE:
        row = index // 2
        side = -1 if index % 2 == 0 else 1
        return (side * _DOUBLE_FILE_HALF_WIDTH, (row - roster_size / 4) * spacing)

    if formation is Formation.EXTENDED_LINE:
        return ((index - roster_size / 2) * spacing, 0.0)

    return (0.0, 0.0)


def orbit_target(position: tuple[float, float], center: tuple[float, float]) -> tuple[float, float]:
    """Next point on the patrol orbit, ORBIT_STEP ahead of the current bearing."""
    angle = math.atan2(position[1] - center[1], position[0] - center[0]) + ORBIT_STEP
    return (center[0] + math.cos(angle) * ORBIT_RADIUS,
            center[1] + math.sin(angle) * ORBIT_RADIUS)


def separation_correction(drone: Drone, friendlies: Sequence[Drone],
                          radius: float = SEPARATION_RADIUS) -> tuple[float, float]:
    """Summed repulsion from live squadmates closer than *radius*.

    Each neighbour pushes along the line between the two drones, weighted by
    how far it intrudes: (radius - d) / radius.  Coincident drones (d == 0)
    have no defined direction and are skipped.
    """
    sep_x = 0.0
    sep_y = 0.0
    count = 0
    for other in friendlies:
        if other is drone or not other.is_alive:
            continue
        d = drone.distance_to(other.position)
        if 0 < d < radius:
            force = (radius - d) / radius
            sep_x += (drone.position[0] - other.position[0]) / d * force
            sep_y += (drone.position[1] - other.position[1]) / d * force
            count += 1
    if count == 0:
        return (0.0, 0.0)
    return (sep_x * SEPARATION_GAIN, sep_y * SEPARATION_GAIN)


def spawn_offset(formation: Formation | str, index: int, roster_size: int) -> tuple[float, float]:
    """Initial placement near the first patrol slot, to avoid a spawn clump.

    Wedge formations start in a loose zig-zag and sort themselves out
    through patrol and separation.
    """
    formation = Formation(formation)
    if formation is Formation.CIRCLE:
        angle = (index / roster_size) * math.tau if roster_size else 0.0
        return (math.cos(angle) * 150.0, math.sin(angle) * 150.0)
    if formation is Formation.EXTENDED_LINE:
        return ((index - roster_size / 2) * SLOT_SPACING, 0.0)
    if formation is Formation.DOUBLE_FILE:
        return (0.0, (index // 2 - roster_size / 4) * SLOT_SPACING)
    side = 1 if index % 2 == 0 else -1
    return (side * index * 10.0, index * 10.0)
