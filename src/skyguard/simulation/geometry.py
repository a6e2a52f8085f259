"""Small 2-D helpers shared by the planners and the combat resolver."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Protocol, TypeVar


class Positioned(Protocol):
    position: tuple[float, float]


P = TypeVar("P", bound=Positioned)


def distance(a: tuple[float, float], b: tuple[float, float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def centroid(items: Iterable[Positioned]) -> tuple[float, float] | None:
    """Mean position of *items*, or None when there are none."""
    xs = 0.0
    ys = 0.0
    n = 0
    for item in items:
        xs += item.position[0]
        ys += item.position[1]
        n += 1
    if n == 0:
        return None
    return (xs / n, ys / n)


def nearest(origin: tuple[float, float], items: Iterable[P]) -> tuple[P | None, float]:
    """Return (closest item, its distance).  First one wins on ties."""
    best: P | None = None
    best_dist = math.inf
    for item in items:
        d = distance(origin, item.position)
        if d < best_dist:
            best = item
            best_dist = d
    return best, best_dist
