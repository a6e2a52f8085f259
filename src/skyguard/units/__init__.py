"""Airframe registry -- look up a UnitType by DroneCategory."""
from __future__ import annotations

from .base import Allegiance, CombatStats, DroneCategory, UnitType
from .bomber import Bomber
from .interceptor import Interceptor

_REGISTRY: dict[DroneCategory, type[UnitType]] = {
    Interceptor.category: Interceptor,
    Bomber.category: Bomber,
}


def get_type(category: DroneCategory | str) -> type[UnitType]:
    """Return the UnitType for *category* (enum or its string value)."""
    return _REGISTRY[DroneCategory(category)]


def all_types() -> list[type[UnitType]]:
    return list(_REGISTRY.values())


__all__ = [
    "Allegiance",
    "Bomber",
    "CombatStats",
    "DroneCategory",
    "Interceptor",
    "UnitType",
    "all_types",
    "get_type",
]
