from skyguard.units.base import CombatStats, DroneCategory, UnitType


class Interceptor(UnitType):
    """Light, fast airframe.  Backbone of both swarms."""
    category = DroneCategory.INTERCEPTOR
    friendly_prefix = "F"
    hostile_prefix = "H"
    friendly_speed = 2.0
    hostile_speed = 1.5
    combat = CombatStats(
        health=100.0, max_health=100.0,
        weapon_range=50.0, weapon_cooldown=0.1,
        intercept_damage=2.0, defense_damage=1.5, strike_damage=5.0,
    )
