from skyguard.units.base import CombatStats, DroneCategory, UnitType


class Bomber(UnitType):
    """Heavy airframe with roughly ten times the interceptor's firepower.

    Hostile bombers fly slower than hostile interceptors; friendly bombers
    keep pace with the friendly swarm.
    """
    category = DroneCategory.BOMBER
    friendly_prefix = "B"
    hostile_prefix = "HB"
    friendly_speed = 2.0
    hostile_speed = 1.2
    combat = CombatStats(
        health=150.0, max_health=150.0,
        weapon_range=50.0, weapon_cooldown=0.1,
        intercept_damage=20.0, defense_damage=15.0, strike_damage=50.0,
    )
