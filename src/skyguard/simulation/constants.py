"""Shared battlespace constants (simulation units, per-tick speeds)."""

# Ranges
THREATENING_RANGE = 150.0   # hostile counts as a threat to an asset within this
JAMMING_RANGE = 100.0       # friendly suppresses hostile electronics within this

# Jamming
JAM_DAMAGE_PER_TICK = 0.1
JAM_SPEED_FACTOR = 0.2
JAM_SPARK_CHANCE = 0.1

# Engagement policy
ENGAGE_DISTANCE = 200.0     # always engage below this distance
ENGAGE_RATIO_CAP = 0.3      # otherwise engage while fewer than 30% are on it
DEFENSIVE_RADIUS = 100.0    # hold within this distance of the asset centroid
DEFENSIVE_SPEED_FACTOR = 0.5

# Hostile AI
PURSUE_FRIENDLY_FACTOR = 1.5   # chase friendlies inside 1.5 x weapon range
ASSET_STANDOFF_FACTOR = 0.8    # stop closing on an asset inside 0.8 x weapon range

# Autonomous mode (communication down)
AUTONOMOUS_ASSET_CHANCE = 0.7
IDLE_JITTER = 0.5

# Lost / rescue protocol
LOST_DISTANCE = 300.0
RECONNECT_RADIUS = 100.0
RESCUE_SPEED_FACTOR = 0.8

# Movement
ARRIVAL_EPSILON = 1.0       # no move when already this close to the goal
TRAIL_LENGTH = 10
