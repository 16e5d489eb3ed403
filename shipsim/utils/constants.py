"""Simulation configuration constants."""

import math

# Time
TICK_HOURS = 1.0  # One tick is one hour; speeds are knots, distances nautical miles

# Navigation tolerances
ARRIVAL_TOLERANCE = 1e-9  # Floating slack on "remaining distance <= one tick of travel"
FUEL_EPSILON = 0.005  # Tons; anything below this is treated as an empty (or full) tank

# Islands
DEFAULT_DOCK_RADIUS = 0.1  # nm
UNLIMITED = math.inf

# Ship types: stats per concrete kind
SHIP_TYPE_STATS = {
    "Tanker": {
        "fuel_capacity": 100.0,
        "max_speed": 10.0,
        "fuel_consumption": 2.0,  # tons per nm
        "resistance": 0,
        "cargo_capacity": 1000.0,
        "cargo_transfer_rate": 250.0,  # tons per tick
    },
    "Cruiser": {
        "fuel_capacity": 1000.0,
        "max_speed": 20.0,
        "fuel_consumption": 10.0,
        "resistance": 6,
        "firepower": 3,
        "weapon_range": 15.0,
        "hit_response": "counter_attack",
    },
    "Torpedo_boat": {
        "fuel_capacity": 800.0,
        "max_speed": 12.0,
        "fuel_consumption": 5.0,
        "resistance": 9,
        "firepower": 3,
        "weapon_range": 5.0,
        "hit_response": "evade",
    },
    "Cruise_ship": {
        "fuel_capacity": 500.0,
        "max_speed": 15.0,
        "fuel_consumption": 2.0,
        "resistance": 0,
        "cruise": True,
    },
}

# Map view
MAP_DEFAULT_SIZE = 25
MAP_MIN_SIZE = 7  # exclusive
MAP_MAX_SIZE = 30
MAP_DEFAULT_SCALE = 2.0
MAP_DEFAULT_ORIGIN = (-10.0, -10.0)

# Bridge view
BRIDGE_VIEW_RANGE = 20.0  # nm
BRIDGE_VIEW_MIN_RANGE = 0.005  # nm; closer objects are "on top of" the ship
BRIDGE_VIEW_COLUMNS = 19
BRIDGE_VIEW_STEP = 10.0  # degrees per column

# Command input
MIN_SHIP_NAME_LENGTH = 2
