"""Standard starting world."""

from ..models.island import Island
from ..models.ship_factory import create_ship
from ..utils.navigation import Point
from .world import World

# (name, x, y, fuel)
DEFAULT_ISLANDS = [
    ("Exxon", 10.0, 10.0, 1000.0),
    ("Shell", 0.0, 30.0, 1000.0),
    ("Bermuda", 20.0, 20.0, 0.0),
    ("Treasure_Island", 50.0, 5.0, 100.0),
]

# (name, type, x, y)
DEFAULT_SHIPS = [
    ("Ajax", "Cruiser", 15.0, 15.0),
    ("Xerxes", "Cruiser", 25.0, 25.0),
    ("Valdez", "Tanker", 30.0, 30.0),
]


def create_default_world() -> World:
    """Build the world the simulation normally starts with.

    Four islands (Exxon, Shell, Bermuda, Treasure_Island) and three ships
    (cruisers Ajax and Xerxes, tanker Valdez), at time 0.

    Returns:
        New World instance with no observers attached
    """
    world = World()
    for name, x, y, fuel in DEFAULT_ISLANDS:
        world.add_island(Island(name=name, position=Point(x, y), fuel=fuel))
    for name, type_name, x, y in DEFAULT_SHIPS:
        world.add_ship(create_ship(name, type_name, Point(x, y)))
    return world
