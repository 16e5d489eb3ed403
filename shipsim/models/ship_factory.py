"""Ship factory: build a ship of a named kind."""

from ..utils.navigation import Point
from .ship import Ship
from .ship_types import get_ship_spec


def create_ship(name: str, type_name: str, position: Point) -> Ship:
    """Create a ship of the given kind, stopped with a full tank.

    Args:
        name: Ship name (unique within the world)
        type_name: One of the SHIP_TYPES keys, e.g. "Tanker" or "Cruiser"
        position: Starting position

    Raises:
        DomainError: If type_name is not a known ship kind
    """
    return Ship(name=name, position=position, spec=get_ship_spec(type_name))
