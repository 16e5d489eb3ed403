"""Data models for the ship simulation."""

from .capabilities import CargoHold, CargoState, CruiseItinerary, CruisePhase, HitResponse, Weapons
from .entity import Entity
from .errors import DomainError
from .events import EventKind, ShipEvent, TickContext
from .island import Island
from .ship import Ship, ShipState
from .ship_factory import create_ship
from .ship_types import SHIP_TYPES, ShipSpec, get_ship_spec

__all__ = [
    "CargoHold",
    "CargoState",
    "CruiseItinerary",
    "CruisePhase",
    "HitResponse",
    "Weapons",
    "Entity",
    "DomainError",
    "EventKind",
    "ShipEvent",
    "TickContext",
    "Island",
    "Ship",
    "ShipState",
    "create_ship",
    "SHIP_TYPES",
    "ShipSpec",
    "get_ship_spec",
]
