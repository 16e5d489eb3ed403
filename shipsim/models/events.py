"""Events reported by ships while the world advances.

A TickContext is handed to every ship during one tick. It carries the
pre-tick position snapshot used for range checks, gives ships name-based
access to the rest of the world, and collects the events they report.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ..utils.navigation import Point

if TYPE_CHECKING:
    from ..engine.world import World

logger = logging.getLogger(__name__)


class EventKind(Enum):
    """Classification of ship events."""

    ARRIVED = "arrived"
    DOCKED = "docked"
    OUT_OF_FUEL = "out_of_fuel"
    CARGO = "cargo"
    CRUISE = "cruise"
    FIRED = "fired"
    HIT = "hit"
    COUNTER_ATTACK = "counter_attack"
    EVASIVE_ACTION = "evasive_action"
    LOST_TARGET = "lost_target"
    SUNK = "sunk"


@dataclass
class ShipEvent:
    """Record of something that happened to a ship during a tick.

    Attributes:
        tick: World time at which the event happened
        ship: Name of the ship the event is about
        kind: Event classification
        message: Human-readable description
    """

    tick: int
    ship: str
    kind: EventKind
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class TickContext:
    """Shared state for one world tick."""

    tick: int
    world: "World"
    positions: dict[str, Point]  # Ship positions before anyone moved this tick
    events: list[ShipEvent] = field(default_factory=list)

    def position_before_tick(self, ship) -> Point:
        return self.positions.get(ship.name, ship.position)

    def report(self, ship_name: str, kind: EventKind, message: str) -> None:
        """Record and log an event."""
        self.events.append(ShipEvent(tick=self.tick, ship=ship_name, kind=kind, message=message))
        logger.debug(message)
