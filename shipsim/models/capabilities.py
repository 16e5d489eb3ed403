"""Capabilities composed into concrete ship kinds.

A ship kind is a Ship plus whichever of these it carries:

- CargoHold: hauls fuel between a loading and an unloading island (Tanker)
- Weapons: attacks other ships and reacts to being hit (Cruiser, Torpedo_boat)
- CruiseItinerary: tours every island once and returns home (Cruise_ship)

Each capability keeps its own sub-state and is advanced by Ship.update()
after the ship has moved for the tick.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

from ..utils.constants import FUEL_EPSILON
from ..utils.navigation import distance
from .errors import DomainError
from .events import EventKind, TickContext
from .island import Island

if TYPE_CHECKING:
    from .ship import Ship

logger = logging.getLogger(__name__)


class HitResponse(Enum):
    """How an armed ship reacts when hit and still afloat."""

    NONE = "none"
    COUNTER_ATTACK = "counter_attack"
    EVADE = "evade"


class CargoState(Enum):
    """Stage of a tanker's load/unload cycle."""

    NO_CARGO_DESTINATIONS = "no_cargo_destinations"
    MOVING_TO_LOADING = "moving_to_loading"
    LOADING = "loading"
    MOVING_TO_UNLOADING = "moving_to_unloading"
    UNLOADING = "unloading"


class CruisePhase(Enum):
    """Stage of a cruise ship's island tour."""

    IDLE = "idle"
    SAILING = "sailing"
    REFUELING = "refueling"
    SIGHTSEEING = "sightseeing"
    DEPARTING = "departing"
    RETURNING = "returning"


def _is_at(ship: "Ship", island: Island) -> bool:
    """True if the ship is docked at, or could dock at, the island."""
    if ship.docked_at is island:
        return True
    return distance(ship.position, island.position) <= island.dock_radius


@dataclass
class CargoHold:
    """Fuel cargo hold with an automatic load/unload route.

    Once both a loading and an unloading island are set, the ship cycles on
    its own: sail to the loading island, load at transfer_rate tons per tick
    until full, sail to the unloading island, unload until empty, repeat.
    """

    capacity: float
    transfer_rate: float  # Tons per tick
    cargo: float = 0.0
    load_island: Optional[Island] = None
    unload_island: Optional[Island] = None
    state: CargoState = CargoState.NO_CARGO_DESTINATIONS

    def has_route(self) -> bool:
        return self.load_island is not None and self.unload_island is not None

    def is_cycling(self) -> bool:
        return self.state is not CargoState.NO_CARGO_DESTINATIONS

    def check_can_set(self, island: Island, other: Optional[Island]) -> None:
        if self.is_cycling():
            raise DomainError("Tanker has cargo destinations!")
        if island is other:
            raise DomainError("Load and unload cargo destinations are the same!")

    def clear_route(self) -> None:
        if self.load_island is not None or self.unload_island is not None:
            logger.debug("Cargo route %s -> %s cleared", self.load_island, self.unload_island)
        self.load_island = None
        self.unload_island = None
        self.state = CargoState.NO_CARGO_DESTINATIONS

    def start_cycle(self, ship: "Ship") -> None:
        """Pick the first leg of the route from where the ship is now."""
        loaded = self.cargo >= FUEL_EPSILON
        if not loaded and _is_at(ship, self.load_island):
            ship.dock_at(self.load_island)
            self.state = CargoState.LOADING
        elif loaded and _is_at(ship, self.unload_island):
            ship.dock_at(self.unload_island)
            self.state = CargoState.UNLOADING
        elif not loaded:
            ship.head_to_island(self.load_island, ship.max_speed)
            self.state = CargoState.MOVING_TO_LOADING
        else:
            ship.head_to_island(self.unload_island, ship.max_speed)
            self.state = CargoState.MOVING_TO_UNLOADING
        logger.debug("%s starting cargo cycle: %s", ship.name, self.state.value)

    def update(self, ship: "Ship", ctx: TickContext) -> None:
        """Advance the cargo cycle by one tick."""
        if not self.is_cycling() or not ship.can_move():
            return

        if self.state is CargoState.MOVING_TO_LOADING:
            if ship.docked_at is self.load_island:
                self.state = CargoState.LOADING
                ctx.report(ship.name, EventKind.CARGO, f"{ship.name} ready to load at {self.load_island.name}")

        elif self.state is CargoState.LOADING:
            ship.take_on_fuel()
            needed = self.capacity - self.cargo
            if needed < FUEL_EPSILON:
                self.cargo = self.capacity
                ship.head_to_island(self.unload_island, ship.max_speed)
                self.state = CargoState.MOVING_TO_UNLOADING
                ctx.report(
                    ship.name,
                    EventKind.CARGO,
                    f"{ship.name} fully loaded, heading for {self.unload_island.name}",
                )
            else:
                granted = self.load_island.provide_fuel(min(self.transfer_rate, needed))
                self.cargo += granted
                ctx.report(
                    ship.name,
                    EventKind.CARGO,
                    f"{ship.name} loaded {granted:.2f} tons at {self.load_island.name}, "
                    f"cargo now {self.cargo:.2f} tons",
                )

        elif self.state is CargoState.MOVING_TO_UNLOADING:
            if ship.docked_at is self.unload_island:
                self.state = CargoState.UNLOADING
                ctx.report(ship.name, EventKind.CARGO, f"{ship.name} ready to unload at {self.unload_island.name}")

        elif self.state is CargoState.UNLOADING:
            if self.cargo < FUEL_EPSILON:
                self.cargo = 0.0
                ship.head_to_island(self.load_island, ship.max_speed)
                self.state = CargoState.MOVING_TO_LOADING
                ctx.report(
                    ship.name,
                    EventKind.CARGO,
                    f"{ship.name} unloaded, heading for {self.load_island.name}",
                )
            else:
                accepted = self.unload_island.accept_fuel(min(self.transfer_rate, self.cargo))
                self.cargo -= accepted
                ctx.report(
                    ship.name,
                    EventKind.CARGO,
                    f"{ship.name} unloaded {accepted:.2f} tons at {self.unload_island.name}, "
                    f"cargo now {self.cargo:.2f} tons",
                )

    def describe(self) -> str:
        line = f"Cargo: {self.cargo:.2f} tons"
        if self.state is CargoState.MOVING_TO_LOADING:
            line += f", moving to load at {self.load_island.name}"
        elif self.state is CargoState.LOADING:
            line += f", loading at {self.load_island.name}"
        elif self.state is CargoState.MOVING_TO_UNLOADING:
            line += f", moving to unload at {self.unload_island.name}"
        elif self.state is CargoState.UNLOADING:
            line += f", unloading at {self.unload_island.name}"
        else:
            line += ", no cargo destinations"
        return line


@dataclass
class Weapons:
    """Guns with a fixed firepower and range, plus an optional target.

    The target is held by name only and re-resolved through the world every
    tick. Range is checked every tick against pre-tick positions, never at
    the moment the attack order is accepted.
    """

    firepower: int
    range: float  # nm
    hit_response: HitResponse = HitResponse.NONE
    target_name: Optional[str] = None

    def update(self, ship: "Ship", ctx: TickContext) -> None:
        """Fire one round at the target if it is still there and in range."""
        if self.target_name is None:
            return

        target = ctx.world.find_ship(self.target_name)
        if target is None or not target.is_afloat():
            lost = self.target_name
            self.target_name = None
            ctx.report(ship.name, EventKind.LOST_TARGET, f"{ship.name} lost target {lost}: target is gone")
            return

        gap = distance(ctx.position_before_tick(ship), ctx.position_before_tick(target))
        if gap > self.range:
            self.target_name = None
            ctx.report(
                ship.name,
                EventKind.LOST_TARGET,
                f"{ship.name} lost target {target.name}: target is out of range",
            )
            return

        ctx.report(ship.name, EventKind.FIRED, f"{ship.name} fires at {target.name}")
        target.receive_hit(self.firepower, ship.name, ctx)

    def on_hit(self, ship: "Ship", attacker_name: str, ctx: TickContext) -> None:
        """React to surviving a hit from attacker_name."""
        attacker = ctx.world.find_ship(attacker_name)
        if attacker is None or not attacker.is_afloat():
            return

        if self.hit_response is HitResponse.COUNTER_ATTACK:
            if self.target_name is None:
                self.target_name = attacker_name
                ctx.report(
                    ship.name,
                    EventKind.COUNTER_ATTACK,
                    f"{ship.name} counter-attacks {attacker_name}",
                )

        elif self.hit_response is HitResponse.EVADE:
            islands = ctx.world.islands
            if not islands or not ship.can_move():
                return
            threat = ctx.position_before_tick(attacker)
            refuge = max(islands, key=lambda island: (distance(island.position, threat), island.name))
            self.target_name = None
            ship.head_to_island(refuge, ship.max_speed)
            ctx.report(
                ship.name,
                EventKind.EVASIVE_ACTION,
                f"{ship.name} takes evasive action, heading for {refuge.name}",
            )

    def describe(self) -> str:
        if self.target_name is None:
            return "Not attacking"
        return f"Attacking {self.target_name}"


@dataclass
class CruiseItinerary:
    """Island tour: visit every island once, nearest first, then return home.

    At each stop the ship spends the arrival tick docking, one tick
    refueling, one tick sightseeing, and leaves on the next tick.
    """

    origin: Optional[Island] = None
    speed: float = 0.0
    stop: Optional[Island] = None  # Island being sailed to or docked at
    visited: list[str] = field(default_factory=list)
    phase: CruisePhase = CruisePhase.IDLE

    def is_active(self) -> bool:
        return self.phase is not CruisePhase.IDLE

    def start(self, ship: "Ship", island: Island, speed: float) -> None:
        self.origin = island
        self.stop = island
        self.speed = speed
        self.visited = []
        self.phase = CruisePhase.SAILING
        logger.debug("%s cruise will start and end at %s", ship.name, island.name)

    def cancel(self) -> None:
        if self.is_active():
            logger.debug("Cruise from %s cancelled", self.origin.name)
        self.origin = None
        self.stop = None
        self.speed = 0.0
        self.visited = []
        self.phase = CruisePhase.IDLE

    def update(self, ship: "Ship", ctx: TickContext) -> None:
        """Advance the tour by one tick."""
        if not self.is_active() or not ship.can_move():
            return

        if self.phase is CruisePhase.RETURNING:
            if ship.docked_at is self.origin:
                home = self.origin.name
                self.cancel()
                ctx.report(ship.name, EventKind.CRUISE, f"{ship.name} cruise is over at {home}")

        elif self.phase is CruisePhase.SAILING:
            if ship.docked_at is self.stop:
                self.visited.append(self.stop.name)
                self.phase = CruisePhase.REFUELING

        elif self.phase is CruisePhase.REFUELING:
            ship.take_on_fuel()
            self.phase = CruisePhase.SIGHTSEEING
            ctx.report(ship.name, EventKind.CRUISE, f"{ship.name} refueled at {self.stop.name}")

        elif self.phase is CruisePhase.SIGHTSEEING:
            self.phase = CruisePhase.DEPARTING
            ctx.report(ship.name, EventKind.CRUISE, f"{ship.name} passengers sightseeing at {self.stop.name}")

        elif self.phase is CruisePhase.DEPARTING:
            remaining = [island for island in ctx.world.islands if island.name not in self.visited]
            if remaining:
                self.stop = min(
                    remaining,
                    key=lambda island: (distance(ship.position, island.position), island.name),
                )
                self.phase = CruisePhase.SAILING
            else:
                self.stop = self.origin
                self.phase = CruisePhase.RETURNING
            ship.head_to_island(self.stop, self.speed)
            ctx.report(ship.name, EventKind.CRUISE, f"{ship.name} will visit {self.stop.name}")

    def describe(self) -> str:
        if self.phase in (CruisePhase.SAILING, CruisePhase.RETURNING):
            return f"On cruise to {self.stop.name}"
        if self.is_active():
            return f"Waiting during cruise at {self.stop.name}"
        return "Not on a cruise"
