"""Ship data model and per-tick state machine.

A ship is in exactly one ShipState at a time:

    STOPPED              afloat, not moving, not docked
    MOVING_ON_COURSE     manual heading and speed
    MOVING_TO_POSITION   heading for a point
    MOVING_TO_ISLAND     heading for an island; docks there on arrival
    DOCKED               at an island, speed 0
    DEAD_IN_THE_WATER    ran out of fuel; only docking nearby brings it back
    SUNK                 terminal; every command is rejected

Operator commands only change goals; nothing moves until the world calls
update() once per tick. Every command checks all of its preconditions before
changing anything and raises DomainError on the first violation.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..utils.constants import FUEL_EPSILON, TICK_HOURS
from ..utils.navigation import Point, bearing, distance, has_arrived, normalize_heading, project
from .capabilities import CargoHold, CruiseItinerary, Weapons
from .entity import Entity
from .errors import DomainError
from .events import EventKind, TickContext
from .island import Island
from .ship_types import ShipSpec

logger = logging.getLogger(__name__)


class ShipState(Enum):
    """Navigation state of a ship."""

    STOPPED = "stopped"
    MOVING_ON_COURSE = "moving_on_course"
    MOVING_TO_POSITION = "moving_to_position"
    MOVING_TO_ISLAND = "moving_to_island"
    DOCKED = "docked"
    DEAD_IN_THE_WATER = "dead_in_the_water"
    SUNK = "sunk"


MOVING_STATES = frozenset(
    {
        ShipState.MOVING_ON_COURSE,
        ShipState.MOVING_TO_POSITION,
        ShipState.MOVING_TO_ISLAND,
    }
)


@dataclass(eq=False)
class Ship(Entity):
    """A vessel: navigation, fuel and docking, plus composed capabilities.

    Ships start stopped with a full tank. The kind (Tanker, Cruiser, ...) is
    described by spec; cargo, weapons and cruise behaviour come from the
    capability objects the spec creates.
    """

    spec: ShipSpec
    fuel: float = field(init=False, default=0.0)
    resistance: int = field(init=False, default=0)
    state: ShipState = field(init=False, default=ShipState.STOPPED)
    heading: float = field(init=False, default=0.0)
    speed: float = field(init=False, default=0.0)
    destination_point: Optional[Point] = field(init=False, default=None)
    destination_island: Optional[Island] = field(init=False, default=None)
    docked_at: Optional[Island] = field(init=False, default=None)
    cargo: Optional[CargoHold] = field(init=False, default=None)
    weapons: Optional[Weapons] = field(init=False, default=None)
    itinerary: Optional[CruiseItinerary] = field(init=False, default=None)

    def __post_init__(self):
        """Fill the tank and fit the capabilities of this kind."""
        super().__post_init__()
        self.fuel = self.spec.fuel_capacity
        self.resistance = self.spec.resistance
        self.cargo = self.spec.make_cargo_hold()
        self.weapons = self.spec.make_weapons()
        self.itinerary = self.spec.make_itinerary()

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def type_name(self) -> str:
        return self.spec.type_name

    @property
    def max_speed(self) -> float:
        return self.spec.max_speed

    @property
    def fuel_capacity(self) -> float:
        return self.spec.fuel_capacity

    def is_movable(self) -> bool:
        return True

    def is_afloat(self) -> bool:
        return self.state is not ShipState.SUNK

    def is_docked(self) -> bool:
        return self.state is ShipState.DOCKED

    def is_moving(self) -> bool:
        return self.state in MOVING_STATES

    def can_move(self) -> bool:
        return self.is_afloat() and self.state is not ShipState.DEAD_IN_THE_WATER

    def is_attacking(self) -> bool:
        return self.weapons is not None and self.weapons.target_name is not None

    def goal_position(self) -> Optional[Point]:
        """Point the ship is currently steering for, if any."""
        if self.destination_island is not None:
            return self.destination_island.position
        return self.destination_point

    # =========================================================================
    # OPERATOR COMMANDS
    # =========================================================================

    def set_course_and_speed(self, heading: float, speed: float) -> None:
        """Sail on a fixed heading. A docked ship leaves its island."""
        self._check_can_move()
        if not 0.0 <= heading < 360.0:
            raise DomainError("Invalid heading!")
        self._check_speed(speed)

        self._cancel_automation()
        self.docked_at = None
        self._clear_goals()
        self.heading = normalize_heading(heading)
        self.speed = speed
        self.state = ShipState.MOVING_ON_COURSE
        logger.debug("%s will sail on course %.2f degrees at %.2f knots", self.name, heading, speed)

    def set_destination_position_and_speed(self, destination: Point, speed: float) -> None:
        """Sail to a point and stop there."""
        self._check_can_move()
        self._check_travel_speed(speed)

        self._cancel_automation()
        self.head_to_point(destination, speed)
        logger.debug("%s will sail to %s at %.2f knots", self.name, destination, speed)

    def set_destination_island_and_speed(self, island: Island, speed: float) -> None:
        """Sail to an island and dock there. Cruise ships start a cruise."""
        self._check_can_move()
        self._check_island(island)
        self._check_travel_speed(speed)

        self._cancel_automation()
        self.head_to_island(island, speed)
        logger.debug("%s will sail to %s at %.2f knots", self.name, island.name, speed)
        if self.itinerary is not None:
            self.itinerary.start(self, island, speed)

    def set_load_destination(self, island: Island) -> None:
        """Set where a cargo ship loads. Starts the cycle once unloading is set too."""
        hold = self._check_cargo_command(island)
        hold.check_can_set(island, hold.unload_island)
        hold.load_island = island
        logger.debug("%s will load at %s", self.name, island.name)
        if hold.has_route():
            self._start_cargo_cycle(hold)

    def set_unload_destination(self, island: Island) -> None:
        """Set where a cargo ship unloads. Starts the cycle once loading is set too."""
        hold = self._check_cargo_command(island)
        hold.check_can_set(island, hold.load_island)
        hold.unload_island = island
        logger.debug("%s will unload at %s", self.name, island.name)
        if hold.has_route():
            self._start_cargo_cycle(hold)

    def dock(self, island: Island) -> None:
        """Dock at an island within its dock radius (boundary inclusive)."""
        self._check_afloat()
        self._check_island(island)
        if self.is_docked():
            raise DomainError("Ship is already docked!")
        if distance(self.position, island.position) > island.dock_radius:
            raise DomainError("Can't dock, too far!")

        self._cancel_automation()
        self.dock_at(island)
        logger.debug("%s docked at %s", self.name, island.name)

    def refuel(self) -> float:
        """Fill the tank from the island the ship is docked at.

        Returns:
            Tons of fuel taken on
        """
        self._check_afloat()
        if not self.is_docked():
            raise DomainError("Must be docked to refuel!")
        if self.fuel_capacity - self.fuel >= FUEL_EPSILON and not self.docked_at.has_fuel():
            raise DomainError("No fuel available!")

        taken = self.take_on_fuel()
        logger.debug("%s now has %.2f tons of fuel", self.name, self.fuel)
        return taken

    def attack(self, target: "Ship") -> None:
        """Engage another ship. Range is checked each tick, not here."""
        self._check_afloat()
        weapons = self._check_weapons()
        if target is self:
            raise DomainError("Ship may not attack itself!")
        if not isinstance(target, Ship) or not target.is_afloat():
            raise DomainError("Target is not afloat!")
        if weapons.target_name == target.name:
            raise DomainError("Already attacking this target!")

        weapons.target_name = target.name
        logger.debug("%s will attack %s", self.name, target.name)

    def stop_attack(self) -> None:
        self._check_afloat()
        weapons = self._check_weapons()
        if weapons.target_name is None:
            raise DomainError("Was not attacking!")
        weapons.target_name = None
        logger.debug("%s stopping attack", self.name)

    def stop(self) -> None:
        """Drop all goals and halt; heading is kept and a docked ship stays docked."""
        self._check_can_move()
        self._cancel_automation()
        self._clear_goals()
        self.speed = 0.0
        if not self.is_docked():
            self.state = ShipState.STOPPED
        logger.debug("%s stopping at %s", self.name, self.position)

    # =========================================================================
    # STEERING (shared with the capabilities that drive the ship)
    # =========================================================================

    def head_to_point(self, destination: Point, speed: float) -> None:
        self.docked_at = None
        self._clear_goals()
        self.destination_point = destination
        self._steer_for(destination)
        self.speed = speed
        self.state = ShipState.MOVING_TO_POSITION

    def head_to_island(self, island: Island, speed: float) -> None:
        self.docked_at = None
        self._clear_goals()
        self.destination_island = island
        self._steer_for(island.position)
        self.speed = speed
        self.state = ShipState.MOVING_TO_ISLAND

    def dock_at(self, island: Island) -> None:
        self._clear_goals()
        self.position = island.position
        self.speed = 0.0
        self.docked_at = island
        self.state = ShipState.DOCKED

    def take_on_fuel(self) -> float:
        """Top up from the docked island as far as its supply allows."""
        if self.docked_at is None:
            return 0.0
        needed = self.fuel_capacity - self.fuel
        if needed < FUEL_EPSILON:
            self.fuel = self.fuel_capacity
            return 0.0
        taken = self.docked_at.provide_fuel(needed)
        self.fuel += taken
        if self.fuel_capacity - self.fuel < FUEL_EPSILON:
            self.fuel = self.fuel_capacity
        return taken

    def _steer_for(self, destination: Point) -> None:
        if destination != self.position:
            self.heading = bearing(self.position, destination)

    def _clear_goals(self) -> None:
        self.destination_point = None
        self.destination_island = None

    def _cancel_automation(self) -> None:
        if self.cargo is not None:
            self.cargo.clear_route()
        if self.itinerary is not None:
            self.itinerary.cancel()

    def _start_cargo_cycle(self, hold: CargoHold) -> None:
        # Manual goals give way to the route
        if self.itinerary is not None:
            self.itinerary.cancel()
        hold.start_cycle(self)

    # =========================================================================
    # CHECKS
    # =========================================================================

    def _check_afloat(self) -> None:
        if not self.is_afloat():
            raise DomainError("Ship is sunk!")

    def _check_can_move(self) -> None:
        self._check_afloat()
        if not self.can_move():
            raise DomainError("Ship cannot move!")

    def _check_speed(self, speed: float) -> None:
        if speed < 0:
            raise DomainError("Negative speed!")
        if speed > self.max_speed:
            raise DomainError("Ship cannot go that fast!")

    def _check_travel_speed(self, speed: float) -> None:
        self._check_speed(speed)
        if speed == 0:
            raise DomainError("Cannot travel at zero speed!")

    @staticmethod
    def _check_island(island: Island) -> None:
        if not isinstance(island, Island):
            raise DomainError("Unknown island!")

    def _check_cargo_command(self, island: Island) -> CargoHold:
        self._check_afloat()
        if self.cargo is None:
            raise DomainError("Ship cannot carry cargo!")
        self._check_can_move()
        self._check_island(island)
        return self.cargo

    def _check_weapons(self) -> Weapons:
        if self.weapons is None:
            raise DomainError("Ship cannot attack!")
        return self.weapons

    # =========================================================================
    # TICK
    # =========================================================================

    def update(self, ctx: TickContext) -> None:
        """Advance this ship by one tick: move, then cargo, cruise and combat."""
        if not self.is_afloat():
            return
        if self.is_moving():
            self._move(ctx)
        if self.cargo is not None:
            self.cargo.update(self, ctx)
        if self.itinerary is not None:
            self.itinerary.update(self, ctx)
        if self.weapons is not None and self.is_afloat():
            self.weapons.update(self, ctx)

    def _move(self, ctx: TickContext) -> None:
        goal = self.goal_position()
        arriving = False
        travel = self.speed * TICK_HOURS

        if goal is not None:
            self._steer_for(goal)
            if has_arrived(self.position, goal, self.speed):
                arriving = True
                travel = distance(self.position, goal)

        fuel_needed = travel * self.spec.fuel_consumption
        if fuel_needed > self.fuel + FUEL_EPSILON:
            # Burn what is left and drift to a halt partway
            reachable = self.fuel / self.spec.fuel_consumption
            self.position = project(self.position, self.heading, reachable, dt=1.0)
            self.fuel = 0.0
            self._run_dry(ctx)
            return

        self.fuel = max(self.fuel - fuel_needed, 0.0)
        if self.fuel < FUEL_EPSILON:
            self.fuel = 0.0

        if arriving:
            self.position = goal
            self._arrive(ctx)
        else:
            self.position = project(self.position, self.heading, self.speed)
            if self.fuel == 0.0 and self.speed > 0:
                self._run_dry(ctx)

    def _arrive(self, ctx: TickContext) -> None:
        island = self.destination_island
        self.speed = 0.0
        self._clear_goals()
        if island is not None:
            self.dock_at(island)
            ctx.report(self.name, EventKind.ARRIVED, f"{self.name} arrived at {island.name}")
            ctx.report(self.name, EventKind.DOCKED, f"{self.name} docked at {island.name}")
        else:
            self.state = ShipState.STOPPED
            ctx.report(self.name, EventKind.ARRIVED, f"{self.name} arrived at {self.position}")

    def _run_dry(self, ctx: TickContext) -> None:
        self.speed = 0.0
        self._clear_goals()
        self.state = ShipState.DEAD_IN_THE_WATER
        ctx.report(
            self.name,
            EventKind.OUT_OF_FUEL,
            f"{self.name} is out of fuel and dead in the water at {self.position}",
        )

    def receive_hit(self, force: int, attacker_name: str, ctx: TickContext) -> None:
        """Take a hit; sink when resistance is used up, otherwise react."""
        if not self.is_afloat():
            return
        self.resistance -= force
        ctx.report(
            self.name,
            EventKind.HIT,
            f"{self.name} hit by {attacker_name} with {force}, resistance now {self.resistance}",
        )
        if self.resistance <= 0:
            self._sink(ctx)
            return
        if self.weapons is not None:
            self.weapons.on_hit(self, attacker_name, ctx)

    def _sink(self, ctx: TickContext) -> None:
        self._cancel_automation()
        self._clear_goals()
        self.speed = 0.0
        self.docked_at = None
        if self.weapons is not None:
            self.weapons.target_name = None
        self.state = ShipState.SUNK
        ctx.report(self.name, EventKind.SUNK, f"{self.name} sunk at {self.position}")

    # =========================================================================
    # DESCRIPTION / RESTORE
    # =========================================================================

    def describe(self) -> str:
        lines = [
            f"{self.type_name} {self.name} at {self.position}, "
            f"fuel: {self.fuel:.2f} tons, resistance: {self.resistance}"
        ]
        if self.state is ShipState.STOPPED:
            lines.append("Stopped")
        elif self.state is ShipState.DOCKED:
            lines.append(f"Docked at {self.docked_at.name}")
        elif self.state is ShipState.MOVING_ON_COURSE:
            lines.append(f"Moving on course {self.heading:.2f} deg at {self.speed:.2f} knots")
        elif self.state is ShipState.MOVING_TO_POSITION:
            lines.append(f"Moving to {self.destination_point} at {self.speed:.2f} knots")
        elif self.state is ShipState.MOVING_TO_ISLAND:
            lines.append(f"Moving to {self.destination_island.name} at {self.speed:.2f} knots")
        elif self.state is ShipState.DEAD_IN_THE_WATER:
            lines.append("Dead in the water")
        else:
            lines.append("Sunk")

        if self.cargo is not None:
            lines.append(self.cargo.describe())
        if self.weapons is not None:
            lines.append(self.weapons.describe())
        if self.itinerary is not None:
            lines.append(self.itinerary.describe())
        return "\n".join(lines)

    def copy_state_from(self, other: "Ship") -> None:
        """Replace this ship's whole state with other's, keeping this object.

        Used when a saved record overwrites a live ship of the same name.
        """
        if other.name != self.name:
            raise DomainError(f"Cannot restore {self.name} from record of {other.name}")
        vars(self).update(vars(other))
